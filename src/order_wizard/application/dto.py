"""Data Transfer Objects — plain containers that cross layer boundaries.

Inputs carry raw form values from the rendering layer into the stages;
outputs carry formatted values back out without exposing the Order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


# --- Stage inputs ---------------------------------------------------------------


@dataclass(frozen=True)
class AddressInput:
    address_line1: str = ""
    address_line2: str | None = None
    city: str = ""
    state: str = ""
    zip_code: str = ""


@dataclass(frozen=True)
class CustomerInfoInput:
    customer_name: str
    pre_populate: bool = False
    address: AddressInput | None = None


@dataclass(frozen=True)
class ProductSelectionInput:
    product_line_id: str
    selected_plan_id: str
    custom_price: str | float | int | None = None


@dataclass(frozen=True)
class ContractTermsInput:
    start_date: str | date
    contract_period: str
    custom_duration: int | str | None = None


@dataclass(frozen=True)
class AddOnInput:
    add_on_id: str
    quantity: int | str = 1


# --- Outputs --------------------------------------------------------------------


@dataclass(frozen=True)
class AddOnLineDTO:
    """Output: a selected add-on as displayed in the review."""

    add_on_id: str
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$25.00"
    line_total: str
    price_label: str


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: the review / finalized view of the order."""

    customer_name: str
    customer_address: list[str] | None
    product_name: str | None
    plan_id: str | None
    plan_name: str | None
    plan_price: str | None
    price_interval: str | None
    start_date: str | None
    end_date: str | None
    contract_period_in_months: int
    add_ons: list[AddOnLineDTO] = field(default_factory=list)
    add_ons_total: str = "$0.00"
    total: str = "$0.00"
    finalized: bool = False
