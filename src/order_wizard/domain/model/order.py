"""Order aggregate — the record the wizard builds up stage by stage.

The Order owns its add-on selections. Every change goes through
``Order.apply()`` which merges a partial ``OrderUpdate`` all-or-nothing.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any

from order_wizard.domain.exceptions import ValidationError
from order_wizard.domain.model.catalog import Catalog
from order_wizard.domain.model.value_objects import Address, Money, Quantity
from order_wizard.domain.service.pricing import contract_end_date


class _Unset:
    """Marker for fields an OrderUpdate leaves untouched."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __deepcopy__(self, memo: dict) -> _Unset:
        return self


UNSET: Any = _Unset()


@dataclass(frozen=True)
class AddOnSelection:
    add_on_id: str
    quantity: Quantity


@dataclass(frozen=True)
class OrderUpdate:
    """Partial update produced by a stage.

    ``None`` is a real value (it clears the field); ``UNSET`` means
    "leave as is".
    """

    customer_name: str = UNSET
    customer_address: Address | None = UNSET
    selected_plan_id: str | None = UNSET
    custom_plan_price: Money | None = UNSET
    start_date: date | None = UNSET
    contract_period_in_months: int = UNSET
    end_date: date | None = UNSET
    selected_add_ons: tuple[AddOnSelection, ...] = UNSET

    def changes(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


# ---------------------------------------------------------------------------
# Defaults for a fresh session
# ---------------------------------------------------------------------------
DEFAULT_CONTRACT_PERIOD_MONTHS = 12


@dataclass
class Order:
    """Aggregate root for the order being configured.

    Create it empty with ``Order()``; mutate it only through ``apply()``.
    """

    customer_name: str = ""
    customer_address: Address | None = None
    selected_plan_id: str | None = None
    custom_plan_price: Money | None = None
    start_date: date | None = None
    contract_period_in_months: int = DEFAULT_CONTRACT_PERIOD_MONTHS
    end_date: date | None = None
    selected_add_ons: list[AddOnSelection] = field(default_factory=list)

    # --- Merge ----------------------------------------------------------------

    def apply(self, update: OrderUpdate, catalog: Catalog) -> None:
        """Merge *update* into this order.

        The merged state is checked in full before anything is assigned,
        so a rejected update leaves the order exactly as it was.
        """
        changes = update.changes()
        if "selected_add_ons" in changes:
            changes["selected_add_ons"] = list(changes["selected_add_ons"])

        merged = copy.copy(self)
        for name, value in changes.items():
            setattr(merged, name, value)

        end_date_given = "end_date" in changes
        merged._check_invariants(catalog, end_date_given)

        for name in changes:
            setattr(self, name, getattr(merged, name))
        self.end_date = merged.end_date

    def snapshot(self) -> Order:
        """Detached copy for read-only callers."""
        return copy.deepcopy(self)

    # --- Computed properties --------------------------------------------------

    def quantity_of(self, add_on_id: str) -> Quantity | None:
        for selection in self.selected_add_ons:
            if selection.add_on_id == add_on_id:
                return selection.quantity
        return None

    # --- Internal helpers -----------------------------------------------------

    def _check_invariants(self, catalog: Catalog, end_date_given: bool) -> None:
        if self.selected_plan_id is not None and catalog.find_plan(self.selected_plan_id) is None:
            raise ValidationError(
                "selectedPlanId", f"Plan '{self.selected_plan_id}' is not in the catalog"
            )

        months = self.contract_period_in_months
        if isinstance(months, bool) or not isinstance(months, int) or months < 1:
            raise ValidationError(
                "contractPeriodInMonths", "Contract period must be at least 1 month"
            )

        # The end date is derived; a supplied one must agree with it.
        if self.start_date is None:
            if end_date_given and self.end_date is not None:
                raise ValidationError("endDate", "End date requires a start date")
            self.end_date = None
        else:
            expected = contract_end_date(self.start_date, months)
            if end_date_given and self.end_date is not None and self.end_date != expected:
                raise ValidationError(
                    "endDate", f"End date must be {expected.isoformat()}"
                )
            self.end_date = expected

        seen: set[str] = set()
        for selection in self.selected_add_ons:
            if selection.add_on_id in seen:
                raise ValidationError(
                    "selectedAddOns", f"Add-on '{selection.add_on_id}' selected twice"
                )
            if catalog.get_add_on(selection.add_on_id) is None:
                raise ValidationError(
                    "selectedAddOns", f"Add-on '{selection.add_on_id}' is not in the catalog"
                )
            seen.add(selection.add_on_id)
