"""Domain service: contract dates and order pricing.

Pure functions over the Order and the Catalog. Nothing here mutates
state; the stages call in for live display and again at submit time.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date, timedelta
from typing import TYPE_CHECKING

from order_wizard.domain.exceptions import ValidationError
from order_wizard.domain.model.catalog import AddOn, Catalog
from order_wizard.domain.model.value_objects import Money, Quantity

if TYPE_CHECKING:  # the Order aggregate imports this module for date checks
    from order_wizard.domain.model.order import AddOnSelection, Order


def add_months(day: date, months: int) -> date:
    """Shift *day* by whole calendar months.

    The day of month is clamped to the last day of the target month, so
    Jan 31 + 1 month is Feb 29 in a leap year and Feb 28 otherwise.
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def contract_end_date(start: date, months: int) -> date:
    """Inclusive last day of a contract running *months* from *start*."""
    if isinstance(months, bool) or not isinstance(months, int) or months < 1:
        raise ValidationError("contractPeriod", "Contract period must be at least 1 month")
    return add_months(start, months) - timedelta(days=1)


def add_on_line_total(add_on: AddOn, quantity: Quantity) -> Money:
    return add_on.price * quantity.value


def add_ons_total(selections: Iterable[AddOnSelection], catalog: Catalog) -> Money:
    """Sum of price × quantity over the selected add-ons.

    Selections the catalog does not know contribute nothing.
    """
    total = Money.zero()
    for selection in selections:
        add_on = catalog.get_add_on(selection.add_on_id)
        if add_on is None:
            continue
        total = total + add_on_line_total(add_on, selection.quantity)
    return total


def order_total(order: Order, catalog: Catalog) -> Money:
    """Plan price (zero when none is chosen yet) plus all add-ons."""
    plan_price = order.custom_plan_price
    if plan_price is None:
        plan_price = Money.zero()
    return plan_price + add_ons_total(order.selected_add_ons, catalog)
