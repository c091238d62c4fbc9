"""Stage 4: add-on selection, live totals, and the finalize toggle.

Checked ids and remembered quantities are transient: unchecking keeps
the quantity so re-checking restores it. Every edit pushes the full
selection list into the Order through the session's merge callback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from order_wizard.domain.exceptions import ValidationError
from order_wizard.domain.model.catalog import Catalog
from order_wizard.domain.model.order import AddOnSelection, Order, OrderUpdate
from order_wizard.domain.model.value_objects import Money, Quantity
from order_wizard.domain.service.pricing import add_ons_total, order_total

logger = logging.getLogger(__name__)

DEFAULT_QUANTITY = Quantity(1)


class AddOnSelectionStage:

    def __init__(
        self,
        catalog: Catalog,
        order: Order,
        commit: Callable[[OrderUpdate], None],
    ) -> None:
        self._catalog = catalog
        self._order = order
        self._commit = commit
        self._checked: list[str] = [s.add_on_id for s in order.selected_add_ons]
        self._quantities: dict[str, Quantity] = {
            s.add_on_id: s.quantity for s in order.selected_add_ons
        }
        self._finalized = False

    # --- Editing --------------------------------------------------------------

    def check(self, add_on_id: str) -> None:
        self._require_known(add_on_id)
        if add_on_id not in self._checked:
            self._checked.append(add_on_id)
        self._quantities.setdefault(add_on_id, DEFAULT_QUANTITY)
        self._sync()

    def uncheck(self, add_on_id: str) -> None:
        self._require_known(add_on_id)
        if add_on_id in self._checked:
            self._checked.remove(add_on_id)
        self._sync()

    def toggle(self, add_on_id: str, checked: bool) -> None:
        if checked:
            self.check(add_on_id)
        else:
            self.uncheck(add_on_id)

    def set_quantity(self, add_on_id: str, raw: object) -> Quantity:
        """Record a quantity; non-numeric input counts as zero."""
        self._require_known(add_on_id)
        quantity = Quantity.parse(raw)
        self._quantities[add_on_id] = quantity
        self._sync()
        return quantity

    def replace(self, selections: list[AddOnSelection]) -> None:
        """Set the whole selection at once."""
        for selection in selections:
            self._require_known(selection.add_on_id)
        self._checked = []
        for selection in selections:
            if selection.add_on_id not in self._checked:
                self._checked.append(selection.add_on_id)
            self._quantities[selection.add_on_id] = selection.quantity
        self._sync()

    # --- Queries --------------------------------------------------------------

    def is_checked(self, add_on_id: str) -> bool:
        return add_on_id in self._checked

    def quantity_of(self, add_on_id: str) -> Quantity:
        return self._quantities.get(add_on_id, DEFAULT_QUANTITY)

    def selections(self) -> list[AddOnSelection]:
        return [
            AddOnSelection(add_on_id=add_on_id, quantity=self.quantity_of(add_on_id))
            for add_on_id in self._checked
        ]

    def add_ons_total(self) -> Money:
        return add_ons_total(self.selections(), self._catalog)

    def total(self) -> Money:
        return order_total(self._order, self._catalog)

    # --- Finalize -------------------------------------------------------------

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def finalize(self) -> None:
        self._finalized = True
        logger.info("Order for %r finalized", self._order.customer_name)

    def back_to_review(self) -> None:
        self._finalized = False

    # --- Internal helpers -----------------------------------------------------

    def _require_known(self, add_on_id: str) -> None:
        if self._catalog.get_add_on(add_on_id) is None:
            raise ValidationError("selectedAddOns", f"Unknown add-on '{add_on_id}'")

    def _sync(self) -> None:
        self._commit(OrderUpdate(selected_add_ons=tuple(self.selections())))
