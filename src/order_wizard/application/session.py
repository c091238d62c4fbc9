"""Application service: the order-configuration session.

The single entry point for the rendering layer. Owns the Order, the
stage controller, and whichever stage component is active. The session
is an explicit object handed to callers; there is no module-level state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from order_wizard.application.add_on_selection import AddOnSelectionStage
from order_wizard.application.contract_terms import ContractTermsStage
from order_wizard.application.customer_info import CustomerInfoStage
from order_wizard.application.dto import (
    AddOnInput,
    AddOnLineDTO,
    ContractTermsInput,
    CustomerInfoInput,
    OrderSummaryDTO,
    ProductSelectionInput,
)
from order_wizard.application.product_selection import ProductSelectionStage
from order_wizard.application.stage_controller import Stage, StageController
from order_wizard.domain.exceptions import StageValidationError, ValidationError
from order_wizard.domain.model.catalog import Catalog
from order_wizard.domain.model.order import AddOnSelection, Order, OrderUpdate
from order_wizard.domain.model.value_objects import Quantity
from order_wizard.domain.service.pricing import add_on_line_total, add_ons_total, order_total

logger = logging.getLogger(__name__)

_INPUT_TYPES = {
    Stage.CUSTOMER_INFO: CustomerInfoInput,
    Stage.PRODUCT_SELECTION: ProductSelectionInput,
    Stage.CONTRACT_TERMS: ContractTermsInput,
}


def _is_add_on_list(raw: object) -> bool:
    return (
        isinstance(raw, Sequence)
        and not isinstance(raw, (str, bytes))
        and all(isinstance(item, AddOnInput) for item in raw)
    )


class OrderSession:

    def __init__(self, catalog: Catalog, enforce_stage_order: bool = False) -> None:
        self._catalog = catalog
        self._controller = StageController(enforce_order=enforce_stage_order)
        self._order = Order()
        self._customer_info = CustomerInfoStage()
        self._contract_terms = ContractTermsStage()
        self._product_selection: ProductSelectionStage | None = None
        self._add_on_selection: AddOnSelectionStage | None = None

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    # --- Queries --------------------------------------------------------------

    def get_order(self) -> Order:
        return self._order.snapshot()

    def get_current_stage(self) -> int:
        return int(self._controller.current)

    def is_stage_complete(self, number: int) -> bool:
        return self._controller.is_complete(Stage.from_number(number))

    # --- Navigation -----------------------------------------------------------

    def advance(self) -> int:
        return self._navigate(self._controller.advance)

    def retreat(self) -> int:
        return self._navigate(self._controller.retreat)

    def go_to(self, number: int) -> int:
        return self._navigate(lambda: self._controller.go_to(number))

    def reset(self) -> None:
        self._order = Order()
        self._controller.reset()
        self._product_selection = None
        self._add_on_selection = None
        logger.info("Session reset")

    # --- Stage components -----------------------------------------------------

    @property
    def product_selection(self) -> ProductSelectionStage:
        """Stage 2 component; one override session per visit to the stage."""
        if self._product_selection is None:
            self._product_selection = ProductSelectionStage(self._catalog, self._order)
        return self._product_selection

    @property
    def contract_terms(self) -> ContractTermsStage:
        return self._contract_terms

    @property
    def add_on_selection(self) -> AddOnSelectionStage:
        """Stage 4 component, seeded from the add-ons already on the order."""
        if self._add_on_selection is None:
            self._add_on_selection = AddOnSelectionStage(
                self._catalog, self._order, self._merge
            )
        return self._add_on_selection

    # --- Submit ---------------------------------------------------------------

    def submit_stage(self, number: int, raw: object) -> OrderUpdate:
        """Validate *raw* for stage *number*, merge it, and move on.

        Raises StageValidationError with every failing field; the order
        and the current stage are left untouched in that case. With stage
        order enforced, a submit that could not advance raises
        StageIncompleteError before anything is merged.
        """
        stage = Stage.from_number(number)
        expected = _INPUT_TYPES.get(stage)
        if expected is not None and not isinstance(raw, expected):
            raise TypeError(
                f"Stage {int(stage)} expects {expected.__name__}, got {type(raw).__name__}"
            )
        if stage == Stage.REVIEW and not _is_add_on_list(raw):
            raise TypeError(
                f"Stage 4 expects a sequence of AddOnInput, got {type(raw).__name__}"
            )

        try:
            if stage == Stage.CUSTOMER_INFO:
                update = self._customer_info.validate(raw)  # type: ignore[arg-type]
            elif stage == Stage.PRODUCT_SELECTION:
                update = self.product_selection.validate(raw)  # type: ignore[arg-type]
            elif stage == Stage.CONTRACT_TERMS:
                update = self._contract_terms.validate(raw)  # type: ignore[arg-type]
            else:
                update = self._submit_add_ons(raw)  # type: ignore[arg-type]
            if stage != Stage.REVIEW:
                self._controller.check_advance(after_completing=stage)
            self._merge(update)
        except StageValidationError as exc:
            logger.warning("Stage %d rejected: %s", int(stage), ", ".join(exc.fields))
            raise

        self._controller.mark_complete(stage)
        if stage != Stage.REVIEW:
            self.advance()
        elif self._controller.current == Stage.REVIEW:
            self.add_on_selection.finalize()
        else:
            # Committed from another stage; the review view opens fresh.
            self._add_on_selection = None
        return update

    def finalize(self) -> OrderSummaryDTO:
        self.add_on_selection.finalize()
        self._controller.mark_complete(Stage.REVIEW)
        return self.summary()

    def back_to_review(self) -> None:
        self.add_on_selection.back_to_review()

    # --- Review ---------------------------------------------------------------

    def summary(self) -> OrderSummaryDTO:
        order = self._order
        plan = product = None
        if order.selected_plan_id is not None:
            plan = self._catalog.find_plan(order.selected_plan_id)
            product = self._catalog.product_for_plan(order.selected_plan_id)

        lines: list[AddOnLineDTO] = []
        for selection in order.selected_add_ons:
            add_on = self._catalog.get_add_on(selection.add_on_id)
            if add_on is None:
                continue
            lines.append(
                AddOnLineDTO(
                    add_on_id=add_on.id,
                    name=add_on.name,
                    quantity=selection.quantity.value,
                    unit_price=str(add_on.price),
                    line_total=str(add_on_line_total(add_on, selection.quantity)),
                    price_label=add_on.price_label,
                )
            )

        finalized = (
            self._add_on_selection is not None and self._add_on_selection.is_finalized
        )
        return OrderSummaryDTO(
            customer_name=order.customer_name,
            customer_address=order.customer_address.lines() if order.customer_address else None,
            product_name=product.name if product else None,
            plan_id=order.selected_plan_id,
            plan_name=plan.name if plan else None,
            plan_price=str(order.custom_plan_price) if order.custom_plan_price is not None else None,
            price_interval=plan.price_interval.value if plan else None,
            start_date=order.start_date.isoformat() if order.start_date else None,
            end_date=order.end_date.isoformat() if order.end_date else None,
            contract_period_in_months=order.contract_period_in_months,
            add_ons=lines,
            add_ons_total=str(add_ons_total(order.selected_add_ons, self._catalog)),
            total=str(order_total(order, self._catalog)),
            finalized=finalized,
        )

    # --- Internal helpers -----------------------------------------------------

    def _merge(self, update: OrderUpdate) -> None:
        """The one path through which the Order changes."""
        try:
            self._order.apply(update, self._catalog)
        except ValidationError as exc:
            raise StageValidationError([exc]) from exc
        logger.debug("Merged %s", sorted(update.changes()))

    def _submit_add_ons(self, raw: Sequence[AddOnInput]) -> OrderUpdate:
        errors: list[ValidationError] = []
        selections: list[AddOnSelection] = []
        seen: set[str] = set()
        for index, item in enumerate(raw):
            field = f"selectedAddOns[{index}].addOnId"
            if self._catalog.get_add_on(item.add_on_id) is None:
                errors.append(ValidationError(field, f"Unknown add-on '{item.add_on_id}'"))
                continue
            if item.add_on_id in seen:
                errors.append(ValidationError(field, f"Add-on '{item.add_on_id}' listed twice"))
                continue
            seen.add(item.add_on_id)
            selections.append(
                AddOnSelection(add_on_id=item.add_on_id, quantity=Quantity.parse(item.quantity))
            )
        if errors:
            raise StageValidationError(errors)

        # Route through the stage component so its checked set and
        # remembered quantities match what is committed.
        self.add_on_selection.replace(selections)
        return OrderUpdate(selected_add_ons=tuple(selections))

    def _navigate(self, move: Callable[[], Stage]) -> int:
        before = self._controller.current
        after = move()
        if after != before:
            if before == Stage.PRODUCT_SELECTION:
                self._product_selection = None
            if before == Stage.REVIEW:
                self._add_on_selection = None
        return int(after)
