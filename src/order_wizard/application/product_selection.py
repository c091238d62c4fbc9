"""Stage 2: product line, plan, and per-plan price overrides.

The override map lives here, not on the Order: it is keyed by plan id,
survives switching between plans of the same product, and is cleared as
soon as a different product line is chosen. Only the effective price of
the submitted plan reaches the Order.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from order_wizard.application.dto import ProductSelectionInput
from order_wizard.domain.exceptions import StageValidationError, ValidationError
from order_wizard.domain.model.catalog import Catalog, Plan, Product
from order_wizard.domain.model.order import Order, OrderUpdate
from order_wizard.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


class ProductSelectionStage:

    def __init__(self, catalog: Catalog, order: Order | None = None) -> None:
        self._catalog = catalog
        self._product: Product | None = None
        self._plan_id: str | None = None
        self._overrides: dict[str, Money] = {}

        # Re-entering the stage: show the committed choice again.
        if order is not None and order.selected_plan_id is not None:
            self._product = catalog.product_for_plan(order.selected_plan_id)
            if self._product is not None:
                self._plan_id = order.selected_plan_id
                plan = self._product.find_plan(order.selected_plan_id)
                if (
                    plan is not None
                    and order.custom_plan_price is not None
                    and order.custom_plan_price != plan.default_price
                ):
                    self._overrides[plan.id] = order.custom_plan_price

    # --- Live selection -------------------------------------------------------

    @property
    def product(self) -> Product | None:
        return self._product

    @property
    def selected_plan_id(self) -> str | None:
        return self._plan_id

    @property
    def overrides(self) -> dict[str, Money]:
        return dict(self._overrides)

    def select_product(self, product_line_id: str) -> Product | None:
        """Choose a product line; a different one resets plan and overrides."""
        product = self._catalog.get_product(product_line_id)
        current_id = self._product.id if self._product else None
        if product_line_id != current_id:
            self._plan_id = None
            self._overrides.clear()
            logger.debug("Product line changed to %r, overrides cleared", product_line_id)
        self._product = product
        return product

    def select_plan(self, plan_id: str) -> Plan | None:
        plan = self._product.find_plan(plan_id) if self._product else None
        self._plan_id = plan.id if plan else None
        return plan

    def edit_price(self, plan_id: str, raw: str | float | int | Decimal) -> Money | None:
        """Record an override for *plan_id*.

        Unparseable or negative input is ignored and the previous value kept.
        """
        try:
            value = Decimal(str(raw).strip())
        except (InvalidOperation, ValueError):
            return self._overrides.get(plan_id)
        if not value.is_finite() or value < 0:
            return self._overrides.get(plan_id)
        self._overrides[plan_id] = Money(value)
        return self._overrides[plan_id]

    def display_price(self, plan: Plan) -> Money:
        return self._overrides.get(plan.id, plan.default_price)

    def effective_price(self) -> Money | None:
        if self._product is None or self._plan_id is None:
            return None
        plan = self._product.find_plan(self._plan_id)
        return self.display_price(plan) if plan else None

    # --- Submit ---------------------------------------------------------------

    def validate(self, data: ProductSelectionInput) -> OrderUpdate:
        errors: list[ValidationError] = []

        product = self.select_product(data.product_line_id) if data.product_line_id else None
        if product is None:
            errors.append(ValidationError("productLineId", "Product line is required"))

        plan = self.select_plan(data.selected_plan_id) if product and data.selected_plan_id else None
        if plan is None:
            errors.append(
                ValidationError("selectedPlanId", "Select a plan from the chosen product line")
            )

        if data.custom_price is not None and plan is not None:
            try:
                self._overrides[plan.id] = Money.of(data.custom_price, field="customPrice")
            except ValidationError as exc:
                errors.append(exc)

        if errors:
            raise StageValidationError(errors)

        return OrderUpdate(
            selected_plan_id=plan.id,  # type: ignore[union-attr]
            custom_plan_price=self.display_price(plan),  # type: ignore[arg-type]
        )
