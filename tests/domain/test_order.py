"""Unit tests for the Order aggregate and its merge path."""

from datetime import date

import pytest

from order_wizard.domain.exceptions import ValidationError
from order_wizard.domain.model.order import UNSET, AddOnSelection, Order, OrderUpdate
from order_wizard.domain.model.value_objects import Address, Money, Quantity
from tests.fakes import standard_catalog


def _selection(add_on_id: str = "api-access", qty: int = 1) -> AddOnSelection:
    return AddOnSelection(add_on_id=add_on_id, quantity=Quantity(qty))


class TestNewOrder:

    def test_defaults(self):
        order = Order()
        assert order.customer_name == ""
        assert order.customer_address is None
        assert order.selected_plan_id is None
        assert order.custom_plan_price is None
        assert order.contract_period_in_months == 12
        assert order.end_date is None
        assert order.selected_add_ons == []


class TestOrderUpdate:

    def test_changes_only_lists_set_fields(self):
        update = OrderUpdate(customer_name="Acme", customer_address=None)
        assert update.changes() == {"customer_name": "Acme", "customer_address": None}

    def test_unset_is_falsy_singleton(self):
        assert not UNSET
        assert OrderUpdate().selected_plan_id is UNSET


class TestOrderApply:

    def test_merges_only_given_fields(self):
        catalog = standard_catalog()
        order = Order()
        order.apply(OrderUpdate(customer_name="Acme"), catalog)
        order.apply(
            OrderUpdate(selected_plan_id="crm-pro-advanced", custom_plan_price=Money.of(79)),
            catalog,
        )
        assert order.customer_name == "Acme"
        assert order.selected_plan_id == "crm-pro-advanced"

    def test_none_clears_address(self):
        catalog = standard_catalog()
        order = Order()
        order.apply(
            OrderUpdate(customer_address=Address("1 Main St", "Springfield", "IL", "62701")),
            catalog,
        )
        order.apply(OrderUpdate(customer_address=None), catalog)
        assert order.customer_address is None

    def test_unknown_plan_rejected_without_mutation(self):
        catalog = standard_catalog()
        order = Order()
        with pytest.raises(ValidationError) as info:
            order.apply(
                OrderUpdate(customer_name="Acme", selected_plan_id="ghost"), catalog
            )
        assert info.value.field == "selectedPlanId"
        assert order.customer_name == ""
        assert order.selected_plan_id is None

    def test_end_date_is_derived(self):
        catalog = standard_catalog()
        order = Order()
        order.apply(
            OrderUpdate(start_date=date(2024, 3, 1), contract_period_in_months=12), catalog
        )
        assert order.end_date == date(2025, 2, 28)

    def test_end_date_follows_period_change(self):
        catalog = standard_catalog()
        order = Order()
        order.apply(OrderUpdate(start_date=date(2024, 3, 1)), catalog)
        order.apply(OrderUpdate(contract_period_in_months=6), catalog)
        assert order.end_date == date(2024, 8, 31)

    def test_inconsistent_end_date_rejected(self):
        catalog = standard_catalog()
        order = Order()
        with pytest.raises(ValidationError) as info:
            order.apply(
                OrderUpdate(
                    start_date=date(2024, 3, 1),
                    contract_period_in_months=12,
                    end_date=date(2025, 3, 1),
                ),
                catalog,
            )
        assert info.value.field == "endDate"
        assert order.start_date is None

    def test_zero_period_rejected(self):
        with pytest.raises(ValidationError):
            Order().apply(OrderUpdate(contract_period_in_months=0), standard_catalog())

    def test_duplicate_add_ons_rejected(self):
        order = Order()
        with pytest.raises(ValidationError, match="selected twice"):
            order.apply(
                OrderUpdate(selected_add_ons=(_selection(), _selection(qty=3))),
                standard_catalog(),
            )
        assert order.selected_add_ons == []

    def test_unknown_add_on_rejected(self):
        with pytest.raises(ValidationError, match="not in the catalog"):
            Order().apply(
                OrderUpdate(selected_add_ons=(_selection("ghost"),)), standard_catalog()
            )

    def test_add_ons_replaced_not_accumulated(self):
        catalog = standard_catalog()
        order = Order()
        update = OrderUpdate(selected_add_ons=(_selection(qty=2),))
        order.apply(update, catalog)
        order.apply(update, catalog)
        assert order.selected_add_ons == [_selection(qty=2)]


class TestSnapshot:

    def test_snapshot_is_detached(self):
        catalog = standard_catalog()
        order = Order()
        order.apply(OrderUpdate(selected_add_ons=(_selection(),)), catalog)
        snap = order.snapshot()
        snap.selected_add_ons.clear()
        snap.customer_name = "Changed"
        assert order.selected_add_ons == [_selection()]
        assert order.customer_name == ""

    def test_quantity_of(self):
        catalog = standard_catalog()
        order = Order()
        order.apply(OrderUpdate(selected_add_ons=(_selection(qty=4),)), catalog)
        assert order.quantity_of("api-access") == Quantity(4)
        assert order.quantity_of("extra-storage") is None
