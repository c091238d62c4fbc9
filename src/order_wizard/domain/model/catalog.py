"""Catalog entities: products, their plans, and add-ons.

The catalog is loaded once when a session starts and is never mutated
afterwards, so every entity here is a frozen dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from order_wizard.domain.exceptions import CatalogError
from order_wizard.domain.model.value_objects import Money


class PriceInterval(Enum):
    MONTHLY = "mo"
    YEARLY = "yr"


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    default_price: Money
    price_interval: PriceInterval = PriceInterval.MONTHLY


@dataclass(frozen=True)
class Product:
    """A product line offering one or more plans."""

    id: str
    name: str
    plans: tuple[Plan, ...] = ()

    def find_plan(self, plan_id: str) -> Plan | None:
        for plan in self.plans:
            if plan.id == plan_id:
                return plan
        return None


@dataclass(frozen=True)
class AddOn:
    id: str
    name: str
    price: Money
    price_label: str = ""


@dataclass(frozen=True)
class Catalog:
    """Read-only lookup table over products and add-ons.

    Build it with ``Catalog.create()`` so id uniqueness is checked once.
    """

    products: tuple[Product, ...]
    add_ons: tuple[AddOn, ...]
    _plan_index: dict[str, tuple[Product, Plan]] = field(
        default_factory=dict, repr=False, compare=False
    )

    @staticmethod
    def create(products: list[Product], add_ons: list[AddOn]) -> Catalog:
        product_ids: set[str] = set()
        plan_index: dict[str, tuple[Product, Plan]] = {}
        for product in products:
            if product.id in product_ids:
                raise CatalogError(f"Duplicate product id '{product.id}'")
            product_ids.add(product.id)
            for plan in product.plans:
                if plan.id in plan_index:
                    raise CatalogError(f"Duplicate plan id '{plan.id}'")
                plan_index[plan.id] = (product, plan)

        add_on_ids: set[str] = set()
        for add_on in add_ons:
            if add_on.id in add_on_ids:
                raise CatalogError(f"Duplicate add-on id '{add_on.id}'")
            add_on_ids.add(add_on.id)

        return Catalog(
            products=tuple(products),
            add_ons=tuple(add_ons),
            _plan_index=plan_index,
        )

    # --- Queries --------------------------------------------------------------

    def list_products(self) -> list[Product]:
        return list(self.products)

    def list_add_ons(self) -> list[AddOn]:
        return list(self.add_ons)

    def get_product(self, product_id: str) -> Product | None:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def get_add_on(self, add_on_id: str) -> AddOn | None:
        for add_on in self.add_ons:
            if add_on.id == add_on_id:
                return add_on
        return None

    def find_plan(self, plan_id: str) -> Plan | None:
        entry = self._plan_index.get(plan_id)
        return entry[1] if entry else None

    def product_for_plan(self, plan_id: str) -> Product | None:
        entry = self._plan_index.get(plan_id)
        return entry[0] if entry else None
