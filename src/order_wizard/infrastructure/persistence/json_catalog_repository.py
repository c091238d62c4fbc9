"""JSON-file-backed implementation of CatalogRepository."""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from order_wizard.domain.exceptions import CatalogError
from order_wizard.domain.model.catalog import AddOn, Plan, PriceInterval, Product
from order_wizard.domain.model.value_objects import Money
from order_wizard.domain.repository.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


class JsonCatalogRepository(CatalogRepository):
    """Reads ``{"products": [...], "add_ons": [...]}`` from *file_path*.

    The file is read once, on first access.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)
        self._raw: dict[str, Any] | None = None

    # --- CatalogRepository interface ------------------------------------------

    def list_products(self) -> list[Product]:
        return [self._to_product(item) for item in self._load().get("products", [])]

    def list_add_ons(self) -> list[AddOn]:
        return [self._to_add_on(item) for item in self._load().get("add_ons", [])]

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Any]:
        if self._raw is None:
            try:
                raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise CatalogError(f"Catalog file not found: {self._file_path}") from exc
            except json.JSONDecodeError as exc:
                raise CatalogError(f"Catalog file is not valid JSON: {exc}") from exc
            if not isinstance(raw, dict):
                raise CatalogError("Catalog file must contain a JSON object")
            logger.debug("Loaded catalog from %s", self._file_path)
            self._raw = raw
        return self._raw

    def _to_product(self, item: dict[str, Any]) -> Product:
        try:
            return Product(
                id=item["id"],
                name=item["name"],
                plans=tuple(self._to_plan(plan) for plan in item.get("plans", [])),
            )
        except KeyError as exc:
            raise CatalogError(f"Product entry missing {exc}") from exc

    def _to_plan(self, item: dict[str, Any]) -> Plan:
        try:
            return Plan(
                id=item["id"],
                name=item["name"],
                default_price=self._money(item["default_price"], item.get("currency", "USD")),
                price_interval=PriceInterval(item.get("price_interval", "mo")),
            )
        except KeyError as exc:
            raise CatalogError(f"Plan entry missing {exc}") from exc
        except ValueError as exc:
            raise CatalogError(f"Plan '{item.get('id')}': {exc}") from exc

    def _to_add_on(self, item: dict[str, Any]) -> AddOn:
        try:
            return AddOn(
                id=item["id"],
                name=item["name"],
                price=self._money(item["price"], item.get("currency", "USD")),
                price_label=item.get("price_label", ""),
            )
        except KeyError as exc:
            raise CatalogError(f"Add-on entry missing {exc}") from exc

    @staticmethod
    def _money(raw: Any, currency: str) -> Money:
        try:
            amount = Decimal(str(raw))
        except InvalidOperation as exc:
            raise CatalogError(f"Invalid price {raw!r}") from exc
        if amount < 0:
            raise CatalogError(f"Negative price {raw!r}")
        return Money(amount, currency)
