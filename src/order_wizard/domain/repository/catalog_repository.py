"""Abstract source of catalog data.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from order_wizard.domain.model.catalog import AddOn, Catalog, Product


class CatalogRepository(ABC):

    @abstractmethod
    def list_products(self) -> list[Product]:
        """Return every product line, in display order."""

    @abstractmethod
    def list_add_ons(self) -> list[AddOn]:
        """Return every add-on, in display order."""

    def load_catalog(self) -> Catalog:
        """Snapshot the source into an immutable Catalog."""
        return Catalog.create(self.list_products(), self.list_add_ons())
