"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from order_wizard.application.session import OrderSession
from order_wizard.domain.model.catalog import Catalog
from order_wizard.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from order_wizard.infrastructure.settings import WizardSettings, get_settings


def catalog_repository(settings: WizardSettings | None = None) -> JsonCatalogRepository:
    settings = settings or get_settings()
    return JsonCatalogRepository(settings.catalog_path)


def load_catalog(settings: WizardSettings | None = None) -> Catalog:
    return catalog_repository(settings).load_catalog()


def order_session(settings: WizardSettings | None = None) -> OrderSession:
    settings = settings or get_settings()
    return OrderSession(
        catalog=load_catalog(settings),
        enforce_stage_order=settings.enforce_stage_order,
    )
