"""Application configuration.

Uses pydantic-settings to load values from environment variables
(prefix ``ORDER_WIZARD_``) or a ``.env`` file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[3] / "data" / "catalog.json"


class WizardSettings(BaseSettings):
    """Central configuration for the order wizard."""

    model_config = SettingsConfigDict(
        env_prefix="ORDER_WIZARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    catalog_path: Path = DEFAULT_CATALOG_PATH

    # Off: later stages are reachable without submitting earlier ones.
    enforce_stage_order: bool = False

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


@lru_cache
def get_settings() -> WizardSettings:
    return WizardSettings()
