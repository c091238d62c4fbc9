"""Stage 3: contract start date and duration."""

from __future__ import annotations

import re
from datetime import date

from order_wizard.application.dto import ContractTermsInput
from order_wizard.domain.exceptions import StageValidationError, ValidationError
from order_wizard.domain.model.order import OrderUpdate
from order_wizard.domain.service.pricing import contract_end_date

CONTRACT_PERIOD_PRESETS = (6, 12, 24, 36)
CUSTOM_PERIOD = "custom"

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_start_date(raw: str | date | None) -> date | None:
    """Return the date for an ISO ``YYYY-MM-DD`` string, or None."""
    if isinstance(raw, date):
        return raw
    text = str(raw or "").strip()
    # fromisoformat also takes 20240301 and week dates; only YYYY-MM-DD is valid
    if not _ISO_DATE.fullmatch(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _parse_positive_int(raw: object) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 1 else None
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if value >= 1 else None


def resolve_months(contract_period: str | None, custom_duration: object = None) -> int | None:
    """Months for a period choice, or None when it cannot be resolved."""
    period = (contract_period or "").strip()
    if not period:
        return None
    if period == CUSTOM_PERIOD:
        return _parse_positive_int(custom_duration)
    return _parse_positive_int(period)


def initial_period_choice(months: int | None) -> tuple[str, int | None]:
    """Map a stored period back to the form's (choice, custom duration)."""
    if not months:
        return "", None
    if months in CONTRACT_PERIOD_PRESETS:
        return str(months), None
    return CUSTOM_PERIOD, months


class ContractTermsStage:

    def preview_end_date(
        self,
        start_date: str | date | None,
        contract_period: str | None,
        custom_duration: object = None,
    ) -> date | None:
        """End date for live display; None while the form is incomplete."""
        start = parse_start_date(start_date)
        months = resolve_months(contract_period, custom_duration)
        if start is None or months is None:
            return None
        return contract_end_date(start, months)

    def validate(self, data: ContractTermsInput) -> OrderUpdate:
        errors: list[ValidationError] = []

        start = parse_start_date(data.start_date)
        if start is None:
            errors.append(ValidationError("startDate", "Please enter a valid date"))

        period = (data.contract_period or "").strip()
        months: int | None = None
        if not period:
            errors.append(ValidationError("contractPeriod", "Contract period is required"))
        elif period == CUSTOM_PERIOD:
            months = _parse_positive_int(data.custom_duration)
            if months is None:
                errors.append(
                    ValidationError("customDuration", "Custom duration must be at least 1 month")
                )
        else:
            months = _parse_positive_int(period)
            if months is None:
                errors.append(
                    ValidationError("contractPeriod", f"Unknown contract period {period!r}")
                )

        if errors:
            raise StageValidationError(errors)

        return OrderUpdate(
            start_date=start,
            contract_period_in_months=months,
            end_date=contract_end_date(start, months),  # type: ignore[arg-type]
        )
