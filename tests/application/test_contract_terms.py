"""Tests for Stage 3: start date, period, and derived end date."""

from datetime import date

import pytest

from order_wizard.application.contract_terms import (
    ContractTermsStage,
    initial_period_choice,
    resolve_months,
)
from order_wizard.application.dto import ContractTermsInput
from order_wizard.domain.exceptions import StageValidationError


class TestContractTerms:

    def test_preset_period(self):
        update = ContractTermsStage().validate(ContractTermsInput("2024-03-01", "12"))
        assert update.start_date == date(2024, 3, 1)
        assert update.contract_period_in_months == 12
        assert update.end_date == date(2025, 2, 28)

    def test_custom_period(self):
        update = ContractTermsStage().validate(
            ContractTermsInput("2024-01-31", "custom", custom_duration=1)
        )
        assert update.contract_period_in_months == 1
        assert update.end_date == date(2024, 2, 28)

    def test_custom_duration_as_text(self):
        update = ContractTermsStage().validate(
            ContractTermsInput("2024-03-01", "custom", custom_duration="37")
        )
        assert update.end_date == date(2027, 3, 31)

    def test_accepts_date_object(self):
        update = ContractTermsStage().validate(ContractTermsInput(date(2024, 3, 1), "6"))
        assert update.end_date == date(2024, 8, 31)


class TestContractTermsErrors:

    @pytest.mark.parametrize(
        "raw", ["", "not-a-date", "2024-02-30", "2024-13-01", "20240301", "2024-W10-5", "2024-3-1"]
    )
    def test_invalid_start_date(self, raw):
        with pytest.raises(StageValidationError) as info:
            ContractTermsStage().validate(ContractTermsInput(raw, "12"))
        assert info.value.fields == ["startDate"]

    def test_missing_period(self):
        with pytest.raises(StageValidationError) as info:
            ContractTermsStage().validate(ContractTermsInput("2024-03-01", ""))
        assert info.value.fields == ["contractPeriod"]

    @pytest.mark.parametrize("duration", [None, 0, -3, "abc", ""])
    def test_bad_custom_duration(self, duration):
        with pytest.raises(StageValidationError) as info:
            ContractTermsStage().validate(
                ContractTermsInput("2024-03-01", "custom", custom_duration=duration)
            )
        assert info.value.fields == ["customDuration"]

    def test_errors_reported_together(self):
        with pytest.raises(StageValidationError) as info:
            ContractTermsStage().validate(ContractTermsInput("nope", "custom"))
        assert info.value.fields == ["startDate", "customDuration"]


class TestPreview:

    def test_preview_matches_submit(self):
        stage = ContractTermsStage()
        assert stage.preview_end_date("2024-03-01", "24") == date(2026, 2, 28)

    def test_preview_incomplete_is_none(self):
        stage = ContractTermsStage()
        assert stage.preview_end_date("", "12") is None
        assert stage.preview_end_date("2024-03-01", "custom") is None
        assert stage.preview_end_date("2024-03-01", None) is None


class TestPeriodHelpers:

    def test_resolve_months(self):
        assert resolve_months("36") == 36
        assert resolve_months("custom", 9) == 9
        assert resolve_months("") is None

    @pytest.mark.parametrize(
        "months, expected",
        [(12, ("12", None)), (9, ("custom", 9)), (None, ("", None))],
    )
    def test_initial_period_choice(self, months, expected):
        assert initial_period_choice(months) == expected
