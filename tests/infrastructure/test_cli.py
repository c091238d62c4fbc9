"""CLI tests using click's CliRunner against the bundled catalog."""

import pytest
from click.testing import CliRunner

from order_wizard.infrastructure.cli.main import cli
from order_wizard.infrastructure.settings import DEFAULT_CATALOG_PATH, get_settings


@pytest.fixture(autouse=True)
def _bundled_catalog(monkeypatch):
    monkeypatch.setenv("ORDER_WIZARD_CATALOG_PATH", str(DEFAULT_CATALOG_PATH))
    monkeypatch.setenv("ORDER_WIZARD_ENFORCE_STAGE_ORDER", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


QUOTE_ARGS = [
    "quote",
    "--customer", "Acme Corp",
    "--product", "crm-pro",
    "--plan", "crm-pro-advanced",
    "--start", "2024-03-01",
    "--period", "12",
    "--add-on", "api-access:2",
]


class TestCatalogCommand:

    def test_lists_plans_and_add_ons(self):
        result = CliRunner().invoke(cli, ["catalog"])
        assert result.exit_code == 0, result.output
        assert "crm-pro-advanced" in result.output
        assert "$79.00/mo" in result.output
        assert "api-access" in result.output


class TestQuoteCommand:

    def test_acme_quote(self):
        result = CliRunner().invoke(cli, QUOTE_ARGS)
        assert result.exit_code == 0, result.output
        assert "Order Finalized Successfully!" in result.output
        assert "2024-03-01 to 2025-02-28 (12 months)" in result.output
        assert "$129.00" in result.output

    def test_price_override(self):
        result = CliRunner().invoke(cli, QUOTE_ARGS + ["--price", "70"])
        assert result.exit_code == 0, result.output
        assert "$120.00" in result.output

    def test_custom_period_requires_months(self):
        args = [a if a != "12" else "custom" for a in QUOTE_ARGS]
        result = CliRunner().invoke(cli, args)
        assert result.exit_code != 0
        assert "customDuration" in result.output

    def test_incomplete_address_reports_fields(self):
        result = CliRunner().invoke(cli, QUOTE_ARGS + ["--city", "Springfield"])
        assert result.exit_code != 0
        assert "address.addressLine1" in result.output
        assert "address.zipCode" in result.output

    def test_unknown_add_on(self):
        result = CliRunner().invoke(cli, QUOTE_ARGS + ["--add-on", "ghost:1"])
        assert result.exit_code != 0
        assert "Unknown add-on 'ghost'" in result.output


class TestRunCommand:

    def test_interactive_walkthrough(self):
        answers = "\n".join(
            [
                "Acme Corp",          # customer
                "n",                  # pre-populate address
                "crm-pro",            # product line
                "crm-pro-advanced",   # plan
                "",                   # keep default price
                "2024-03-01",         # start date
                "12",                 # period
                "api-access",         # toggle add-on
                "2",                  # quantity
                "done",               # finalize
                "n",                  # back to review?
            ]
        ) + "\n"
        result = CliRunner().invoke(cli, ["run"], input=answers)
        assert result.exit_code == 0, result.output
        assert "End date: 2025-02-28" in result.output
        assert "Order Finalized Successfully!" in result.output
        assert "$129.00" in result.output
