import click

from order_wizard.infrastructure.cli.catalog_commands import catalog_list
from order_wizard.infrastructure.cli.wizard_commands import wizard_quote, wizard_run
from order_wizard.infrastructure.logging_setup import configure_logging
from order_wizard.infrastructure.settings import get_settings


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level.",
)
def cli(log_level: str | None) -> None:
    """Order Wizard — configure a customer order in four stages"""
    configure_logging(log_level or get_settings().log_level)


# Register subcommands
cli.add_command(catalog_list)
cli.add_command(wizard_quote)
cli.add_command(wizard_run)
