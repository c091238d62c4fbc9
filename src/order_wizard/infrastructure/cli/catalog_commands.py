"""CLI commands for browsing the catalog."""

from __future__ import annotations

import click

from order_wizard.domain.exceptions import DomainException
from order_wizard.infrastructure.bootstrap import load_catalog


@click.command("catalog")
def catalog_list() -> None:
    """List product lines, their plans, and add-ons."""
    try:
        catalog = load_catalog()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    products = catalog.list_products()
    if not products:
        click.echo("No products found.")
    for product in products:
        click.echo(f"{product.name}  ({product.id})")
        for plan in product.plans:
            price = f"{plan.default_price}/{plan.price_interval.value}"
            click.echo(f"  {plan.id:<26} {plan.name:<24} {price:>12}")
        click.echo()

    click.echo("Add-ons")
    click.echo("-" * 64)
    for add_on in catalog.list_add_ons():
        click.echo(f"  {add_on.id:<20} {add_on.name:<24} {add_on.price_label}")
