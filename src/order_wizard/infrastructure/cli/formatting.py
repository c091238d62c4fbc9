"""Shared text rendering for order summaries and field errors."""

from __future__ import annotations

import click

from order_wizard.application.dto import OrderSummaryDTO
from order_wizard.domain.exceptions import StageValidationError


def field_errors_text(exc: StageValidationError) -> str:
    return "\n".join(f"  {e.field}: {e.message}" for e in exc.errors)


def display_summary(dto: OrderSummaryDTO) -> None:
    if dto.finalized:
        click.echo("Order Finalized Successfully!")
    else:
        click.echo("Order Review")
    click.echo()
    click.echo(f"Customer: {dto.customer_name}")
    if dto.customer_address:
        for line in dto.customer_address:
            click.echo(f"          {line}")
    if dto.plan_name:
        click.echo(f"Plan:     {dto.product_name} / {dto.plan_name} - {dto.plan_price}/{dto.price_interval}")
    if dto.start_date:
        click.echo(
            f"Contract: {dto.start_date} to {dto.end_date} "
            f"({dto.contract_period_in_months} months)"
        )
    click.echo()

    if dto.add_ons:
        click.echo(f"  {'Add-on':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
        click.echo(f"  {'-'*51}")
        for line in dto.add_ons:
            click.echo(
                f"  {line.name:<24} {line.quantity:>5} {line.unit_price:>10} {line.line_total:>10}"
            )
        click.echo(f"  {'-'*51}")
        click.echo(f"  {'Add-ons Total':<30} {dto.add_ons_total:>21}")
    click.echo(f"  {'Total Monthly':<30} {dto.total:>21}")
