"""CLI commands that walk an order through the four stages."""

from __future__ import annotations

import click

from order_wizard.application.contract_terms import (
    CONTRACT_PERIOD_PRESETS,
    CUSTOM_PERIOD,
    initial_period_choice,
)
from order_wizard.application.dto import (
    AddOnInput,
    AddressInput,
    ContractTermsInput,
    CustomerInfoInput,
    ProductSelectionInput,
)
from order_wizard.application.session import OrderSession
from order_wizard.application.stage_controller import Stage
from order_wizard.domain.exceptions import DomainException, StageValidationError
from order_wizard.infrastructure.bootstrap import order_session
from order_wizard.infrastructure.cli.formatting import display_summary, field_errors_text

BACK = "back"
PERIOD_CHOICES = [str(m) for m in CONTRACT_PERIOD_PRESETS] + [CUSTOM_PERIOD]


def _parse_add_ons(raw: tuple[str, ...]) -> list[AddOnInput]:
    """Parse ('api-access:2', 'extra-storage') into AddOnInput list."""
    specs: list[AddOnInput] = []
    for pair in raw:
        pair = pair.strip()
        if ":" in pair:
            add_on_id, qty = pair.rsplit(":", 1)
        else:
            add_on_id, qty = pair, "1"
        if not add_on_id.strip():
            raise click.BadParameter(
                f"Invalid add-on format '{pair}'. Expected 'AddOnId:Quantity'."
            )
        specs.append(AddOnInput(add_on_id=add_on_id.strip(), quantity=qty.strip()))
    return specs


def _session() -> OrderSession:
    try:
        return order_session()
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("quote")
@click.option("--customer", required=True, help="Customer account name.")
@click.option("--address-line1", default=None, help="Pre-populate the address (line 1).")
@click.option("--address-line2", default=None, help="Address line 2.")
@click.option("--city", default=None, help="City.")
@click.option("--state", default=None, help="State.")
@click.option("--zip", "zip_code", default=None, help="Zip code.")
@click.option("--product", required=True, help="Product line id.")
@click.option("--plan", required=True, help="Plan id within the product line.")
@click.option("--price", default=None, help="Override the plan price.")
@click.option("--start", required=True, help="Contract start date (YYYY-MM-DD).")
@click.option("--period", required=True, type=click.Choice(PERIOD_CHOICES), help="Contract period in months.")
@click.option("--months", default=None, type=int, help="Duration when --period is custom.")
@click.option("--add-on", "add_ons", multiple=True, help="Add-on as 'AddOnId:Qty' (repeatable).")
def wizard_quote(
    customer: str,
    address_line1: str | None,
    address_line2: str | None,
    city: str | None,
    state: str | None,
    zip_code: str | None,
    product: str,
    plan: str,
    price: str | None,
    start: str,
    period: str,
    months: int | None,
    add_ons: tuple[str, ...],
) -> None:
    """Run every stage non-interactively and print the finalized order."""
    session = _session()
    address_given = any(v is not None for v in (address_line1, city, state, zip_code))

    submissions = [
        CustomerInfoInput(
            customer_name=customer,
            pre_populate=address_given,
            address=AddressInput(
                address_line1=address_line1 or "",
                address_line2=address_line2,
                city=city or "",
                state=state or "",
                zip_code=zip_code or "",
            ) if address_given else None,
        ),
        ProductSelectionInput(
            product_line_id=product, selected_plan_id=plan, custom_price=price
        ),
        ContractTermsInput(start_date=start, contract_period=period, custom_duration=months),
        _parse_add_ons(add_ons),
    ]

    for stage, raw in zip(Stage, submissions):
        try:
            session.submit_stage(stage, raw)
        except StageValidationError as exc:
            raise click.ClickException(
                f"{stage.title} is invalid:\n{field_errors_text(exc)}"
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    display_summary(session.summary())


# ---------------------------------------------------------------------------
# Interactive walkthrough
# ---------------------------------------------------------------------------


def _prompt_customer_info(session: OrderSession) -> CustomerInfoInput:
    order = session.get_order()
    name = click.prompt("Customer account", default=order.customer_name or None)
    pre_populate = click.confirm("Pre-populate company address?", default=order.customer_address is not None)
    address = None
    if pre_populate:
        current = order.customer_address
        address = AddressInput(
            address_line1=click.prompt("Address line 1", default=current.address_line1 if current else ""),
            address_line2=click.prompt("Address line 2", default=(current.address_line2 or "") if current else "", show_default=False),
            city=click.prompt("City", default=current.city if current else ""),
            state=click.prompt("State", default=current.state if current else ""),
            zip_code=click.prompt("Zip code", default=current.zip_code if current else ""),
        )
    return CustomerInfoInput(customer_name=name, pre_populate=pre_populate, address=address)


def _prompt_product_selection(session: OrderSession) -> ProductSelectionInput | None:
    stage = session.product_selection
    for product in session.catalog.list_products():
        click.echo(f"  {product.id:<20} {product.name}")
    current = stage.product.id if stage.product else None
    product_id = click.prompt(f"Product line (or '{BACK}')", default=current)
    if product_id == BACK:
        return None
    product = stage.select_product(product_id)
    if product is not None:
        for plan in product.plans:
            click.echo(f"  {plan.id:<26} {plan.name:<24} {stage.display_price(plan)}/{plan.price_interval.value}")
    plan_id = click.prompt("Plan", default=stage.selected_plan_id)
    plan = stage.select_plan(plan_id)
    if plan is not None:
        raw_price = click.prompt("Price", default=str(stage.display_price(plan).amount))
        stage.edit_price(plan.id, raw_price)
    return ProductSelectionInput(product_line_id=product_id, selected_plan_id=plan_id)


def _prompt_contract_terms(session: OrderSession) -> ContractTermsInput | None:
    order = session.get_order()
    start = click.prompt(
        f"Start date YYYY-MM-DD (or '{BACK}')",
        default=order.start_date.isoformat() if order.start_date else None,
    )
    if start == BACK:
        return None
    initial_period, initial_custom = initial_period_choice(order.contract_period_in_months)
    period = click.prompt(
        "Contract period", type=click.Choice(PERIOD_CHOICES), default=initial_period or "12"
    )
    custom = None
    if period == CUSTOM_PERIOD:
        custom = click.prompt("Custom duration (months)", default=str(initial_custom or ""))
    end = session.contract_terms.preview_end_date(start, period, custom)
    if end is not None:
        click.echo(f"End date: {end.isoformat()}")
    return ContractTermsInput(start_date=start, contract_period=period, custom_duration=custom)


def _review(session: OrderSession) -> bool:
    """Edit add-ons until finalized; False means go back a stage."""
    stage = session.add_on_selection
    while True:
        display_summary(session.summary())
        click.echo()
        for add_on in session.catalog.list_add_ons():
            mark = "x" if stage.is_checked(add_on.id) else " "
            click.echo(f"  [{mark}] {add_on.id:<20} {add_on.name:<24} {add_on.price_label}")
        choice = click.prompt(
            f"Toggle an add-on, 'done' to finalize, or '{BACK}'", default="done"
        )
        if choice == BACK:
            return False
        if choice == "done":
            display_summary(session.finalize())
            if not click.confirm("Back to review?", default=False):
                return True
            session.back_to_review()
            continue
        try:
            stage.toggle(choice, not stage.is_checked(choice))
            if stage.is_checked(choice):
                qty = click.prompt("Quantity", default=str(stage.quantity_of(choice)))
                stage.set_quantity(choice, qty)
        except DomainException as exc:
            click.echo(f"Error: {exc}")


@click.command("run")
def wizard_run() -> None:
    """Walk through the wizard interactively."""
    session = _session()
    prompts = {
        Stage.CUSTOMER_INFO: _prompt_customer_info,
        Stage.PRODUCT_SELECTION: _prompt_product_selection,
        Stage.CONTRACT_TERMS: _prompt_contract_terms,
    }

    while True:
        stage = Stage(session.get_current_stage())
        click.echo()
        click.echo(f"== {int(stage)}. {stage.title} ==")

        if stage == Stage.REVIEW:
            if _review(session):
                return
            session.retreat()
            continue

        raw = prompts[stage](session)
        if raw is None:
            session.retreat()
            continue
        try:
            session.submit_stage(stage, raw)
        except StageValidationError as exc:
            click.echo(f"Please fix the following:\n{field_errors_text(exc)}")
        except DomainException as exc:
            raise click.ClickException(str(exc))
