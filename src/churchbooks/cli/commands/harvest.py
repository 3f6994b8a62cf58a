"""Harvest festival commands."""

import click
from churchbooks.cli.error_handling import handle_domain_error
from churchbooks.cli.period import pastorate_year_options, resolve_period_or_exit
from churchbooks.domain.books import BookService
from churchbooks.domain.financial_year import month_name_for_date
from churchbooks.utils.amount_parser import parse_amount
from churchbooks.utils.date_parser import next_sunday, parse_date


@click.group()
def harvest_group():
    """Manage harvest festival pledges and payments."""
    pass


@harvest_group.command("entry")
@pastorate_year_options
@click.option("--name", required=True, help="Name of the pledger")
@click.option("--auction-amount", required=True, help="Pledged auction amount")
@click.option("--initial-payment", help="Amount paid when the pledge is made")
@click.option("--date", "payment_date", default="today", show_default=True, help="Date of the initial payment")
@click.option(
    "--service-date",
    help="Service the initial payment is counted at (default: the Sunday on or after --date)",
)
@click.pass_context
def create_entry(
    ctx,
    pastorate: str,
    year: str,
    name: str,
    auction_amount: str,
    initial_payment: str | None,
    payment_date: str,
    service_date: str | None,
):
    """Create a harvest festival auction pledge."""
    pastorate, year, _ = resolve_period_or_exit(ctx, pastorate, year)
    try:
        value = parse_amount(auction_amount)
        paid = parse_amount(initial_payment) if initial_payment else None
        day = parse_date(payment_date)
        service_day = parse_date(service_date) if service_date else next_sunday(day)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        entry_id = BookService(ctx.obj["db"]).create_harvest_festival_base_entry(
            pastorate_name=pastorate,
            year=year,
            name=name,
            auction_amount=value,
            initial_payment=paid,
            payment_date=day if paid is not None else None,
            service_date=service_day if paid is not None else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created harvest festival entry {entry_id}: {name}, ₹{value:,.2f}")
    if paid is not None:
        click.echo(f"  Initial payment of ₹{paid:,.2f} added to {month_name_for_date(service_day)}")


@harvest_group.command("list")
@pastorate_year_options
@click.pass_context
def list_entries(ctx, pastorate: str, year: str):
    """List harvest festival pledges with their outstanding balance."""
    pastorate, year, _ = resolve_period_or_exit(ctx, pastorate, year)
    entries = BookService(ctx.obj["db"]).list_harvest_festival_base_entries(pastorate, year)
    if not entries:
        click.echo(f"No harvest festival entries for {year}.")
        return

    click.echo(f"\n{'ID':<6} {'Name':<30} {'Auction':>14} {'Paid':>14} {'Balance':>14}")
    click.echo("-" * 82)
    for e in entries:
        click.echo(
            f"{e.id:<6} {e.name[:30]:<30} {f'₹{e.auction_amount:,.2f}':>14} "
            f"{f'₹{e.total_paid:,.2f}':>14} {f'₹{e.balance:,.2f}':>14}"
        )


@harvest_group.command("pay")
@click.argument("entry_id", type=int)
@click.option("--amount", required=True, help="Amount paid")
@click.option("--date", "payment_date", default="today", show_default=True, help="Payment date")
@click.option(
    "--service-date",
    help="Service the payment is counted at; its month receives the payment (default: the Sunday on or after --date)",
)
@click.pass_context
def pay_entry(ctx, entry_id: int, amount: str, payment_date: str, service_date: str | None):
    """Pay towards a harvest festival pledge."""
    try:
        day = parse_date(payment_date)
        service_day = parse_date(service_date) if service_date else next_sunday(day)
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        payment_id = BookService(ctx.obj["db"]).create_harvest_festival_payment(
            base_entry_id=entry_id, date=day, service_date=service_day, amount=value
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Payment {payment_id} of ₹{value:,.2f} added to {month_name_for_date(service_day)}")


def register_commands(cli):
    """Register harvest festival commands with main CLI."""
    cli.add_command(harvest_group, name="harvest")
