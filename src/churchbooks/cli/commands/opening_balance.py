"""Opening balance commands."""

import click
from churchbooks.cli.error_handling import handle_domain_error, handle_ledger_error
from churchbooks.cli.period import pastorate_year_options, resolve_period_or_exit
from churchbooks.domain.books import BookService
from churchbooks.domain.errors import LedgerInvariantError, SourceFetchError
from churchbooks.domain.financial_year import FINANCIAL_YEAR_MONTHS
from churchbooks.domain.ledger import LedgerService
from churchbooks.utils.amount_parser import parse_amount

_MONTH = click.Choice(FINANCIAL_YEAR_MONTHS, case_sensitive=False)


@click.group()
def opening_balance_group():
    """Enter or show the cash book opening balance."""
    pass


@opening_balance_group.command("set")
@click.argument("amount")
@pastorate_year_options
@click.option(
    "--month",
    type=_MONTH,
    default="April",
    show_default=True,
    help="Month being worked on; the balance can only be entered in April",
)
@click.pass_context
def set_opening_balance(ctx, amount: str, pastorate: str, year: str, month: str):
    """Enter the April opening balance of a financial year."""
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)
    try:
        value = parse_amount(amount)
        BookService(ctx.obj["db"]).save_opening_balance(pastorate, year, value, active_month=month)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Opening balance for April {year} set to ₹{value:,.2f}")


@opening_balance_group.command("show")
@pastorate_year_options
@click.option("--month", type=_MONTH, default="April", show_default=True, help="Month to show")
@click.pass_context
def show_opening_balance(ctx, pastorate: str, year: str, month: str):
    """Show the opening balance of a month.

    April shows the entered balance; later months show the balance derived
    from April and the months before.
    """
    db = ctx.obj["db"]
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)

    if month == "April":
        record = BookService(db).get_opening_balance(pastorate, year)
        if record is None:
            click.echo(f"No opening balance entered for April {year} (₹0.00)")
        else:
            click.echo(f"Opening balance for April {year}: ₹{record.amount:,.2f}")
        return

    ledger = LedgerService(db, max_workers=ctx.obj["workers"], fetch_timeout=ctx.obj["fetch_timeout"])
    try:
        balance = ledger.resolve_opening_balance(pastorate, year, month)
    except (SourceFetchError, LedgerInvariantError) as e:
        handle_ledger_error(ctx, e)
    click.echo(f"Opening balance for {month} {year}: ₹{balance:,.2f} (derived)")


def register_commands(cli):
    """Register opening balance commands with main CLI."""
    cli.add_command(opening_balance_group, name="opening-balance")
