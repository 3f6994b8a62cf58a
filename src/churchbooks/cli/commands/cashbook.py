"""PC Cash Book report commands."""

from decimal import Decimal
from typing import Optional

import click
from churchbooks.cli.error_handling import handle_ledger_error
from churchbooks.cli.period import pastorate_year_options, period_options, resolve_period_or_exit
from churchbooks.domain.cashbook_export import write_csv, write_json
from churchbooks.domain.category import CategoryService
from churchbooks.domain.entities import LedgerReport, LedgerSection
from churchbooks.domain.errors import LedgerInvariantError, SourceFetchError
from churchbooks.domain.ledger import LedgerService

WIDTH = 104


def _money(amount: Optional[Decimal]) -> str:
    return "" if amount is None else f"₹{amount:,.2f}"


def _row(date_str: str, details: str, receipts: str = "", expenses: str = "", balance: str = "") -> str:
    return f"{date_str:<12} {details[:44]:<44} {receipts:>15} {expenses:>15} {balance:>15}"


def _ledger(ctx) -> LedgerService:
    return LedgerService(
        ctx.obj["db"],
        max_workers=ctx.obj["workers"],
        fetch_timeout=ctx.obj["fetch_timeout"],
    )


def _build_register_or_exit(ctx, pastorate: str, year: str, month: str) -> LedgerReport:
    try:
        return _ledger(ctx).build_register(pastorate, year, month)
    except (SourceFetchError, LedgerInvariantError) as e:
        handle_ledger_error(ctx, e)


def display_register(report: LedgerReport, category_names: dict[int, str], expand: bool = False) -> None:
    """Print the cash book register as a table."""
    click.echo("\nDaily Cash Account Maintained by the Pastorate Chairman")
    click.echo(report.pastorate_name)
    click.echo(f"For the month of {report.month} - {report.year}")
    click.echo("=" * WIDTH)
    click.echo(_row("Date", "Details", "Receipts", "Expenses", "Balance"))
    click.echo("-" * WIDTH)
    click.echo(_row("-", "Opening Balance", _money(report.opening_balance), "", _money(report.opening_balance)))

    click.echo("\nRECEIPTS")
    click.echo(_row("", "Church Offertory", _money(report.church_offertory_total)))
    for line in report.lines_for(LedgerSection.OFFERTORY):
        click.echo(
            _row(line.date.isoformat(), f"  {line.description}", _money(line.credit_amount), "", _money(line.running_balance))
        )
        if expand and line.service is not None:
            for category_id, amount in line.service.category_amounts.items():
                name = category_names.get(category_id, f"Category {category_id}")
                click.echo(_row("", f"      {name}", _money(amount)))

    click.echo(_row("", "Receipt Book", _money(report.receipts_total)))
    for line in report.lines_for(LedgerSection.RECEIPT):
        click.echo(
            _row(line.date.isoformat(), f"  {line.description}", _money(line.credit_amount), "", _money(line.running_balance))
        )
    click.echo(_row("", "Total Receipts", _money(report.total_receipts)))

    click.echo("\nEXPENSES")
    for line in report.lines_for(LedgerSection.EXPENSE):
        click.echo(
            _row(line.date.isoformat(), f"  {line.description}", "", _money(line.debit_amount), _money(line.running_balance))
        )
    click.echo(_row("", "Total Expenses", "", _money(report.expenses_total)))
    click.echo("-" * WIDTH)
    click.echo(
        _row("", "GRAND TOTAL", _money(report.total_receipts), _money(report.expenses_total), _money(report.final_balance))
    )


@click.group()
def cashbook_group():
    """PC Cash Book reports."""
    pass


@cashbook_group.command("report")
@period_options
@click.option("--expand", is_flag=True, help="Show the category break-down of every service")
@click.pass_context
def report(ctx, pastorate: str, year: str, month: str, expand: bool):
    """Show the running-balance cash book of a month."""
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)
    register = _build_register_or_exit(ctx, pastorate, year, month)
    category_names = CategoryService(ctx.obj["db"]).category_names(pastorate)
    display_register(register, category_names, expand=expand)


@cashbook_group.command("export")
@period_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["csv", "json"], case_sensitive=False),
    default="csv",
    show_default=True,
    help="Export format",
)
@click.option("--output", required=True, type=click.Path(dir_okay=False, writable=True), help="Output file")
@click.pass_context
def export(ctx, pastorate: str, year: str, month: str, output_format: str, output: str):
    """Export the cash book of a month."""
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)
    register = _build_register_or_exit(ctx, pastorate, year, month)

    if output_format.lower() == "json":
        category_names = CategoryService(ctx.obj["db"]).category_names(pastorate)
        path = write_json(register, output, category_names)
    else:
        path = write_csv(register, output)
    click.echo(f"Exported {month} {year} cash book to {path}")


@cashbook_group.command("overview")
@pastorate_year_options
@click.pass_context
def overview(ctx, pastorate: str, year: str):
    """Show opening, income, expenses and closing balance for every month."""
    pastorate, year, _ = resolve_period_or_exit(ctx, pastorate, year)
    try:
        summaries = _ledger(ctx).year_overview(pastorate, year)
    except (SourceFetchError, LedgerInvariantError) as e:
        handle_ledger_error(ctx, e)

    click.echo(f"\n{pastorate} - {year}")
    click.echo(f"{'Month':<12} {'Opening':>16} {'Income':>16} {'Expenses':>16} {'Closing':>16}")
    click.echo("-" * 80)
    for s in summaries:
        click.echo(
            f"{s.month:<12} {_money(s.opening_balance):>16} {_money(s.income):>16} "
            f"{_money(s.expenses):>16} {_money(s.closing_balance):>16}"
        )


def register_commands(cli):
    """Register cash book commands with main CLI."""
    cli.add_command(cashbook_group, name="cashbook")
