"""PC cash book expense commands."""

import click
from churchbooks.cli.error_handling import handle_domain_error
from churchbooks.cli.period import period_options, resolve_period_or_exit, warn_if_outside_month
from churchbooks.domain.books import BookService
from churchbooks.utils.amount_parser import parse_amount
from churchbooks.utils.date_parser import parse_date


@click.group()
def expense_group():
    """Manage cash book expenses."""
    pass


@expense_group.command("add")
@period_options
@click.option("--vno", required=True, help="Voucher number")
@click.option("--date", "expense_date", required=True, help="Expense date (YYYY-MM-DD or 'today')")
@click.option("--details", required=True, help="Expense details")
@click.option("--amount", required=True, help="Amount paid")
@click.pass_context
def add_expense(ctx, pastorate: str, year: str, month: str, vno: str, expense_date: str, details: str, amount: str):
    """Add an expense voucher."""
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)
    try:
        day = parse_date(expense_date)
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    warn_if_outside_month(year, month, day)

    try:
        expense_id = BookService(ctx.obj["db"]).create_expense(
            pastorate_name=pastorate,
            year=year,
            month=month,
            vno=vno,
            date=day,
            expense_details=details,
            amount=value,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created expense {expense_id}: VNo {vno}, ₹{value:,.2f}")


@expense_group.command("list")
@period_options
@click.pass_context
def list_expenses(ctx, pastorate: str, year: str, month: str):
    """List expenses of a month."""
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)
    expenses = BookService(ctx.obj["db"]).list_expenses(pastorate, year, month)
    if not expenses:
        click.echo(f"No expenses for {month} {year}.")
        return

    click.echo(f"\n{'ID':<6} {'VNo':<8} {'Date':<12} {'Details':<32} {'Amount':>14}")
    click.echo("-" * 76)
    for e in expenses:
        click.echo(
            f"{e.id:<6} {e.vno:<8} {str(e.date):<12} {e.expense_details[:32]:<32} {f'₹{e.amount:,.2f}':>14}"
        )


@expense_group.command("delete")
@click.argument("expense_id", type=int)
@click.pass_context
def delete_expense(ctx, expense_id: int):
    """Delete an expense by ID."""
    try:
        BookService(ctx.obj["db"]).delete_expense(expense_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted expense {expense_id}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
