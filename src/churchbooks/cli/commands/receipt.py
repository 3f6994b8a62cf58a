"""Receipt book commands."""

import click
from churchbooks.cli.error_handling import handle_domain_error
from churchbooks.cli.period import period_options, resolve_period_or_exit, warn_if_outside_month
from churchbooks.domain.books import BookService
from churchbooks.utils.amount_parser import parse_amount
from churchbooks.utils.date_parser import parse_date


@click.group()
def receipt_group():
    """Manage the receipt book."""
    pass


@receipt_group.command("add")
@period_options
@click.option("--date", "receipt_date", required=True, help="Receipt date (YYYY-MM-DD or 'today')")
@click.option("--name", required=True, help="Name of the payer")
@click.option("--amount", required=True, help="Amount received (e.g., 500 or ₹1,500.00)")
@click.option("--receipt-no", type=int, help="Receipt number (next number if not given)")
@click.option("--area", help="Area of the payer")
@click.option("--category", help="Receipt category")
@click.pass_context
def add_receipt(
    ctx,
    pastorate: str,
    year: str,
    month: str,
    receipt_date: str,
    name: str,
    amount: str,
    receipt_no: int | None,
    area: str | None,
    category: str | None,
):
    """Add a receipt book entry."""
    db = ctx.obj["db"]
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)

    try:
        day = parse_date(receipt_date)
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    warn_if_outside_month(year, month, day)

    service = BookService(db)
    try:
        receipt_id = service.create_receipt(
            pastorate_name=pastorate,
            year=year,
            month=month,
            date=day,
            name=name,
            amount=value,
            receipt_no=receipt_no,
            area=area,
            category=category,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    created = next(r for r in service.list_receipts(pastorate, year, month) if r.id == receipt_id)
    click.echo(f"Created receipt #{created.receipt_no}")
    click.echo(f"  Name: {created.name}")
    click.echo(f"  Date: {created.date}")
    click.echo(f"  Amount: ₹{created.amount:,.2f}")


@receipt_group.command("list")
@period_options
@click.pass_context
def list_receipts(ctx, pastorate: str, year: str, month: str):
    """List receipts of a month."""
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)
    receipts = BookService(ctx.obj["db"]).list_receipts(pastorate, year, month)
    if not receipts:
        click.echo(f"No receipts for {month} {year}.")
        return

    click.echo(f"\n{'ID':<6} {'No.':<6} {'Date':<12} {'Name':<30} {'Amount':>14}")
    click.echo("-" * 72)
    for r in receipts:
        click.echo(f"{r.id:<6} {r.receipt_no:<6} {str(r.date):<12} {r.name[:30]:<30} {f'₹{r.amount:,.2f}':>14}")


@receipt_group.command("delete")
@click.argument("receipt_id", type=int)
@click.pass_context
def delete_receipt(ctx, receipt_id: int):
    """Delete a receipt by ID."""
    try:
        BookService(ctx.obj["db"]).delete_receipt(receipt_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted receipt {receipt_id}")


def register_commands(cli):
    """Register receipt commands with main CLI."""
    cli.add_command(receipt_group, name="receipt")
