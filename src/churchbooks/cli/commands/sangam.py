"""Sangam payment commands."""

import click
from churchbooks.cli.church_resolution import resolve_church_or_exit
from churchbooks.cli.error_handling import handle_domain_error
from churchbooks.cli.period import period_options, resolve_period_or_exit, warn_if_outside_month
from churchbooks.domain.books import BookService
from churchbooks.domain.church import ChurchService
from churchbooks.utils.amount_parser import parse_amount
from churchbooks.utils.date_parser import parse_date


@click.group()
def sangam_group():
    """Record sangam payments."""
    pass


@sangam_group.command("pay")
@period_options
@click.option("--member", required=True, help="Member name")
@click.option("--amount", required=True, help="Amount paid")
@click.option("--date", "payment_date", default="today", show_default=True, help="Payment date")
@click.option("--family", help="Family name")
@click.option("--church", help="Church name or ID where the payment was collected")
@click.option("--service-date", help="Service at which the payment was collected")
@click.option("--receipt-no", type=int, help="Receipt number (next number if not given)")
@click.pass_context
def pay_sangam(
    ctx,
    pastorate: str,
    year: str,
    month: str,
    member: str,
    amount: str,
    payment_date: str,
    family: str | None,
    church: str | None,
    service_date: str | None,
    receipt_no: int | None,
):
    """Record a sangam payment."""
    db = ctx.obj["db"]
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)
    church_id = None
    if church:
        church_id = resolve_church_or_exit(ctx, ChurchService(db), church, pastorate)

    try:
        day = parse_date(payment_date)
        service_day = parse_date(service_date) if service_date else None
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    warn_if_outside_month(year, month, day)

    try:
        payment_id = BookService(db).create_sangam_payment(
            pastorate_name=pastorate,
            year=year,
            month=month,
            member_name=member,
            date=day,
            amount=value,
            receipt_no=receipt_no,
            family_name=family,
            church_id=church_id,
            service_date=service_day,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created sangam payment {payment_id}: {member}, ₹{value:,.2f}")


def register_commands(cli):
    """Register sangam commands with main CLI."""
    cli.add_command(sangam_group, name="sangam")
