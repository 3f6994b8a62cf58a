"""Church offertory commands."""

import click
from churchbooks.cli.church_resolution import resolve_church_or_exit
from churchbooks.cli.error_handling import handle_domain_error
from churchbooks.cli.period import period_options, resolve_period_or_exit, warn_if_outside_month
from churchbooks.domain.books import BookService, build_service_entry
from churchbooks.domain.category import CategoryService
from churchbooks.domain.church import ChurchService
from churchbooks.utils.amount_parser import parse_category_amount
from churchbooks.utils.date_parser import parse_date


@click.group()
def offertory_group():
    """Record church offertories."""
    pass


@offertory_group.command("add")
@period_options
@click.option("--church", required=True, help="Church name or ID")
@click.option("--date", "service_date", required=True, help="Service date (e.g., 2024-04-07, 'last sunday')")
@click.option(
    "--amount",
    "amounts",
    multiple=True,
    required=True,
    help="Category amount as CATEGORY=AMOUNT (repeatable)",
)
@click.pass_context
def add_offertory(ctx, pastorate: str, year: str, month: str, church: str, service_date: str, amounts: tuple[str, ...]):
    """Add a service collection to a church's monthly offertory.

    Examples:
        churchbooks offertory add --pastorate Nallur --year 2024-2025 --month April \\
            --church "St. Peter's" --date 2024-04-07 --amount "Thanks Offering=150"
    """
    db = ctx.obj["db"]
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)
    church_id = resolve_church_or_exit(ctx, ChurchService(db), church, pastorate)
    category_service = CategoryService(db)

    try:
        day = parse_date(service_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)
    warn_if_outside_month(year, month, day)

    category_amounts = {}
    try:
        for pair in amounts:
            name, amount = parse_category_amount(pair)
            category = category_service.require_category_by_name(pastorate, name)
            category_amounts[category.id] = category_amounts.get(category.id, 0) + amount
        service = build_service_entry(day, category_amounts)
        BookService(db).add_offertory_service(pastorate, year, month, church_id, service)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded service of {day} for {month} {year}: ₹{service.total:,.2f}")


@offertory_group.command("list")
@period_options
@click.pass_context
def list_offertories(ctx, pastorate: str, year: str, month: str):
    """List church offertories of a month."""
    db = ctx.obj["db"]
    pastorate, year, month = resolve_period_or_exit(ctx, pastorate, year, month)
    offertories = BookService(db).list_church_offertories(pastorate, year, month)
    if not offertories:
        click.echo(f"No church offertories for {month} {year}.")
        return

    category_names = CategoryService(db).category_names(pastorate)
    for offertory in offertories:
        click.echo(f"\n{offertory.church_name:<50} ₹{offertory.total_amount:>12,.2f}")
        for service in offertory.services:
            click.echo(f"  {service.date.isoformat():<48} ₹{service.total:>12,.2f}")
            for category_id, amount in service.category_amounts.items():
                name = category_names.get(category_id, f"Category {category_id}")
                click.echo(f"      {name:<44} ₹{amount:>12,.2f}")


def register_commands(cli):
    """Register offertory commands with main CLI."""
    cli.add_command(offertory_group, name="offertory")
