"""Financial year commands."""

from datetime import date

import click
from churchbooks.cli.error_handling import handle_domain_error
from churchbooks.domain.financial_year import financial_year_for_date
from churchbooks.domain.year import YearService


@click.group()
def year_group():
    """Manage financial years."""
    pass


@year_group.command("add")
@click.argument("label", required=False)
@click.option("--pastorate", required=True, envvar="CHURCHBOOKS_PASTORATE", help="Pastorate name")
@click.pass_context
def add_year(ctx, label: str | None, pastorate: str):
    """Register a financial year (e.g., 2024-2025; defaults to the current one)."""
    service = YearService(ctx.obj["db"])
    try:
        service.add_year(pastorate_name=pastorate, label=label)
    except ValueError as e:
        handle_domain_error(ctx, e)
    shown = label.strip() if label else financial_year_for_date(date.today())
    click.echo(f"Added financial year {shown} for {pastorate.strip()}")


@year_group.command("list")
@click.option("--pastorate", required=True, envvar="CHURCHBOOKS_PASTORATE", help="Pastorate name")
@click.pass_context
def list_years(ctx, pastorate: str):
    """List the financial years of a pastorate."""
    service = YearService(ctx.obj["db"])
    years = service.list_years(pastorate)
    if not years:
        click.echo("No financial years found. Use 'year add' to register one.")
        return
    for year in years:
        click.echo(year.label)


def register_commands(cli):
    """Register year commands with main CLI."""
    cli.add_command(year_group, name="year")
