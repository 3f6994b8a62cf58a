"""Offertory category commands."""

import click
from churchbooks.cli.error_handling import handle_domain_error
from churchbooks.domain.category import CategoryService


@click.group()
def category_group():
    """Manage offertory categories."""
    pass


@category_group.command("list")
@click.option("--pastorate", required=True, envvar="CHURCHBOOKS_PASTORATE", help="Pastorate name")
@click.pass_context
def list_categories(ctx, pastorate: str):
    """List offertory categories."""
    service = CategoryService(ctx.obj["db"])
    categories = service.list_categories(pastorate)
    if not categories:
        click.echo("No offertory categories found. Use 'category create' to add one.")
        return

    click.echo("\nOffertory categories:")
    for category in categories:
        click.echo(f"  {category.name} (ID: {category.id})")


@category_group.command("create")
@click.argument("name")
@click.option("--pastorate", required=True, envvar="CHURCHBOOKS_PASTORATE", help="Pastorate name")
@click.pass_context
def create_category(ctx, name: str, pastorate: str):
    """Create a new offertory category."""
    service = CategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(pastorate_name=pastorate, name=name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created offertory category '{name.strip()}' (ID: {category_id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
