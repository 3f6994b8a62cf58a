"""Church management commands."""

import click
from churchbooks.cli.error_handling import handle_domain_error
from churchbooks.domain.church import ChurchService


@click.group()
def church_group():
    """Manage churches."""
    pass


@church_group.command("create")
@click.argument("name")
@click.option("--pastorate", required=True, envvar="CHURCHBOOKS_PASTORATE", help="Pastorate name")
@click.pass_context
def create_church(ctx, name: str, pastorate: str):
    """Create a new church in a pastorate."""
    service = ChurchService(ctx.obj["db"])
    try:
        church_id = service.create_church(name=name, pastorate_name=pastorate)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created church '{name.strip()}' in {pastorate.strip()} (ID: {church_id})")


@church_group.command("list")
@click.option("--pastorate", help="Only list churches of this pastorate")
@click.pass_context
def list_churches(ctx, pastorate: str | None):
    """List churches in display order."""
    service = ChurchService(ctx.obj["db"])
    churches = service.list_churches(pastorate)
    if not churches:
        click.echo("No churches found. Use 'church create' to add one.")
        return

    click.echo(f"\n{'ID':<6} {'Church':<40} {'Pastorate':<30}")
    click.echo("-" * 76)
    for church in churches:
        click.echo(f"{church.id:<6} {church.name:<40} {church.pastorate_name:<30}")


def register_commands(cli):
    """Register church commands with main CLI."""
    cli.add_command(church_group, name="church")
