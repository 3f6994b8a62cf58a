"""Main CLI entry point."""

import logging

import click
from churchbooks.database.factories import create_sqlite_database

# Import and register all commands at module level
from churchbooks.cli.commands import (
    church,
    year,
    category,
    offertory,
    receipt,
    sangam,
    harvest,
    expense,
    opening_balance,
    cashbook,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CHURCHBOOKS_DB_PATH environment variable)",
    envvar="CHURCHBOOKS_DB_PATH",
)
@click.option(
    "--fetch-timeout",
    type=click.FloatRange(min=0, min_open=True),
    envvar="CHURCHBOOKS_FETCH_TIMEOUT",
    help="Seconds to wait for the records behind a cash book report",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=4,
    show_default=True,
    envvar="CHURCHBOOKS_WORKERS",
    help="Number of concurrent record queries",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, fetch_timeout: float | None, workers: int, verbose: bool):
    """Churchbooks - Pastorate account books.

    Record church offertories, receipts, sangam and harvest festival payments
    and expenses, and produce the monthly PC Cash Book with running balances.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["fetch_timeout"] = fetch_timeout
    ctx.obj["workers"] = workers

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
church.register_commands(cli)
year.register_commands(cli)
category.register_commands(cli)
offertory.register_commands(cli)
receipt.register_commands(cli)
sangam.register_commands(cli)
harvest.register_commands(cli)
expense.register_commands(cli)
opening_balance.register_commands(cli)
cashbook.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
