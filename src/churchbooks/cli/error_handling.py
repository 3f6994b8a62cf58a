"""CLI error handling helpers."""

import click

from churchbooks.domain.errors import DomainError, LedgerInvariantError, SourceFetchError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_ledger_error(ctx: click.Context, error: SourceFetchError | LedgerInvariantError) -> None:
    """Render a ledger failure; fetch failures are retryable, invariant errors are bugs."""
    if isinstance(error, SourceFetchError):
        click.echo(f"Error: {error}. Please try again.", err=True)
        ctx.exit(1)
    click.echo(
        f"Internal error: {error}. The cash book totals are inconsistent; "
        "please report this as a bug.",
        err=True,
    )
    ctx.exit(2)
