"""CLI helpers for church resolution."""

from __future__ import annotations

import click
from churchbooks.domain.church import ChurchService
from churchbooks.utils.church_resolver import resolve_church


def resolve_church_or_exit(
    ctx: click.Context,
    church_service: ChurchService,
    church: str | int,
    pastorate_name: str | None = None,
) -> int:
    """Resolve church name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_church(church_service, church, pastorate_name)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
