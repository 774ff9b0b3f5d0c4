"""CLI error handling helpers."""

import click

from fxledger.domain.errors import DomainError, StorageError


def handle_domain_error(ctx: click.Context, error: DomainError | StorageError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
