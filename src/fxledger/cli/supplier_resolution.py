"""CLI helpers for supplier resolution."""

from __future__ import annotations

import click

from fxledger.domain.supplier import SupplierService


def resolve_supplier(supplier_service: SupplierService, supplier: str | int) -> int:
    """Resolve supplier name or ID to supplier ID.

    Args:
        supplier_service: SupplierService instance
        supplier: Supplier name (str) or ID (int or string representation of int)

    Returns:
        Supplier ID

    Raises:
        ValueError: If supplier is not found
    """
    if isinstance(supplier, int):
        return supplier_service.require_supplier(supplier).id

    try:
        supplier_id = int(supplier)
    except (ValueError, TypeError):
        # Not a number, treat as name
        return supplier_service.require_supplier_by_name(supplier).id

    return supplier_service.require_supplier(supplier_id).id


def resolve_supplier_or_exit(
    ctx: click.Context, supplier_service: SupplierService, supplier: str | int
) -> int:
    """Resolve supplier name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_supplier(supplier_service, supplier)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
