"""Buy and sell commands."""

import click

from fxledger.cli.error_handling import handle_domain_error
from fxledger.cli.supplier_resolution import resolve_supplier_or_exit
from fxledger.domain.errors import DomainError, StorageError
from fxledger.domain.ledger import LedgerService
from fxledger.domain.supplier import SupplierService
from fxledger.utils.amount_parser import parse_positive_amount


def _parse_or_exit(ctx, value: str, label: str):
    try:
        return parse_positive_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.command("buy")
@click.option("--supplier", required=True, help="Supplier name or ID")
@click.option("--mmk", "mmk_amount", required=True, help="MMK amount exchanged (e.g., 1,000,000)")
@click.option("--rate", required=True, help="Exchange rate in THB per MMK (e.g., 0.0079)")
@click.option("--note", help="Optional note")
@click.pass_context
def buy(ctx, supplier: str, mmk_amount: str, rate: str, note: str | None):
    """Record a purchase: THB acquired with MMK.

    Examples:
        fxledger buy --supplier "Bridge Till" --mmk 1000000 --rate 0.0079
    """
    db = ctx.obj["db"]
    supplier_id = resolve_supplier_or_exit(ctx, SupplierService(db), supplier)
    mmk = _parse_or_exit(ctx, mmk_amount, "MMK amount")
    exchange_rate = _parse_or_exit(ctx, rate, "rate")

    service = LedgerService(db, ctx.obj["clock"])
    try:
        result = service.record_purchase(supplier_id, mmk, exchange_rate, note=note)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded purchase {result.id}")
    click.echo(f"  MMK: {mmk:,.2f} @ {exchange_rate}")
    click.echo(f"  THB: {result.total_thb:,.2f}")


@click.command("sell")
@click.option("--supplier", required=True, help="Supplier name or ID")
@click.option("--customer", required=True, help="Customer name")
@click.option("--thb", "thb_amount", required=True, help="THB amount disbursed (e.g., 5,000)")
@click.option("--rate", required=True, help="Exchange rate in THB per MMK (e.g., 0.00791)")
@click.option("--note", help="Optional note")
@click.pass_context
def sell(ctx, supplier: str, customer: str, thb_amount: str, rate: str, note: str | None):
    """Record a sale: THB disbursed to a customer for MMK.

    Examples:
        fxledger sell --supplier 1 --customer "Ko Aung" --thb 5000 --rate 0.00791
    """
    db = ctx.obj["db"]
    supplier_id = resolve_supplier_or_exit(ctx, SupplierService(db), supplier)
    thb = _parse_or_exit(ctx, thb_amount, "THB amount")
    exchange_rate = _parse_or_exit(ctx, rate, "rate")

    service = LedgerService(db, ctx.obj["clock"])
    try:
        result = service.record_sale(supplier_id, customer, thb, exchange_rate, note=note)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded sale {result.id}")
    click.echo(f"  Receipt: {result.receipt_no}")
    click.echo(f"  THB: {thb:,.2f} @ {exchange_rate}")
    click.echo(f"  MMK: {result.total_mmk:,.2f}")


def register_commands(cli):
    """Register buy and sell commands with main CLI."""
    cli.add_command(buy)
    cli.add_command(sell)
