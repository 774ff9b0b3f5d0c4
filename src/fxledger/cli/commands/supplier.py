"""Supplier management commands."""

import click

from fxledger.cli.error_handling import handle_domain_error
from fxledger.cli.supplier_resolution import resolve_supplier_or_exit
from fxledger.domain.errors import DomainError, StorageError
from fxledger.domain.reports import ReportService
from fxledger.domain.supplier import SupplierService
from fxledger.utils.amount_parser import parse_amount
from fxledger.utils.clock import BANGKOK


@click.group()
def supplier_group():
    """Manage suppliers (exchange counters)."""
    pass


@supplier_group.command("create")
@click.argument("name", metavar="SUPPLIER_NAME")
@click.option("--alert", help="Low balance alert threshold in THB (default 10,000)")
@click.pass_context
def create_supplier(ctx, name: str, alert: str | None):
    """Create a new supplier.

    Examples:
        fxledger supplier create "Mae Sot Counter"
        fxledger supplier create "Bridge Till" --alert 25000
    """
    service = SupplierService(ctx.obj["db"])

    threshold = None
    if alert is not None:
        try:
            threshold = parse_amount(alert)
        except ValueError as e:
            click.echo(f"Error: Invalid alert amount: {e}", err=True)
            ctx.exit(1)

    try:
        supplier_id = service.create_supplier(name=name, low_balance_alert=threshold)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    supplier = service.get_supplier(supplier_id)
    click.echo(f"Created supplier '{supplier.name}' (ID: {supplier_id})")
    click.echo(f"Low balance alert: {supplier.low_balance_alert:,.2f} THB")


@supplier_group.command("list")
@click.pass_context
def list_suppliers(ctx):
    """List all suppliers."""
    service = SupplierService(ctx.obj["db"])

    suppliers = service.list_suppliers()
    if not suppliers:
        click.echo("No suppliers found.")
        return

    click.echo("\nSuppliers:")
    click.echo("-" * 60)
    for s in suppliers:
        click.echo(f"ID: {s.id:3d} | {s.name:24s} | Alert below: {s.low_balance_alert:>12,.2f} THB")


@supplier_group.command("show")
@click.argument("supplier", metavar="SUPPLIER")
@click.pass_context
def show_supplier(ctx, supplier: str):
    """Show a supplier's balance and today's transactions.

    SUPPLIER can be a supplier name or ID.
    """
    db = ctx.obj["db"]
    supplier_id = resolve_supplier_or_exit(ctx, SupplierService(db), supplier)
    try:
        detail = ReportService(db, ctx.obj["clock"]).supplier_detail(supplier_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    s = detail.summary

    click.echo(f"\n{detail.supplier.name} (ID: {detail.supplier.id}) - {s.summary_date}")
    click.echo("-" * 60)
    click.echo(f"Opening:   {s.opening_thb:>14,.2f} THB {s.opening_mmk:>16,.2f} MMK")
    click.echo(f"Purchased: {s.purchased_thb:>14,.2f} THB {s.purchased_mmk:>16,.2f} MMK")
    click.echo(f"Sold:      {s.sold_thb:>14,.2f} THB {s.sold_mmk:>16,.2f} MMK")
    click.echo(f"Closing:   {s.closing_thb:>14,.2f} THB {s.closing_mmk:>16,.2f} MMK")
    click.echo(f"Avg rate:  {s.closing_avg_rate}")
    click.echo(f"Profit:    {s.daily_profit_thb:>14,.2f} THB")
    if s.is_closed:
        click.echo("Day closed.")
    if s.closing_thb < detail.supplier.low_balance_alert:
        click.echo(f"LOW BALANCE: below {detail.supplier.low_balance_alert:,.2f} THB")

    if detail.purchases:
        click.echo("\nPurchases today:")
        for p in detail.purchases:
            click.echo(
                f"  #{p.id:<5d} {p.created_at.astimezone(BANGKOK):%H:%M}  {p.mmk_amount:>14,.2f} MMK @ {p.exchange_rate}"
                f" = {p.total_thb:>12,.2f} THB"
            )
    if detail.sales:
        click.echo("\nSales today:")
        for sale in detail.sales:
            click.echo(
                f"  #{sale.id:<5d} {sale.receipt_no}  {sale.customer_name:16s} {sale.thb_amount:>12,.2f} THB"
                f" @ {sale.exchange_rate} = {sale.total_mmk:>14,.2f} MMK"
            )


@supplier_group.command("update")
@click.argument("supplier", metavar="SUPPLIER")
@click.option("--name", help="New supplier name")
@click.option("--alert", help="New low balance alert threshold in THB")
@click.pass_context
def update_supplier(ctx, supplier: str, name: str | None, alert: str | None) -> None:
    """Rename a supplier or change its alert threshold.

    SUPPLIER can be a supplier name or ID.

    Examples:
        fxledger supplier update "Bridge Till" --name "Bridge Till 2"
        fxledger supplier update 1 --alert 5000
    """
    service = SupplierService(ctx.obj["db"])
    supplier_id = resolve_supplier_or_exit(ctx, service, supplier)

    if name is None and alert is None:
        click.echo("Error: Nothing to update. Use --name and/or --alert.", err=True)
        ctx.exit(1)

    threshold = None
    if alert is not None:
        try:
            threshold = parse_amount(alert)
        except ValueError as e:
            click.echo(f"Error: Invalid alert amount: {e}", err=True)
            ctx.exit(1)

    try:
        service.update_supplier(supplier_id, name=name, low_balance_alert=threshold)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    updated = service.get_supplier(supplier_id)
    click.echo(f"Updated supplier {supplier_id}: '{updated.name}', alert below {updated.low_balance_alert:,.2f} THB")


@supplier_group.command("delete")
@click.argument("supplier", metavar="SUPPLIER")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_supplier(ctx, supplier: str, yes: bool) -> None:
    """Delete a supplier and all of its transactions and summaries.

    SUPPLIER can be a supplier name or ID.
    """
    service = SupplierService(ctx.obj["db"])
    supplier_id = resolve_supplier_or_exit(ctx, service, supplier)
    supplier_obj = service.get_supplier(supplier_id)

    if not yes and not click.confirm(
        f"Delete supplier '{supplier_obj.name}' (ID: {supplier_id}) with all of its history?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_supplier(supplier_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted supplier '{supplier_obj.name}'")


def register_commands(cli):
    """Register supplier commands with main CLI."""
    cli.add_command(supplier_group, name="supplier")
