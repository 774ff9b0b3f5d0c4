"""Purchase and sale listing and deletion commands."""

import click

from fxledger.cli.error_handling import handle_domain_error
from fxledger.cli.supplier_resolution import resolve_supplier_or_exit
from fxledger.domain.errors import DomainError, StorageError
from fxledger.domain.ledger import LedgerService
from fxledger.domain.supplier import SupplierService
from fxledger.utils.clock import BANGKOK
from fxledger.utils.date_parser import parse_date


def _filters(ctx, supplier: str | None, on_date: str | None):
    """Resolve optional --supplier and --date filters."""
    db = ctx.obj["db"]
    supplier_id = None
    if supplier is not None:
        supplier_id = resolve_supplier_or_exit(ctx, SupplierService(db), supplier)

    day = None
    if on_date is not None:
        try:
            day = parse_date(on_date, ctx.obj["clock"])
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)
    return supplier_id, day


@click.group()
def purchase_group():
    """List and delete purchases."""
    pass


@purchase_group.command("list")
@click.option("--supplier", help="Supplier name or ID")
@click.option("--date", "on_date", help="Bangkok date (YYYY-MM-DD or 'today', 'yesterday')")
@click.pass_context
def list_purchases(ctx, supplier: str | None, on_date: str | None):
    """List purchases, newest first."""
    supplier_id, day = _filters(ctx, supplier, on_date)
    service = LedgerService(ctx.obj["db"], ctx.obj["clock"])

    purchases = service.list_purchases(supplier_id=supplier_id, on_date=day)
    if not purchases:
        click.echo("No purchases found.")
        return

    click.echo(f"{'ID':>5}  {'Time (Bangkok)':16}  {'Supp':>4}  {'MMK':>16}  {'Rate':>12}  {'THB':>14}  Note")
    click.echo("-" * 90)
    for p in purchases:
        click.echo(
            f"{p.id:>5}  {p.created_at.astimezone(BANGKOK):%Y-%m-%d %H:%M}  {p.supplier_id:>4}  "
            f"{p.mmk_amount:>16,.2f}  {p.exchange_rate.normalize()!s:>12}  {p.total_thb:>14,.2f}  {p.note or ''}"
        )


@purchase_group.command("delete")
@click.argument("purchase_id", type=int)
@click.pass_context
def delete_purchase(ctx, purchase_id: int):
    """Delete a purchase and refresh today's summary."""
    service = LedgerService(ctx.obj["db"], ctx.obj["clock"])
    try:
        service.delete_purchase(purchase_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted purchase {purchase_id}")


@click.group()
def sale_group():
    """List, show and delete sales."""
    pass


@sale_group.command("list")
@click.option("--supplier", help="Supplier name or ID")
@click.option("--date", "on_date", help="Bangkok date (YYYY-MM-DD or 'today', 'yesterday')")
@click.pass_context
def list_sales(ctx, supplier: str | None, on_date: str | None):
    """List sales, newest first."""
    supplier_id, day = _filters(ctx, supplier, on_date)
    service = LedgerService(ctx.obj["db"], ctx.obj["clock"])

    sales = service.list_sales(supplier_id=supplier_id, on_date=day)
    if not sales:
        click.echo("No sales found.")
        return

    click.echo(f"{'ID':>5}  {'Receipt':22}  {'Customer':16}  {'THB':>14}  {'Rate':>12}  {'MMK':>16}")
    click.echo("-" * 96)
    for s in sales:
        click.echo(
            f"{s.id:>5}  {s.receipt_no:22}  {s.customer_name[:16]:16}  {s.thb_amount:>14,.2f}  "
            f"{s.exchange_rate.normalize()!s:>12}  {s.total_mmk:>16,.2f}"
        )


@sale_group.command("show")
@click.argument("sale_id", type=int)
@click.pass_context
def show_sale(ctx, sale_id: int):
    """Show the receipt details of a sale."""
    db = ctx.obj["db"]
    sale = LedgerService(db, ctx.obj["clock"]).get_sale(sale_id)
    if sale is None:
        click.echo(f"Error: Sale {sale_id} not found", err=True)
        ctx.exit(1)
    supplier = SupplierService(db).get_supplier(sale.supplier_id)

    click.echo(f"Receipt:  {sale.receipt_no}")
    click.echo(f"Supplier: {supplier.name if supplier else sale.supplier_id}")
    click.echo(f"Date:     {sale.created_at.astimezone(BANGKOK):%Y-%m-%d %H:%M} (Bangkok)")
    click.echo(f"Customer: {sale.customer_name}")
    click.echo(f"THB:      {sale.thb_amount:,.2f}")
    click.echo(f"Rate:     {sale.exchange_rate.normalize()}")
    click.echo(f"MMK:      {sale.total_mmk:,.2f}")
    if sale.note:
        click.echo(f"Note:     {sale.note}")


@sale_group.command("delete")
@click.argument("sale_id", type=int)
@click.pass_context
def delete_sale(ctx, sale_id: int):
    """Delete a sale and refresh today's summary."""
    service = LedgerService(ctx.obj["db"], ctx.obj["clock"])
    try:
        service.delete_sale(sale_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted sale {sale_id}")


def register_commands(cli):
    """Register purchase and sale commands with main CLI."""
    cli.add_command(purchase_group, name="purchase")
    cli.add_command(sale_group, name="sale")
