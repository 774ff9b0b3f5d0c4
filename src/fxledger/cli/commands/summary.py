"""Daily summary commands."""

import click

from fxledger.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from fxledger.cli.error_handling import handle_domain_error
from fxledger.cli.supplier_resolution import resolve_supplier_or_exit
from fxledger.domain.errors import DomainError, StorageError
from fxledger.domain.reports import ReportService
from fxledger.domain.rollover import RolloverEngine
from fxledger.domain.supplier import SupplierService

HEADER = (
    f"{'Date':10}  {'Supplier':18}  {'Opening THB':>14}  {'Bought THB':>14}  {'Sold THB':>14}  "
    f"{'Closing THB':>14}  {'Avg rate':>12}  {'Profit THB':>14}"
)


def _summary_row(name: str, s) -> str:
    closed = " (closed)" if s.is_closed else ""
    return (
        f"{s.summary_date!s:10}  {name[:18]:18}  {s.opening_thb:>14,.2f}  {s.purchased_thb:>14,.2f}  "
        f"{s.sold_thb:>14,.2f}  {s.closing_thb:>14,.2f}  {s.closing_avg_rate.normalize()!s:>12}  "
        f"{s.daily_profit_thb:>14,.2f}{closed}"
    )


@click.group()
def summary_group():
    """Daily balances per supplier."""
    pass


@summary_group.command("list")
@click.option("--supplier", help="Supplier name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@period_options
@click.pass_context
def list_summaries(ctx, supplier, start_date, end_date, **flags):
    """List stored daily summaries, newest day first."""
    db = ctx.obj["db"]
    clock = ctx.obj["clock"]
    supplier_id = None
    if supplier is not None:
        supplier_id = resolve_supplier_or_exit(ctx, SupplierService(db), supplier)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(**flags),
        clock=clock,
    )

    try:
        lines = ReportService(db, clock).list_summaries(supplier_id=supplier_id, start_date=start, end_date=end)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    if not lines:
        click.echo("No daily summaries found.")
        return

    click.echo(HEADER)
    click.echo("-" * len(HEADER))
    for line in lines:
        click.echo(_summary_row(line.supplier_name, line.summary))


@summary_group.command("today")
@click.pass_context
def today(ctx):
    """Refresh and show today's summary for every supplier with totals."""
    try:
        overview = ReportService(ctx.obj["db"], ctx.obj["clock"]).today_overview()
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nDaily summary for {overview.date} (Bangkok)")
    if not overview.lines:
        click.echo("No suppliers found.")
        return

    click.echo(HEADER)
    click.echo("-" * len(HEADER))
    for line in overview.lines:
        click.echo(_summary_row(line.supplier_name, line.summary))
    click.echo("-" * len(HEADER))
    totals = overview.totals
    click.echo(
        f"{'Total':30}  {totals['total_opening_thb']:>14,.2f}  {totals['total_purchased_thb']:>14,.2f}  "
        f"{totals['total_sold_thb']:>14,.2f}  {totals['total_closing_thb']:>14,.2f}  {'':>12}  "
        f"{totals['total_profit_thb']:>14,.2f}"
    )


@summary_group.command("recompute")
@click.argument("supplier", metavar="SUPPLIER")
@click.pass_context
def recompute(ctx, supplier: str):
    """Recompute today's summary for a supplier from its ledger."""
    db = ctx.obj["db"]
    supplier_id = resolve_supplier_or_exit(ctx, SupplierService(db), supplier)
    engine = RolloverEngine(db, ctx.obj["clock"])
    try:
        engine.recompute_today(supplier_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    summary = db.get_daily_summary(supplier_id, engine.today())
    click.echo(f"Recomputed {summary.summary_date}: closing {summary.closing_thb:,.2f} THB")


@summary_group.command("close-day")
@click.argument("supplier", metavar="SUPPLIER")
@click.pass_context
def close_day(ctx, supplier: str):
    """Mark today as closed for a supplier.

    The flag is informational; transactions can still be recorded afterwards.
    """
    db = ctx.obj["db"]
    supplier_id = resolve_supplier_or_exit(ctx, SupplierService(db), supplier)
    try:
        summary = RolloverEngine(db, ctx.obj["clock"]).close_day(supplier_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Day {summary.summary_date} closed for supplier {supplier_id}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary_group, name="summary")
