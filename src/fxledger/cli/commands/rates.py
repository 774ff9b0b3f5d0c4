"""Rate history commands."""

import click

from fxledger.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from fxledger.cli.error_handling import handle_domain_error
from fxledger.cli.supplier_resolution import resolve_supplier_or_exit
from fxledger.domain.errors import DomainError, StorageError
from fxledger.domain.rate_history import DEFAULT_STATS_DAYS, RateHistoryService
from fxledger.domain.supplier import SupplierService
from fxledger.utils.clock import BANGKOK


@click.group()
def rates_group():
    """Executed exchange rates."""
    pass


@rates_group.command("history")
@click.option("--supplier", help="Supplier name or ID")
@click.option("--type", "rate_type", type=click.Choice(["buy", "sell"]), help="Only buy or sell rates")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@click.option("--limit", type=int, help="Maximum number of rows")
@period_options
@click.pass_context
def history(ctx, supplier, rate_type, start_date, end_date, limit, **flags):
    """List recorded rates, newest first."""
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
        observations = RateHistoryService(db, clock).list_observations(
            supplier_id=supplier_id, rate_type=rate_type, start_date=start, end_date=end, limit=limit
        )
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    if not observations:
        click.echo("No rates recorded.")
        return

    click.echo(f"{'Time (Bangkok)':16}  {'Supp':>4}  {'Type':4}  {'Rate':>12}  {'MMK':>16}  {'THB':>14}")
    click.echo("-" * 76)
    for obs in observations:
        click.echo(
            f"{obs.recorded_at.astimezone(BANGKOK):%Y-%m-%d %H:%M}  {obs.supplier_id:>4}  {obs.rate_type.value:4}  "
            f"{obs.exchange_rate.normalize()!s:>12}  {obs.mmk_amount:>16,.2f}  {obs.thb_amount:>14,.2f}"
        )


@rates_group.command("stats")
@click.option("--supplier", help="Supplier name or ID")
@click.option("--days", type=int, default=DEFAULT_STATS_DAYS, show_default=True, help="Trailing window in days")
@click.pass_context
def stats(ctx, supplier, days: int):
    """Daily min/avg/max rates per direction."""
    db = ctx.obj["db"]
    supplier_id = None
    if supplier is not None:
        supplier_id = resolve_supplier_or_exit(ctx, SupplierService(db), supplier)

    try:
        rows = RateHistoryService(db, ctx.obj["clock"]).daily_stats(supplier_id=supplier_id, days=days)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo("No rates recorded.")
        return

    click.echo(f"{'Date':10}  {'Type':4}  {'Min':>12}  {'Avg':>12}  {'Max':>12}  {'Count':>5}")
    click.echo("-" * 64)
    for row in rows:
        click.echo(
            f"{row.date!s:10}  {row.rate_type.value:4}  {row.min_rate.normalize()!s:>12}  "
            f"{row.avg_rate.normalize()!s:>12}  {row.max_rate.normalize()!s:>12}  {row.count:>5}"
        )


def register_commands(cli):
    """Register rate history commands with main CLI."""
    cli.add_command(rates_group, name="rates")
