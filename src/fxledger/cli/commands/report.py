"""Dashboard, alert and profit report commands."""

import click

from fxledger.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from fxledger.cli.error_handling import handle_domain_error
from fxledger.cli.supplier_resolution import resolve_supplier_or_exit
from fxledger.domain.errors import DomainError, StorageError
from fxledger.domain.reports import ReportService
from fxledger.domain.supplier import SupplierService


@click.group()
def report_group():
    """Dashboards and reports."""
    pass


@report_group.command("dashboard")
@click.pass_context
def dashboard(ctx):
    """Today's balance for every supplier."""
    try:
        balances = ReportService(ctx.obj["db"], ctx.obj["clock"]).dashboard()
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    if not balances:
        click.echo("No suppliers found.")
        return

    click.echo(f"{'ID':>4}  {'Supplier':20}  {'Closing THB':>14}  {'Closing MMK':>16}  {'Avg rate':>12}  {'Profit THB':>14}")
    click.echo("-" * 92)
    for balance in balances:
        s = balance.summary
        flag = "  LOW" if balance.low_balance else ""
        click.echo(
            f"{balance.supplier.id:>4}  {balance.supplier.name[:20]:20}  {s.closing_thb:>14,.2f}  "
            f"{s.closing_mmk:>16,.2f}  {s.closing_avg_rate.normalize()!s:>12}  {s.daily_profit_thb:>14,.2f}{flag}"
        )


@report_group.command("alerts")
@click.pass_context
def alerts(ctx):
    """Suppliers whose THB balance is under their alert threshold."""
    try:
        low = ReportService(ctx.obj["db"], ctx.obj["clock"]).low_balance_alerts()
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    if not low:
        click.echo("No low balance alerts.")
        return

    for balance in low:
        click.echo(
            f"{balance.supplier.name}: {balance.summary.closing_thb:,.2f} THB "
            f"(alert below {balance.supplier.low_balance_alert:,.2f} THB)"
        )


@report_group.command("profit")
@click.option("--supplier", help="Supplier name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@period_options
@click.pass_context
def profit(ctx, supplier, start_date, end_date, **flags):
    """Daily profit per supplier over a date range with totals.

    Profit is THB bought minus THB sold on the day.
    """
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
        result = ReportService(db, clock).profit_report(start_date=start, end_date=end, supplier_id=supplier_id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    if not result.lines:
        click.echo("No daily summaries found.")
        return

    click.echo(f"{'Date':10}  {'Supplier':20}  {'Bought THB':>14}  {'Sold THB':>14}  {'Profit THB':>14}")
    click.echo("-" * 80)
    for line in result.lines:
        s = line.summary
        click.echo(
            f"{s.summary_date!s:10}  {line.supplier_name[:20]:20}  {s.purchased_thb:>14,.2f}  "
            f"{s.sold_thb:>14,.2f}  {s.daily_profit_thb:>14,.2f}"
        )
    click.echo("-" * 80)
    totals = result.totals
    click.echo(
        f"{'Total':32}  {totals['total_purchased_thb']:>14,.2f}  {totals['total_sold_thb']:>14,.2f}  "
        f"{totals['total_profit_thb']:>14,.2f}"
    )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
