"""Main CLI entry point."""

import click

from fxledger.database.factories import create_sqlite_database
from fxledger.logging_config import setup_logging
from fxledger.utils.clock import BangkokClock

# Import and register all commands at module level
from fxledger.cli.commands import (
    supplier,
    trade,
    ledger,
    summary,
    rates,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FXLEDGER_DB_PATH environment variable)",
    envvar="FXLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides FXLEDGER_LOG_LEVEL environment variable)",
    envvar="FXLEDGER_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """fxledger - MMK/THB exchange counter bookkeeping.

    Record purchases and sales per supplier (counter) and follow each
    counter's daily balance, average rate and profit in Bangkok time.
    """
    ctx.ensure_object(dict)
    ctx.obj.setdefault("clock", BangkokClock())

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        setup_logging(log_level)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
supplier.register_commands(cli)
trade.register_commands(cli)
ledger.register_commands(cli)
summary.register_commands(cli)
rates.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
