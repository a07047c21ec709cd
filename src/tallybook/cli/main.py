"""Main CLI entry point."""

import logging

import click
from tallybook.database.factories import create_sqlite_database
from tallybook.logging_config import configure_logging

# Import and register all commands at module level
from tallybook.cli.commands import (
    account,
    contact,
    transaction,
    invoice,
    expense,
    recurring,
    balance,
    report,
)

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TALLYBOOK_DB_PATH environment variable)",
    envvar="TALLYBOOK_DB_PATH",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    help="Logging level (overrides TALLYBOOK_LOG_LEVEL environment variable)",
    envvar="TALLYBOOK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Tallybook - small-business accounting.

    Keep a chart of accounts, customers and vendors, transactions, invoices,
    expenses and recurring transactions, and derive balances and reports
    from the ledger.
    """
    ctx.ensure_object(dict)

    try:
        configure_logging(log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level")

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        logger.debug("Using database %s", db.database_url)
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
contact.register_commands(cli)
transaction.register_commands(cli)
invoice.register_commands(cli)
expense.register_commands(cli)
recurring.register_commands(cli)
balance.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
