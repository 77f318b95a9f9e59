"""Main CLI entry point."""

import logging

import click
from ledgerbook.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

# Import and register all commands at module level
from ledgerbook.cli.commands import account, report, tax, transaction


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug details to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Ledgerbook - double-entry ledger and financial reports.

    Record transactions against a chart of accounts, post them once they
    balance, and derive balance sheet, cash flow and profit and loss
    statements. Includes GST and TDS calculators.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help). The tax calculators need no database.
    if ctx.invoked_subcommand not in (None, "tax"):
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
transaction.register_commands(cli)
report.register_commands(cli)
tax.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
