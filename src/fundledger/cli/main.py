"""Main CLI entry point."""

import click
from fundledger.database.factories import create_sqlite_database
from fundledger.log import configure_logging

# Import and register all commands at module level
from fundledger.cli.commands import (
    fund,
    add,
    transaction,
    distribution,
    budget,
    report,
    data,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FUNDLEDGER_DB_PATH environment variable)",
    envvar="FUNDLEDGER_DB_PATH",
)
@click.option("--verbose", is_flag=True, help="Log engine activity to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Fundledger - Profit-first fund allocation.

    Record income and expenses; profit from every income is split across
    your funds according to a percentage distribution, and expenses are
    paid from a single fund.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose=verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
fund.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
distribution.register_commands(cli)
budget.register_commands(cli)
report.register_commands(cli)
data.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
