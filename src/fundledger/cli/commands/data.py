"""Data export, import and reset commands."""

from pathlib import Path

import click
from fundledger.cli.error_handling import handle_domain_error
from fundledger.domain.backup import BackupService
from fundledger.domain.errors import DomainError
from fundledger.domain.settings import SettingsService


@click.group()
def data_group():
    """Back up, restore or reset all data."""
    pass


@data_group.command("export")
@click.argument("file_path", required=False, type=click.Path(dir_okay=False))
@click.pass_context
def export_data(ctx, file_path: str | None):
    """Export funds, transactions, settings and budgets as JSON.

    Writes to FILE_PATH, or to standard output when no file is given.

    Examples:
        fundledger data export backup.json
        fundledger data export > backup.json
    """
    document = BackupService(ctx.obj["db"]).export_data()
    if file_path is None:
        click.echo(document)
        return

    Path(file_path).write_text(document + "\n", encoding="utf-8")
    click.echo(f"Exported data to {file_path}")


@data_group.command("import")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_data(ctx, file_path: str, yes: bool):
    """Replace all data with a previously exported JSON file.

    The file is checked completely before anything is replaced; an invalid
    file leaves the current data untouched.
    """
    if not yes and not click.confirm("This replaces all current data. Continue?"):
        click.echo("Import cancelled.")
        return

    raw = Path(file_path).read_text(encoding="utf-8")
    try:
        data = BackupService(ctx.obj["db"]).import_data(raw)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Imported {len(data.state.funds)} fund(s), "
        f"{len(data.state.transactions)} transaction(s) and {len(data.budgets)} budget(s)"
    )


@data_group.command("clear")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_data(ctx, yes: bool):
    """Delete all stored data.

    The next command starts again from the default funds and distribution.
    """
    if not yes and not click.confirm("This deletes all funds, transactions and budgets. Continue?"):
        click.echo("Clear cancelled.")
        return

    BackupService(ctx.obj["db"]).clear_data()
    click.echo("Cleared all data")


@data_group.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset_data(ctx, yes: bool):
    """Reset to the default funds and profit distribution."""
    if not yes and not click.confirm("This replaces all data with the defaults. Continue?"):
        click.echo("Reset cancelled.")
        return

    SettingsService(ctx.obj["db"]).reset_to_defaults()
    click.echo("Reset all data to defaults")


def register_commands(cli):
    """Register data commands with main CLI."""
    cli.add_command(data_group, name="data")
