"""Profit distribution commands."""

import click
from fundledger.cli.error_handling import handle_domain_error
from fundledger.cli.fund_resolution import resolve_fund_or_exit
from fundledger.domain.calculations import distribution_total
from fundledger.domain.entities import DistributionEntry
from fundledger.domain.errors import DomainError
from fundledger.domain.fund import FundService
from fundledger.domain.settings import SettingsService
from fundledger.utils.amount_parser import parse_allocation


@click.group()
def distribution_group():
    """View and change how profit is split across funds."""
    pass


def _echo_distribution(settings: SettingsService, fund_service: FundService) -> None:
    entries = settings.get_distribution()
    funds = {fund.id: fund.name for fund in fund_service.list_funds()}

    click.echo(f"Tax allocation: {'enabled' if settings.is_tax_enabled() else 'disabled'}")
    if not entries:
        click.echo("No profit distribution configured.")
        return

    click.echo("-" * 44)
    for entry in entries:
        name = funds.get(entry.fund_id, f"{entry.fund_id} (missing)")
        click.echo(f"{name:30s} {entry.percentage:>10.2f}%")
    click.echo("-" * 44)
    click.echo(f"{'Total':30s} {distribution_total(entries):>10.2f}%")


@distribution_group.command("show")
@click.pass_context
def show_distribution(ctx):
    """Show the active profit distribution."""
    db = ctx.obj["db"]
    _echo_distribution(SettingsService(db), FundService(db))


@distribution_group.command("set")
@click.argument("allocations", nargs=-1, required=True, metavar="FUND=PERCENT...")
@click.pass_context
def set_distribution(ctx, allocations: tuple[str, ...]):
    """Replace the profit distribution.

    Each argument pairs a fund name or ID with its percentage. The
    percentages must sum to 100. The last fund listed receives any
    rounding remainder.

    Examples:
        fundledger distribution set "Operating Expenses=60" "Savings=40"
        fundledger distribution set operating=50 marketing=25 taxes=25
    """
    db = ctx.obj["db"]
    settings = SettingsService(db)
    fund_service = FundService(db)

    entries = []
    for allocation in allocations:
        try:
            fund, percentage = parse_allocation(allocation)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        fund_id = resolve_fund_or_exit(ctx, fund_service, fund)
        entries.append(DistributionEntry(fund_id=fund_id, percentage=percentage))

    try:
        settings.update_distribution(entries)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("Updated profit distribution")
    _echo_distribution(settings, fund_service)


@distribution_group.command("tax")
@click.option("--enable/--disable", "enabled", required=True, help="Turn the 5% tax allocation on or off")
@click.pass_context
def toggle_tax(ctx, enabled: bool):
    """Turn the 5% tax allocation on or off.

    Enabling scales every other share down to 95% and adds 5% for the tax
    fund. Disabling removes the tax share and scales the rest back up to
    100%.
    """
    db = ctx.obj["db"]
    settings = SettingsService(db)

    if settings.tax_mode_matches(enabled):
        click.echo(f"Tax allocation is already {'enabled' if enabled else 'disabled'}.")
        return

    try:
        settings.set_tax_enabled(enabled)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Tax allocation {'enabled' if enabled else 'disabled'}")
    _echo_distribution(settings, FundService(db))


def register_commands(cli):
    """Register distribution commands with main CLI."""
    cli.add_command(distribution_group, name="distribution")
