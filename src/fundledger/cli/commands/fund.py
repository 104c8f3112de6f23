"""Fund management commands."""

import click
from fundledger.cli.error_handling import handle_domain_error
from fundledger.cli.fund_resolution import resolve_fund_or_exit
from fundledger.domain.errors import DomainError
from fundledger.domain.fund import FundService
from fundledger.domain.settings import SettingsService


@click.group()
def fund_group():
    """Manage funds."""
    pass


@fund_group.command("create")
@click.argument("name", metavar="FUND_NAME")
@click.option("--description", default="", help="What the fund is for")
@click.option("--color", help="Color tag (e.g. '#3B82F6')")
@click.pass_context
def create_fund(ctx, name: str, description: str, color: str | None):
    """Create a new fund with a zero balance.

    New funds receive no profit until they are added to the distribution
    with 'distribution set'.

    Examples:
        fundledger fund create "Vacation"
        fundledger fund create "Equipment" --description "New tools" --color "#22C55E"
    """
    service = FundService(ctx.obj["db"])

    try:
        fund_id = service.create_fund(name=name, description=description, color=color)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created fund '{name.strip()}' (ID: {fund_id})")


@fund_group.command("list")
@click.pass_context
def list_funds(ctx):
    """List all funds with balances and lifetime totals."""
    db = ctx.obj["db"]
    service = FundService(db)
    distribution = {
        entry.fund_id: entry.percentage for entry in SettingsService(db).get_distribution()
    }

    funds = service.list_funds()
    if not funds:
        click.echo("No funds found.")
        return

    click.echo("\nFunds:")
    click.echo("-" * 96)
    click.echo(
        f"{'ID':36s} | {'Name':22s} | {'Balance':>12s} | {'Share':>7s} | {'Inflow':>12s}"
    )
    click.echo("-" * 96)
    for fund in funds:
        share = distribution.get(fund.id)
        share_str = f"{share:.2f}%" if share is not None else "-"
        name = fund.name + (" [tax]" if fund.is_tax_fund else "")
        click.echo(
            f"{fund.id:36s} | {name:22s} | {fund.current_balance:>12,.2f} | "
            f"{share_str:>7s} | {fund.lifetime_inflow:>12,.2f}"
        )

    totals = service.get_totals()
    click.echo("-" * 96)
    click.echo(f"Total balance:  ${totals.total_balance:,.2f}")
    click.echo(f"Total inflow:   ${totals.total_inflow:,.2f}")
    click.echo(f"Total outflow:  ${totals.total_outflow:,.2f}")


@fund_group.command("show")
@click.argument("fund", metavar="FUND")
@click.pass_context
def show_fund(ctx, fund: str):
    """Show details of a fund.

    FUND can be a fund name or ID.
    """
    service = FundService(ctx.obj["db"])
    fund_id = resolve_fund_or_exit(ctx, service, fund)
    fund_obj = service.require_fund(fund_id)

    click.echo(f"Fund: {fund_obj.name}")
    click.echo(f"  ID: {fund_obj.id}")
    if fund_obj.description:
        click.echo(f"  Description: {fund_obj.description}")
    if fund_obj.color:
        click.echo(f"  Color: {fund_obj.color}")
    if fund_obj.is_tax_fund:
        click.echo("  Tax fund: yes")
    click.echo(f"  Balance: ${fund_obj.current_balance:,.2f}")
    click.echo(f"  Lifetime inflow: ${fund_obj.lifetime_inflow:,.2f}")
    click.echo(f"  Lifetime outflow: ${fund_obj.lifetime_outflow:,.2f}")
    click.echo(f"  Expenses drawn: {service.get_reference_count(fund_id)}")


@fund_group.command("update")
@click.argument("fund", metavar="FUND")
@click.option("--name", help="New fund name")
@click.option("--description", help="New description")
@click.option("--color", help="New color tag")
@click.pass_context
def update_fund(ctx, fund: str, name: str | None, description: str | None, color: str | None):
    """Rename a fund or change its description or color.

    FUND can be a fund name or ID. Balances cannot be edited; only
    transactions move money.

    Examples:
        fundledger fund update "Misc / Flex" --name "Fun Money"
        fundledger fund update personal --description "Owner's draw"
    """
    if name is None and description is None and color is None:
        click.echo("Error: Nothing to update. Use --name, --description or --color.", err=True)
        ctx.exit(1)

    service = FundService(ctx.obj["db"])
    fund_id = resolve_fund_or_exit(ctx, service, fund)

    try:
        updated = service.update_fund(fund_id, name=name, description=description, color=color)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated fund '{updated.name}'")


@fund_group.command("delete")
@click.argument("fund", metavar="FUND")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_fund(ctx, fund: str, yes: bool):
    """Delete a fund.

    FUND can be a fund name or ID.

    The fund can only be deleted if its balance is exactly zero and no
    expense was paid from it. It is also removed from the profit
    distribution.

    Examples:
        fundledger fund delete "Vacation"
    """
    service = FundService(ctx.obj["db"])
    fund_id = resolve_fund_or_exit(ctx, service, fund)
    fund_obj = service.require_fund(fund_id)

    if not yes and not click.confirm(f"Are you sure you want to delete fund '{fund_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_fund(fund_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted fund '{fund_obj.name}'")


def register_commands(cli):
    """Register fund commands with main CLI."""
    cli.add_command(fund_group, name="fund")
