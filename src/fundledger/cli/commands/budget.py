"""Budget commands."""

import click
from fundledger.cli.error_handling import handle_domain_error
from fundledger.cli.fund_resolution import resolve_fund_or_exit
from fundledger.domain.budget import BudgetService
from fundledger.domain.entities import BudgetAllocation, BudgetStatus
from fundledger.domain.errors import DomainError
from fundledger.domain.fund import FundService
from fundledger.utils.amount_parser import parse_allocation, parse_amount


@click.group()
def budget_group():
    """Manage savings budgets linked to funds."""
    pass


def _parse_amount_or_exit(ctx, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@budget_group.command("create")
@click.argument("name")
@click.option("--target", required=True, help="Target amount (e.g., 5000)")
@click.option(
    "--fund",
    "funds",
    multiple=True,
    required=True,
    help="FUND=PERCENT share of the target (repeatable; must sum to 100)",
)
@click.pass_context
def create_budget(ctx, name: str, target: str, funds: tuple[str, ...]):
    """Create a budget.

    Budgets track a savings target; money stays in the linked funds.

    Examples:
        fundledger budget create "New laptop" --target 2000 --fund "Savings=100"
        fundledger budget create "Trip" --target 3000 --fund personal=70 --fund "Misc / Flex=30"
    """
    db = ctx.obj["db"]
    service = BudgetService(db)
    fund_service = FundService(db)

    target_amount = _parse_amount_or_exit(ctx, target)

    allocations = []
    for spec in funds:
        try:
            fund, percentage = parse_allocation(spec)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        fund_id = resolve_fund_or_exit(ctx, fund_service, fund)
        allocations.append(BudgetAllocation(fund_id=fund_id, percentage=percentage))

    try:
        budget = service.create_budget(name, target_amount, allocations)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created budget '{budget.name}' (ID: {budget.id})")


@budget_group.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value.lower() for s in BudgetStatus], case_sensitive=False),
    help="Show only budgets with this status",
)
@click.pass_context
def list_budgets(ctx, status: str | None):
    """List budgets with their progress."""
    service = BudgetService(ctx.obj["db"])
    status_filter = BudgetStatus(status.upper()) if status else None

    budgets = service.list_budgets(status=status_filter)
    if not budgets:
        click.echo("No budgets found.")
        return

    click.echo("\nBudgets:")
    click.echo("-" * 90)
    click.echo(
        f"{'ID':<10} {'Name':<24} {'Status':<10} {'Saved':>12} {'Target':>12} {'Progress':>9}"
    )
    click.echo("-" * 90)
    for budget in budgets:
        click.echo(
            f"{budget.id[:8]:<10} {budget.name[:24]:<24} {budget.status.value:<10} "
            f"{budget.current_amount:>12,.2f} {budget.target_amount:>12,.2f} "
            f"{budget.progress:>8.1f}%"
        )


@budget_group.command("show")
@click.argument("budget_id")
@click.pass_context
def show_budget(ctx, budget_id: str):
    """Show a budget and its fund allocations.

    BUDGET_ID may be a unique prefix of the ID.
    """
    db = ctx.obj["db"]
    try:
        budget = BudgetService(db).get_budget(budget_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    funds = {fund.id: fund for fund in FundService(db).list_funds()}
    click.echo(f"Budget: {budget.name}")
    click.echo(f"  ID: {budget.id}")
    click.echo(f"  Status: {budget.status.value}")
    click.echo(f"  Target: ${budget.target_amount:,.2f}")
    click.echo(f"  Saved: ${budget.current_amount:,.2f} ({budget.progress:.1f}%)")
    click.echo(f"  Remaining: ${budget.remaining:,.2f}")
    click.echo("  Funds:")
    for allocation in budget.allocations:
        fund = funds.get(allocation.fund_id)
        name = fund.name if fund else f"{allocation.fund_id} (deleted)"
        share = budget.target_amount * allocation.percentage / 100
        click.echo(f"    {name:24s} {allocation.percentage:>6.2f}%  ${share:>12,.2f}")


@budget_group.command("update")
@click.argument("budget_id")
@click.option("--name", help="New budget name")
@click.option("--target", help="New target amount")
@click.option("--saved", help="Amount saved so far")
@click.pass_context
def update_budget(ctx, budget_id: str, name: str | None, target: str | None, saved: str | None):
    """Update a budget's name, target or saved amount.

    Examples:
        fundledger budget update 3f2a --saved 750
        fundledger budget update 3f2a --target 2500 --name "Better laptop"
    """
    if name is None and target is None and saved is None:
        click.echo("Error: Nothing to update. Use --name, --target or --saved.", err=True)
        ctx.exit(1)

    target_amount = _parse_amount_or_exit(ctx, target) if target is not None else None
    saved_amount = _parse_amount_or_exit(ctx, saved) if saved is not None else None

    try:
        budget = BudgetService(ctx.obj["db"]).update_budget(
            budget_id, name=name, target_amount=target_amount, current_amount=saved_amount
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated budget '{budget.name}'")


@budget_group.command("complete")
@click.argument("budget_id")
@click.pass_context
def complete_budget(ctx, budget_id: str):
    """Mark a budget completed."""
    try:
        budget = BudgetService(ctx.obj["db"]).complete_budget(budget_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Completed budget '{budget.name}'")


@budget_group.command("archive")
@click.argument("budget_id")
@click.pass_context
def archive_budget(ctx, budget_id: str):
    """Archive a budget."""
    try:
        budget = BudgetService(ctx.obj["db"]).archive_budget(budget_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Archived budget '{budget.name}'")


@budget_group.command("delete")
@click.argument("budget_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_budget(ctx, budget_id: str, yes: bool):
    """Delete a budget. Fund balances are not affected."""
    service = BudgetService(ctx.obj["db"])
    try:
        budget = service.get_budget(budget_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete budget '{budget.name}'?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_budget(budget.id)
    click.echo(f"Deleted budget '{budget.name}'")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
