"""Transaction browsing commands.

Transactions are an append-only audit trail; there is no update or delete.
"""

import click
from fundledger.cli.date_filters import resolve_cli_date_range
from fundledger.cli.fund_resolution import resolve_fund_or_exit
from fundledger.domain.entities import TransactionType
from fundledger.domain.fund import FundService
from fundledger.domain.transaction import TransactionService


@click.group()
def transaction_group():
    """Browse recorded transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(["income", "expense"], case_sensitive=False),
    help="Show only income or only expenses",
)
@click.option("--fund", help="Fund name or ID (expense source or income allocation)")
@click.option("--verbose", "-v", is_flag=True, help="Show allocations and timestamps")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    transaction_type: str | None,
    fund: str | None,
    verbose: bool,
):
    """View transactions with optional filters.

    Fund can be specified by name or ID.
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    fund_service = FundService(db)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags={}
    )

    fund_id = None
    if fund:
        fund_id = resolve_fund_or_exit(ctx, fund_service, fund)

    type_filter = TransactionType(transaction_type.upper()) if transaction_type else None

    transactions = service.list_transactions(
        transaction_type=type_filter, fund_id=fund_id, start_date=start, end_date=end
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    funds = {f.id: f.name for f in fund_service.list_funds()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            _echo_transaction(txn, funds)
            click.echo("-" * 100)
    else:
        click.echo("-" * 100)
        click.echo(
            f"{'ID':<10} {'Date':<12} {'Type':<8} {'Amount':>12} {'Profit':>12}  {'Fund':<20} {'Description':<20}"
        )
        click.echo("-" * 100)
        for txn in transactions:
            profit_str = f"${txn.profit:,.2f}" if txn.profit is not None else ""
            amount_str = f"${txn.amount:,.2f}"
            fund_name = funds.get(txn.source_fund_id, "") if txn.source_fund_id else ""
            click.echo(
                f"{txn.id[:8]:<10} {str(txn.date):<12} {txn.type.value:<8} "
                f"{amount_str:>12} {profit_str:>12}  {fund_name[:20]:<20} "
                f"{txn.description[:20]:<20}"
            )

    total_income = sum(t.amount for t in transactions if t.type == TransactionType.INCOME)
    total_profit = sum(t.profit or 0 for t in transactions if t.type == TransactionType.INCOME)
    total_expenses = sum(t.amount for t in transactions if t.type == TransactionType.EXPENSE)
    click.echo("-" * 100)
    click.echo(
        f"{'TOTAL':<10} Income: ${total_income:,.2f} | Profit: ${total_profit:,.2f} | "
        f"Expenses: ${total_expenses:,.2f} | Count: {len(transactions)}"
    )


@transaction_group.command("show")
@click.argument("transaction_id")
@click.pass_context
def show_transaction(ctx, transaction_id: str):
    """Show one transaction with its fund allocations.

    TRANSACTION_ID may be a unique prefix of the ID.
    """
    db = ctx.obj["db"]
    txn = TransactionService(db).get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    funds = {f.id: f.name for f in FundService(db).list_funds()}
    _echo_transaction(txn, funds)


def _echo_transaction(txn, funds: dict[str, str]) -> None:
    click.echo(f"\nTransaction ID: {txn.id}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: ${txn.amount:,.2f}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    if txn.type == TransactionType.INCOME:
        click.echo(f"  Cost of production: ${txn.cost_of_production or 0:,.2f}")
        click.echo(f"  Profit: ${txn.profit or 0:,.2f}")
        for allocation in txn.allocations:
            name = funds.get(allocation.fund_id, f"{allocation.fund_id} (deleted)")
            click.echo(f"    -> {name:24s} ${allocation.amount:>12,.2f}")
    else:
        name = funds.get(txn.source_fund_id, f"{txn.source_fund_id} (deleted)")
        click.echo(f"  Fund: {name}")
    click.echo(f"  Recorded: {txn.created_at.isoformat()}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
