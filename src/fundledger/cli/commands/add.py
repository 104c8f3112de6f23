"""Income and expense commands."""

import click
from fundledger.cli.error_handling import handle_domain_error
from fundledger.cli.fund_resolution import resolve_fund_or_exit
from fundledger.domain.errors import DomainError
from fundledger.domain.fund import FundService
from fundledger.domain.transaction import TransactionService
from fundledger.utils.amount_parser import parse_amount
from fundledger.utils.date_parser import parse_date


DATE_HELP = "Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')"


def _parse_date_or_exit(ctx, value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str, label: str = "amount"):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label} format: {e}", err=True)
        ctx.exit(1)


@click.command("income")
@click.option("--amount", required=True, help="Gross income (e.g., 1000.00)")
@click.option("--cost", "cost", required=True, help="Cost of production (e.g., 300.00)")
@click.option("--date", "date_str", default="today", show_default=True, help=DATE_HELP)
@click.option("--description", default="", help="Transaction description")
@click.pass_context
def add_income(ctx, amount: str, cost: str, date_str: str, description: str):
    """Record income and distribute its profit to funds.

    Profit is the amount minus the cost of production. It is split across
    funds according to the active profit distribution.

    Examples:
        fundledger income --amount 1000 --cost 300 --description "Client A"
        fundledger income --amount 2500 --cost 0 --date 2024-03-01
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    fund_service = FundService(db)

    txn_date = _parse_date_or_exit(ctx, date_str)
    txn_amount = _parse_amount_or_exit(ctx, amount)
    txn_cost = _parse_amount_or_exit(ctx, cost, label="cost")

    try:
        transaction = transaction_service.submit_income(
            amount=txn_amount,
            cost_of_production=txn_cost,
            date=txn_date,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded income {transaction.id}")
    click.echo(f"  Date: {transaction.date}")
    click.echo(f"  Amount: ${transaction.amount:,.2f}")
    click.echo(f"  Cost of production: ${transaction.cost_of_production:,.2f}")
    click.echo(f"  Profit: ${transaction.profit:,.2f}")
    if transaction.description:
        click.echo(f"  Description: {transaction.description}")

    allocations = [a for a in transaction.allocations if a.amount != 0]
    if allocations:
        click.echo("  Distributed:")
        for allocation in allocations:
            fund = fund_service.get_fund(allocation.fund_id)
            name = fund.name if fund else allocation.fund_id
            click.echo(f"    {name:24s} ${allocation.amount:>12,.2f}")


@click.command("expense")
@click.option("--amount", required=True, help="Expense amount (e.g., 50.00)")
@click.option("--fund", required=True, help="Fund name or ID the money is taken from")
@click.option("--date", "date_str", default="today", show_default=True, help=DATE_HELP)
@click.option("--description", default="", help="Transaction description")
@click.pass_context
def add_expense(ctx, amount: str, fund: str, date_str: str, description: str):
    """Record an expense paid from a single fund.

    Examples:
        fundledger expense --amount 50 --fund "Operating Expenses" --description "Printer ink"
        fundledger expense --amount 120 --fund marketing --date yesterday
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    fund_service = FundService(db)

    fund_id = resolve_fund_or_exit(ctx, fund_service, fund)
    txn_date = _parse_date_or_exit(ctx, date_str)
    txn_amount = _parse_amount_or_exit(ctx, amount)

    try:
        transaction = transaction_service.submit_expense(
            amount=txn_amount,
            source_fund_id=fund_id,
            date=txn_date,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    fund_obj = fund_service.require_fund(fund_id)
    click.echo(f"Recorded expense {transaction.id}")
    click.echo(f"  Date: {transaction.date}")
    click.echo(f"  Amount: ${transaction.amount:,.2f}")
    click.echo(f"  Fund: {fund_obj.name} (remaining ${fund_obj.current_balance:,.2f})")
    if transaction.description:
        click.echo(f"  Description: {transaction.description}")


def register_commands(cli):
    """Register income and expense commands with main CLI."""
    cli.add_command(add_income)
    cli.add_command(add_expense)
