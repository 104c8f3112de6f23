"""Report command."""

import click
from fundledger.cli.date_filters import (
    collect_period_flags,
    period_options,
    resolve_cli_date_range,
)
from fundledger.domain.fund import FundService
from fundledger.domain.report import TOP_EXPENSE_COUNT, ReportService


def _fund_name(funds: dict[str, str], fund_id: str) -> str:
    return funds.get(fund_id, f"{fund_id} (deleted)")


@click.command("report")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@period_options
@click.option(
    "--top",
    default=TOP_EXPENSE_COUNT,
    show_default=True,
    type=click.IntRange(min=0),
    help="Number of largest expenses to list",
)
@click.pass_context
def report(ctx, start_date: str | None, end_date: str | None, top: int, **kwargs):
    """Show income, expenses, profit and per-fund movement for a period.

    Without any date option the report covers the whole history. Date
    filters only choose which transactions are summarized; fund balances
    are always lifetime values.

    Examples:
        fundledger report --this-month
        fundledger report --last-quarter
        fundledger report --start-date 2024-01-01 --end-date 2024-06-30
    """
    db = ctx.obj["db"]
    period_flags = collect_period_flags(kwargs)
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )

    data = ReportService(db).build_report(start_date=start, end_date=end, top_count=top)
    funds = {fund.id: fund.name for fund in FundService(db).list_funds()}

    if start is None and end is None:
        click.echo("\nReport: all time")
    else:
        click.echo(f"\nReport: {start or 'beginning'} to {end or 'today'}")
    click.echo("=" * 60)
    click.echo(f"{'Income':<40} {f'${data.income:,.2f}':>19}")
    click.echo(f"{'Cost of production':<40} {f'${data.cost_of_production:,.2f}':>19}")
    click.echo(f"{'Profit':<40} {f'${data.profit:,.2f}':>19}")
    click.echo(f"{'Expenses':<40} {f'${data.expenses:,.2f}':>19}")
    click.echo(f"{'Transactions':<40} {data.transaction_count:>19}")

    if data.fund_distributions:
        click.echo("\nProfit distributed:")
        for fund_id, amount in sorted(
            data.fund_distributions.items(), key=lambda item: item[1], reverse=True
        ):
            click.echo(f"  {_fund_name(funds, fund_id):<38} {f'${amount:,.2f}':>19}")

    if data.fund_outflows:
        click.echo("\nSpent by fund:")
        for fund_id, amount in sorted(
            data.fund_outflows.items(), key=lambda item: item[1], reverse=True
        ):
            click.echo(f"  {_fund_name(funds, fund_id):<38} {f'${amount:,.2f}':>19}")

    if data.top_expenses:
        click.echo("\nTop expenses:")
        for expense in data.top_expenses:
            label = expense.description or "(no description)"
            click.echo(
                f"  {label[:24]:<24} {_fund_name(funds, expense.fund_id)[:13]:<13} "
                f"{f'${expense.amount:,.2f}':>19}"
            )


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
