"""Report domain service.

Time filters select which transactions are aggregated; they never affect fund
balances.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Optional

from fundledger.database.base import Database
from fundledger.domain.entities import (
    ReportData,
    TopExpense,
    Transaction,
    TransactionType,
)
from fundledger.domain.store import LedgerStore


TOP_EXPENSE_COUNT = 5


def build_report(
    transactions: Iterable[Transaction],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    top_count: int = TOP_EXPENSE_COUNT,
) -> ReportData:
    """Aggregate transactions dated within [start_date, end_date]."""
    income = Decimal("0")
    expenses = Decimal("0")
    cost = Decimal("0")
    profit = Decimal("0")
    count = 0
    distributions: dict[str, Decimal] = {}
    outflows: dict[str, Decimal] = {}
    expense_lines: list[TopExpense] = []

    for txn in transactions:
        if start_date is not None and txn.date < start_date:
            continue
        if end_date is not None and txn.date > end_date:
            continue
        count += 1

        if txn.type == TransactionType.INCOME:
            income += txn.amount
            txn_cost = txn.cost_of_production or Decimal("0")
            cost += txn_cost
            profit += txn.profit if txn.profit is not None else txn.amount - txn_cost
            for allocation in txn.allocations:
                distributions[allocation.fund_id] = (
                    distributions.get(allocation.fund_id, Decimal("0")) + allocation.amount
                )
        else:
            expenses += txn.amount
            fund_id = txn.source_fund_id or ""
            outflows[fund_id] = outflows.get(fund_id, Decimal("0")) + txn.amount
            expense_lines.append(
                TopExpense(description=txn.description, amount=txn.amount, fund_id=fund_id)
            )

    expense_lines.sort(key=lambda line: line.amount, reverse=True)

    return ReportData(
        start_date=start_date,
        end_date=end_date,
        income=income,
        expenses=expenses,
        cost_of_production=cost,
        profit=profit,
        transaction_count=count,
        fund_distributions=distributions,
        fund_outflows=outflows,
        top_expenses=tuple(expense_lines[:top_count]),
    )


class ReportService:
    """Service for building period reports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self.store = LedgerStore(db)

    def build_report(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        top_count: int = TOP_EXPENSE_COUNT,
    ) -> ReportData:
        """Build a report for a date range (lifetime when both are None).

        Args:
            start_date: Optional start date (inclusive)
            end_date: Optional end date (inclusive)
            top_count: Number of largest expenses to include

        Returns:
            ReportData for the period
        """
        transactions = self.store.load_state().transactions
        return build_report(transactions, start_date, end_date, top_count=top_count)
