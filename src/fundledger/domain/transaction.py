"""Transaction domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from fundledger.database.base import Database
from fundledger.domain import engine
from fundledger.domain.entities import (
    Transaction,
    TransactionRequest,
    TransactionType,
)
from fundledger.domain.store import LedgerStore


class TransactionService:
    """Service for submitting and browsing transactions.

    Transactions are append-only: there is no update or delete.
    """

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.store = LedgerStore(db)

    def submit(self, request: TransactionRequest, today: Optional[date] = None) -> Transaction:
        """Validate a request, apply it to the funds and record it.

        Args:
            request: Transaction request
            today: Evaluation date for the future-date rule

        Returns:
            The finalized transaction

        Raises:
            ValidationError: With the rejection reason; nothing is saved
        """
        state = self.store.load_state()
        transaction, new_state = engine.submit_transaction(state, request, today=today)
        self.store.save_state(new_state)
        return transaction

    def submit_income(
        self,
        amount: Decimal,
        cost_of_production: Optional[Decimal],
        date: date,
        description: str = "",
    ) -> Transaction:
        """Record income; only its profit is distributed to funds.

        Args:
            amount: Gross income
            cost_of_production: Cost of producing the income
            date: Transaction date
            description: Optional description

        Returns:
            The finalized transaction
        """
        return self.submit(
            TransactionRequest(
                type=TransactionType.INCOME,
                amount=amount,
                date=date,
                description=description,
                cost_of_production=cost_of_production,
            )
        )

    def submit_expense(
        self,
        amount: Decimal,
        source_fund_id: Optional[str],
        date: date,
        description: str = "",
    ) -> Transaction:
        """Record an expense paid from a fund.

        Args:
            amount: Expense amount
            source_fund_id: Fund the money is taken from
            date: Transaction date
            description: Optional description

        Returns:
            The finalized transaction
        """
        return self.submit(
            TransactionRequest(
                type=TransactionType.EXPENSE,
                amount=amount,
                date=date,
                description=description,
                source_fund_id=source_fund_id,
            )
        )

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID (a unique prefix is accepted)

        Returns:
            Transaction entity or None if not found or ambiguous
        """
        transactions = self.store.load_state().transactions
        for txn in transactions:
            if txn.id == transaction_id:
                return txn

        matches = [txn for txn in transactions if txn.id.startswith(transaction_id)]
        if len(matches) == 1:
            return matches[0]
        return None

    def list_transactions(
        self,
        transaction_type: Optional[TransactionType] = None,
        fund_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions in insertion order with filters.

        Args:
            transaction_type: Optional type filter
            fund_id: Optional fund filter (expense source or income allocation)
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)

        Returns:
            List of transaction entities
        """
        results = []
        for txn in self.store.load_state().transactions:
            if transaction_type is not None and txn.type != transaction_type:
                continue
            if start_date is not None and txn.date < start_date:
                continue
            if end_date is not None and txn.date > end_date:
                continue
            if fund_id is not None and not _touches_fund(txn, fund_id):
                continue
            results.append(txn)
        return results


def _touches_fund(txn: Transaction, fund_id: str) -> bool:
    if txn.source_fund_id == fund_id:
        return True
    return any(allocation.fund_id == fund_id for allocation in txn.allocations)
