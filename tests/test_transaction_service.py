"""Tests for TransactionService."""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from fundledger.domain.entities import TransactionRequest, TransactionType
from fundledger.domain.errors import ValidationError


def test_submit_income_distributes_profit(transaction_service, fund_service):
    txn = transaction_service.submit_income(
        amount=Decimal("1000"),
        cost_of_production=Decimal("300"),
        date=date(2024, 1, 15),
        description="Client A",
    )

    assert txn.type == TransactionType.INCOME
    assert txn.profit == Decimal("700")
    balances = {f.id: f.current_balance for f in fund_service.list_funds()}
    assert balances == {
        "business-savings": Decimal("140.00"),
        "reinvestment": Decimal("105.00"),
        "personal": Decimal("175.00"),
        "emergency": Decimal("70.00"),
        "baby": Decimal("35.00"),
        "general-savings": Decimal("70.00"),
        "misc": Decimal("70.00"),
        "taxes": Decimal("35.00"),
    }
    assert sum(balances.values()) == txn.profit


def test_submit_expense(funded_ledger, fund_service):
    txn = funded_ledger.submit_expense(
        amount=Decimal("25.50"),
        source_fund_id="personal",
        date=date(2024, 1, 16),
        description="Lunch",
    )

    assert txn.source_fund_id == "personal"
    personal = fund_service.get_fund("personal")
    assert personal.current_balance == Decimal("149.50")
    assert personal.lifetime_outflow == Decimal("25.50")
    assert fund_service.get_fund("misc").current_balance == Decimal("70.00")


def test_rejected_expense_changes_nothing(funded_ledger, fund_service):
    with pytest.raises(ValidationError, match="Insufficient funds in selected fund"):
        funded_ledger.submit_expense(Decimal("36"), "baby", date(2024, 1, 16))

    assert fund_service.get_fund("baby").current_balance == Decimal("35.00")
    assert len(funded_ledger.list_transactions()) == 1


def test_future_dated_request_rejected(transaction_service):
    request = TransactionRequest(
        type=TransactionType.INCOME,
        amount=Decimal("10"),
        date=date(2024, 6, 2),
        cost_of_production=Decimal("0"),
    )
    with pytest.raises(ValidationError, match="cannot be in the future"):
        transaction_service.submit(request, today=date(2024, 6, 1))

    transaction_service.submit(request, today=date(2024, 6, 2))
    assert len(transaction_service.list_transactions()) == 1


def test_today_is_accepted_without_explicit_date(transaction_service):
    txn = transaction_service.submit_income(Decimal("10"), Decimal("0"), date.today())
    assert txn.date == date.today()


def test_missing_cost_rejected(transaction_service):
    with pytest.raises(ValidationError, match="Cost of production is required for income"):
        transaction_service.submit_income(Decimal("10"), None, date(2024, 1, 1))


def test_get_transaction_by_id_and_prefix(funded_ledger):
    txn = funded_ledger.list_transactions()[0]

    assert funded_ledger.get_transaction(txn.id) == txn
    assert funded_ledger.get_transaction(txn.id[:8]) == txn
    assert funded_ledger.get_transaction("does-not-exist") is None


def test_list_filters(funded_ledger):
    funded_ledger.submit_expense(Decimal("10"), "misc", date(2024, 2, 1), "Coffee")
    funded_ledger.submit_expense(Decimal("5"), "personal", date(2024, 3, 1), "Book")

    assert len(funded_ledger.list_transactions()) == 3
    assert [t.description for t in funded_ledger.list_transactions(transaction_type=TransactionType.EXPENSE)] == [
        "Coffee",
        "Book",
    ]
    # income allocations count as touching a fund
    assert [t.description for t in funded_ledger.list_transactions(fund_id="misc")] == [
        "Client A",
        "Coffee",
    ]
    assert [
        t.description
        for t in funded_ledger.list_transactions(
            start_date=date(2024, 1, 20), end_date=date(2024, 2, 28)
        )
    ] == ["Coffee"]


def test_transactions_keep_insertion_order(transaction_service):
    start = date(2024, 1, 10)
    for offset in (3, 1, 2):
        transaction_service.submit_income(
            Decimal("10"), Decimal("0"), start + timedelta(days=offset), f"day {offset}"
        )

    assert [t.description for t in transaction_service.list_transactions()] == [
        "day 3",
        "day 1",
        "day 2",
    ]
