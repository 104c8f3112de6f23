"""Tests for snapshot payload mappers."""

import json
import pytest
from dataclasses import replace
from datetime import date, datetime, UTC
from decimal import Decimal

from fundledger.database.mappers import (
    CURRENT_VERSION,
    export_data,
    fund_from_payload,
    fund_to_payload,
    import_data,
    payload_to_stored_data,
    stored_data_to_payload,
    transaction_from_payload,
)
from fundledger.domain.defaults import default_state
from fundledger.domain.entities import (
    Budget,
    BudgetAllocation,
    BudgetStatus,
    FundAllocation,
    StoredData,
    Transaction,
    TransactionType,
)
from fundledger.domain.errors import DataFormatError


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def make_stored_data():
    state = default_state(NOW)
    income = Transaction(
        id="txn-1",
        type=TransactionType.INCOME,
        amount=Decimal("1000"),
        date=date(2024, 5, 31),
        description="Client A",
        created_at=NOW,
        updated_at=NOW,
        cost_of_production=Decimal("300"),
        profit=Decimal("700"),
        allocations=(FundAllocation(fund_id="personal", amount=Decimal("175.00")),),
    )
    budget = Budget(
        id="budget-1",
        name="Laptop",
        target_amount=Decimal("2000"),
        current_amount=Decimal("250.50"),
        status=BudgetStatus.ACTIVE,
        allocations=(BudgetAllocation(fund_id="reinvestment", percentage=Decimal("100")),),
        created_at=NOW,
        updated_at=NOW,
    )
    return StoredData(
        version=CURRENT_VERSION,
        state=replace(state, transactions=(income,)),
        budgets=(budget,),
    )


class TestFundMapper:
    """Tests for fund payload conversion."""

    def test_fund_payload_keys(self):
        fund = default_state(NOW).funds["taxes"]
        payload = fund_to_payload(fund)

        assert payload["currentBalance"] == "0"
        assert payload["isTaxFund"] is True
        assert payload["color"] == "#6B7280"
        assert payload["createdAt"] == "2024-06-01T12:00:00+00:00"

    def test_fund_accepts_numbers_and_naive_timestamps(self):
        fund = fund_from_payload(
            {
                "id": "savings",
                "name": "Savings",
                "description": "Rainy days",
                "currentBalance": 12.5,
                "lifetimeInflow": 20,
                "lifetimeOutflow": Decimal("7.5"),
                "createdAt": "2024-01-01T10:00:00",
                "updatedAt": "2024-01-02T10:00:00.000Z",
            }
        )

        assert fund.current_balance == Decimal("12.5")
        assert fund.lifetime_inflow == Decimal("20")
        assert fund.created_at == datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
        assert fund.updated_at.tzinfo is not None
        assert fund.color is None
        assert fund.is_tax_fund is False


class TestTransactionMapper:
    """Tests for transaction payload conversion."""

    def test_expense_payload(self):
        txn = transaction_from_payload(
            {
                "id": "e1",
                "type": "EXPENSE",
                "amount": "50",
                "date": "2024-03-05T00:00:00.000Z",
                "description": "Ink",
                "sourceFundId": "misc",
                "createdAt": "2024-03-05T09:00:00Z",
                "updatedAt": "2024-03-05T09:00:00Z",
            }
        )

        assert txn.type == TransactionType.EXPENSE
        assert txn.date == date(2024, 3, 5)
        assert txn.source_fund_id == "misc"
        assert txn.allocations == ()
        assert txn.profit is None

    def test_unknown_type(self):
        with pytest.raises(DataFormatError, match="Unknown transaction type"):
            transaction_from_payload({"id": "x", "type": "TRANSFER"})


class TestStoredData:
    """Tests for whole-snapshot conversion."""

    def test_payload_round_trip(self):
        data = make_stored_data()
        payload = json.loads(json.dumps(stored_data_to_payload(data)))

        assert payload["version"] == CURRENT_VERSION
        assert payload["reportFilters"] == {"period": "LIFETIME"}
        assert payload_to_stored_data(payload) == data

    def test_export_is_indented_json(self):
        document = export_data(make_stored_data())

        assert document.startswith("{\n  ")
        assert json.loads(document)["state"]["taxEnabled"] is True

    def test_import_restores_exported_document(self):
        data = make_stored_data()
        restored = import_data(export_data(data))

        assert restored == data
        assert restored.budgets[0].current_amount == Decimal("250.50")

    def test_version_mismatch(self):
        payload = stored_data_to_payload(make_stored_data())
        payload["version"] = 2

        with pytest.raises(DataFormatError, match="Invalid data version. Expected 1, got 2"):
            payload_to_stored_data(payload)

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "not a dict",
            {"version": 1},
            {"version": 1, "state": {"funds": []}},
        ],
    )
    def test_invalid_structure(self, payload):
        with pytest.raises(DataFormatError, match="Invalid data structure"):
            payload_to_stored_data(payload)

    def test_missing_fund_field(self):
        payload = stored_data_to_payload(make_stored_data())
        del payload["state"]["funds"]["personal"]["currentBalance"]

        with pytest.raises(DataFormatError, match="Invalid data structure"):
            payload_to_stored_data(payload)

    def test_invalid_amount(self):
        payload = stored_data_to_payload(make_stored_data())
        payload["state"]["funds"]["personal"]["currentBalance"] = "lots"

        with pytest.raises(DataFormatError, match="Invalid amount"):
            payload_to_stored_data(payload)

    def test_fund_key_must_match_id(self):
        payload = stored_data_to_payload(make_stored_data())
        payload["state"]["funds"]["personal"]["id"] = "emergency"

        with pytest.raises(DataFormatError, match="mismatched id 'emergency'"):
            payload_to_stored_data(payload)

    def test_unbalanced_fund_is_rejected(self):
        payload = stored_data_to_payload(make_stored_data())
        payload["state"]["funds"]["personal"]["currentBalance"] = "50.00"

        with pytest.raises(DataFormatError, match="balance 50.00 does not equal"):
            payload_to_stored_data(payload)

    def test_import_rejects_malformed_json(self):
        with pytest.raises(DataFormatError, match="Failed to parse JSON"):
            import_data("{not json")
