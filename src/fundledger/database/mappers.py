"""Mapper functions to convert between domain models and the stored snapshot.

This layer isolates the conversion logic, so the payload layout can change
without touching the engine. The payload uses camelCase keys and ISO-8601
dates; monetary amounts and percentages are written as decimal strings and
accepted back either as strings or as JSON numbers.
"""

import json
from datetime import datetime, date, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from dateutil import parser as date_parser

from fundledger.domain import entities as domain
from fundledger.domain.errors import DataFormatError


STORAGE_KEY = "finance_tracker_data"
CURRENT_VERSION = 1


def _decimal_to_payload(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def _decimal_from_payload(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise DataFormatError(f"Invalid amount: {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise DataFormatError(f"Invalid amount: {value!r}") from e


def _optional_decimal_from_payload(value: Any) -> Optional[Decimal]:
    return None if value is None else _decimal_from_payload(value)


def _datetime_from_payload(value: Any) -> datetime:
    if not isinstance(value, str):
        raise DataFormatError(f"Invalid timestamp: {value!r}")
    try:
        parsed = date_parser.isoparse(value)
    except ValueError as e:
        raise DataFormatError(f"Invalid timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _date_from_payload(value: Any) -> date:
    return _datetime_from_payload(value).date()


def fund_to_payload(fund: domain.Fund) -> dict[str, Any]:
    """Convert a domain Fund to its payload dict."""
    payload = {
        "id": fund.id,
        "name": fund.name,
        "description": fund.description,
        "currentBalance": _decimal_to_payload(fund.current_balance),
        "lifetimeInflow": _decimal_to_payload(fund.lifetime_inflow),
        "lifetimeOutflow": _decimal_to_payload(fund.lifetime_outflow),
        "createdAt": fund.created_at.isoformat(),
        "updatedAt": fund.updated_at.isoformat(),
    }
    if fund.color is not None:
        payload["color"] = fund.color
    if fund.is_tax_fund:
        payload["isTaxFund"] = True
    return payload


def fund_from_payload(payload: dict[str, Any]) -> domain.Fund:
    """Convert a payload dict to a domain Fund."""
    return domain.Fund(
        id=str(payload["id"]),
        name=payload["name"],
        description=payload.get("description", ""),
        current_balance=_decimal_from_payload(payload["currentBalance"]),
        lifetime_inflow=_decimal_from_payload(payload["lifetimeInflow"]),
        lifetime_outflow=_decimal_from_payload(payload["lifetimeOutflow"]),
        created_at=_datetime_from_payload(payload["createdAt"]),
        updated_at=_datetime_from_payload(payload["updatedAt"]),
        color=payload.get("color"),
        is_tax_fund=bool(payload.get("isTaxFund", False)),
    )


def transaction_to_payload(transaction: domain.Transaction) -> dict[str, Any]:
    """Convert a domain Transaction to its payload dict."""
    payload: dict[str, Any] = {
        "id": transaction.id,
        "type": transaction.type.value,
        "amount": _decimal_to_payload(transaction.amount),
        "date": transaction.date.isoformat(),
        "description": transaction.description,
        "createdAt": transaction.created_at.isoformat(),
        "updatedAt": transaction.updated_at.isoformat(),
    }
    if transaction.type == domain.TransactionType.INCOME:
        payload["costOfProduction"] = _decimal_to_payload(transaction.cost_of_production)
        payload["profit"] = _decimal_to_payload(transaction.profit)
        payload["allocations"] = [
            {"fundId": allocation.fund_id, "amount": _decimal_to_payload(allocation.amount)}
            for allocation in transaction.allocations
        ]
    if transaction.source_fund_id is not None:
        payload["sourceFundId"] = transaction.source_fund_id
    return payload


def transaction_from_payload(payload: dict[str, Any]) -> domain.Transaction:
    """Convert a payload dict to a domain Transaction."""
    try:
        txn_type = domain.TransactionType(payload["type"])
    except ValueError as e:
        raise DataFormatError(f"Unknown transaction type: {payload['type']!r}") from e

    return domain.Transaction(
        id=str(payload["id"]),
        type=txn_type,
        amount=_decimal_from_payload(payload["amount"]),
        date=_date_from_payload(payload["date"]),
        description=payload.get("description", ""),
        created_at=_datetime_from_payload(payload["createdAt"]),
        updated_at=_datetime_from_payload(payload["updatedAt"]),
        cost_of_production=_optional_decimal_from_payload(payload.get("costOfProduction")),
        profit=_optional_decimal_from_payload(payload.get("profit")),
        allocations=tuple(
            domain.FundAllocation(
                fund_id=str(item["fundId"]),
                amount=_decimal_from_payload(item["amount"]),
            )
            for item in payload.get("allocations") or []
        ),
        source_fund_id=payload.get("sourceFundId"),
    )


def budget_to_payload(budget: domain.Budget) -> dict[str, Any]:
    """Convert a domain Budget to its payload dict."""
    return {
        "id": budget.id,
        "name": budget.name,
        "targetAmount": _decimal_to_payload(budget.target_amount),
        "currentAmount": _decimal_to_payload(budget.current_amount),
        "status": budget.status.value,
        "allocations": [
            {"fundId": allocation.fund_id, "percentage": _decimal_to_payload(allocation.percentage)}
            for allocation in budget.allocations
        ],
        "createdAt": budget.created_at.isoformat(),
        "updatedAt": budget.updated_at.isoformat(),
    }


def budget_from_payload(payload: dict[str, Any]) -> domain.Budget:
    """Convert a payload dict to a domain Budget."""
    try:
        status = domain.BudgetStatus(payload.get("status", "ACTIVE"))
    except ValueError as e:
        raise DataFormatError(f"Unknown budget status: {payload.get('status')!r}") from e

    return domain.Budget(
        id=str(payload["id"]),
        name=payload["name"],
        target_amount=_decimal_from_payload(payload["targetAmount"]),
        current_amount=_decimal_from_payload(payload.get("currentAmount", 0)),
        status=status,
        allocations=tuple(
            domain.BudgetAllocation(
                fund_id=str(item["fundId"]),
                percentage=_decimal_from_payload(item["percentage"]),
            )
            for item in payload.get("allocations") or []
        ),
        created_at=_datetime_from_payload(payload["createdAt"]),
        updated_at=_datetime_from_payload(payload["updatedAt"]),
    )


def stored_data_to_payload(data: domain.StoredData) -> dict[str, Any]:
    """Convert StoredData to the versioned snapshot dict."""
    state = data.state
    return {
        "version": data.version,
        "state": {
            "funds": {fund_id: fund_to_payload(fund) for fund_id, fund in state.funds.items()},
            "transactions": [transaction_to_payload(txn) for txn in state.transactions],
            "profitDistribution": [
                {"fundId": entry.fund_id, "percentage": _decimal_to_payload(entry.percentage)}
                for entry in state.profit_distribution
            ],
            "taxEnabled": state.tax_enabled,
            "lastUpdated": state.last_updated.isoformat(),
        },
        "budgets": [budget_to_payload(budget) for budget in data.budgets],
        "reportFilters": {"period": "LIFETIME"},
    }


def _check_funds(funds: dict[str, domain.Fund]) -> None:
    for fund_id, fund in funds.items():
        if fund.id != fund_id:
            raise DataFormatError(
                f"Fund stored under '{fund_id}' has mismatched id '{fund.id}'"
            )
        if fund.current_balance != fund.lifetime_inflow - fund.lifetime_outflow:
            raise DataFormatError(
                f"Fund '{fund_id}' balance {fund.current_balance} does not equal "
                f"inflow {fund.lifetime_inflow} minus outflow {fund.lifetime_outflow}"
            )


def payload_to_stored_data(
    payload: Any, expected_version: int = CURRENT_VERSION
) -> domain.StoredData:
    """Convert a snapshot dict to StoredData.

    Raises:
        DataFormatError: If the version does not match, the structure is invalid
            or a fund is keyed under another id or has an unbalanced ledger
    """
    if not isinstance(payload, dict):
        raise DataFormatError("Invalid data structure")

    version = payload.get("version")
    if version != expected_version:
        raise DataFormatError(
            f"Invalid data version. Expected {expected_version}, got {version}"
        )

    raw_state = payload.get("state")
    if not isinstance(raw_state, dict) or not isinstance(raw_state.get("funds"), dict):
        raise DataFormatError("Invalid data structure")

    try:
        funds = {str(fund_id): fund_from_payload(item) for fund_id, item in raw_state["funds"].items()}
        state = domain.FinancialState(
            funds=funds,
            transactions=tuple(
                transaction_from_payload(item) for item in raw_state.get("transactions") or []
            ),
            profit_distribution=tuple(
                domain.DistributionEntry(
                    fund_id=str(item["fundId"]),
                    percentage=_decimal_from_payload(item["percentage"]),
                )
                for item in raw_state.get("profitDistribution") or []
            ),
            tax_enabled=bool(raw_state.get("taxEnabled", False)),
            last_updated=_datetime_from_payload(raw_state["lastUpdated"]),
        )
        budgets = tuple(budget_from_payload(item) for item in payload.get("budgets") or [])
    except (KeyError, TypeError, AttributeError) as e:
        raise DataFormatError(f"Invalid data structure: {e}") from e

    _check_funds(funds)

    return domain.StoredData(version=expected_version, state=state, budgets=budgets)


def export_data(data: domain.StoredData) -> str:
    """Serialize StoredData as an indented JSON document."""
    return json.dumps(stored_data_to_payload(data), indent=2)


def import_data(raw: str, expected_version: int = CURRENT_VERSION) -> domain.StoredData:
    """Parse a JSON document produced by export_data.

    Raises:
        DataFormatError: If the document cannot be parsed or has the wrong version
    """
    try:
        payload = json.loads(raw, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise DataFormatError(f"Failed to parse JSON: {e}") from e
    return payload_to_stored_data(payload, expected_version=expected_version)
