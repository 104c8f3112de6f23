"""Transaction validation rules.

Checks a prospective transaction against business rules and the current fund
state before it is allowed to mutate anything.
"""

from collections.abc import Mapping
from datetime import date
from typing import Optional

from fundledger.domain.entities import (
    Fund,
    TransactionRequest,
    TransactionType,
    ValidationResult,
)


def _reject(error: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error=error)


def validate_transaction(
    request: TransactionRequest,
    funds: Mapping[str, Fund],
    today: Optional[date] = None,
) -> ValidationResult:
    """Validate a transaction request for business rules.

    Rules are evaluated in order and the first failure is reported.

    Args:
        request: Transaction to validate
        funds: Current fund collection keyed by fund ID
        today: Evaluation date (defaults to the current date)

    Returns:
        ValidationResult with the rejection reason if invalid
    """
    if today is None:
        today = date.today()

    if request.amount <= 0:
        return _reject("Amount must be positive")

    if request.date > today:
        return _reject("Transaction date cannot be in the future")

    if request.type == TransactionType.INCOME:
        cost = request.cost_of_production
        if cost is None:
            return _reject("Cost of production is required for income")
        if cost < 0:
            return _reject("Cost of production cannot be negative")
        if cost > request.amount:
            return _reject("Cost of production cannot exceed income")
        # Checked on its own even though the rule above implies it
        if request.amount - cost < 0:
            return _reject("Profit must be non-negative")

    elif request.type == TransactionType.EXPENSE:
        if not request.source_fund_id:
            return _reject("Source fund is required for expenses")

        source_fund = funds.get(request.source_fund_id)
        if source_fund is None:
            return _reject("Selected fund does not exist")

        if source_fund.current_balance < request.amount:
            return _reject("Insufficient funds in selected fund")

    else:
        return _reject(f"Unknown transaction type '{request.type}'")

    return ValidationResult(is_valid=True)
