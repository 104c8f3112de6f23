"""Fund ledger mutator.

Applies a validated transaction's monetary effect to the fund collection and
returns the successor collection. The input mapping and its Fund objects are
never modified.
"""

from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from fundledger.domain.calculations import calculate_profit, distribute_profit
from fundledger.domain.entities import (
    DistributionEntry,
    Fund,
    Transaction,
    TransactionType,
)
from fundledger.domain.errors import NotFoundError, ValidationError, fund_not_found


def credit_fund(fund: Fund, amount: Decimal, now: datetime) -> Fund:
    """Return a copy of the fund with an inflow applied."""
    return replace(
        fund,
        current_balance=fund.current_balance + amount,
        lifetime_inflow=fund.lifetime_inflow + amount,
        updated_at=now,
    )


def debit_fund(fund: Fund, amount: Decimal, now: datetime) -> Fund:
    """Return a copy of the fund with an outflow applied."""
    return replace(
        fund,
        current_balance=fund.current_balance - amount,
        lifetime_outflow=fund.lifetime_outflow + amount,
        updated_at=now,
    )


def allocate_income(
    funds: Mapping[str, Fund],
    transaction: Transaction,
    distribution: Sequence[DistributionEntry],
) -> dict[str, Decimal]:
    """Compute the per-fund profit allocation of an income transaction.

    Raises:
        ValidationError: If the transaction carries no cost of production or
            the distribution is invalid
        NotFoundError: If the distribution names a fund that does not exist
    """
    if transaction.cost_of_production is None:
        raise ValidationError("Cost of production is required for income")

    profit = calculate_profit(transaction.amount, transaction.cost_of_production)
    allocations = distribute_profit(profit, distribution)

    for fund_id in allocations:
        if fund_id not in funds:
            raise NotFoundError(fund_not_found(fund_id))

    return allocations


def apply_transaction_to_funds(
    funds: Mapping[str, Fund],
    transaction: Transaction,
    distribution: Sequence[DistributionEntry] = (),
    now: Optional[datetime] = None,
) -> dict[str, Fund]:
    """Apply a validated transaction to funds.

    Income credits only the distributed profit; the raw amount and the cost
    of production never touch a fund. An expense debits its source fund.

    Args:
        funds: Current funds keyed by ID
        transaction: Validated transaction to apply
        distribution: Active profit distribution (used for income only)
        now: Timestamp for updated funds (defaults to current UTC time)

    Returns:
        New fund mapping reflecting the transaction

    Raises:
        ValidationError: If the transaction cannot be applied
        NotFoundError: If a referenced fund does not exist
    """
    if now is None:
        now = datetime.now(UTC)

    updated = dict(funds)

    if transaction.type == TransactionType.INCOME:
        allocations = allocate_income(funds, transaction, distribution)
        for fund_id, amount in allocations.items():
            if amount != 0:
                updated[fund_id] = credit_fund(updated[fund_id], amount, now)

    elif transaction.type == TransactionType.EXPENSE:
        source_id = transaction.source_fund_id
        if source_id is None or source_id not in updated:
            raise NotFoundError(fund_not_found(str(source_id)))
        updated[source_id] = debit_fund(updated[source_id], transaction.amount, now)

    return updated
