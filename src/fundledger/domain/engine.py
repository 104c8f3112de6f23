"""Ledger engine operations over an explicit FinancialState.

Every operation is a pure function: it takes the current state, validates the
request completely, and only then builds and returns the successor state. A
rejected request raises before anything is built, so callers keep their
current state untouched.
"""

from collections.abc import Sequence
from dataclasses import replace
from datetime import date, datetime, UTC
from typing import Optional
from uuid import uuid4

from fundledger.domain.calculations import (
    HUNDRED,
    calculate_profit,
    distribution_total,
    validate_profit_distribution,
)
from fundledger.domain.defaults import default_tax_fund, new_fund
from fundledger.domain.entities import (
    DistributionEntry,
    FinancialState,
    Fund,
    FundAllocation,
    Transaction,
    TransactionRequest,
    TransactionType,
)
from fundledger.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    duplicate_fund_name,
    fund_delete_blocked_balance,
    fund_delete_blocked_references,
    fund_not_found,
)
from fundledger.domain.ledger import allocate_income, apply_transaction_to_funds
from fundledger.domain.tax import (
    TAX_FUND_ID,
    disable_tax_allocation,
    enable_tax_allocation,
)
from fundledger.domain.validation import validate_transaction
from fundledger.log import get_logger


logger = get_logger(__name__)


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(UTC)


def submit_transaction(
    state: FinancialState,
    request: TransactionRequest,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> tuple[Transaction, FinancialState]:
    """Validate and apply a transaction request.

    Args:
        state: Current financial state
        request: Transaction request (without id or timestamps)
        today: Evaluation date for the future-date rule
        now: Timestamp assigned to the transaction and touched funds

    Returns:
        Tuple of (finalized transaction, successor state)

    Raises:
        ValidationError: With the rejection reason; state is not modified
        NotFoundError: If the active distribution names a missing fund
    """
    result = validate_transaction(request, state.funds, today=today)
    if not result.is_valid:
        logger.info("transaction_rejected", type=request.type.value, reason=result.error)
        raise ValidationError(result.error)

    now = _now(now)
    transaction = Transaction(
        id=str(uuid4()),
        type=request.type,
        amount=request.amount,
        date=request.date,
        description=request.description,
        created_at=now,
        updated_at=now,
    )

    if request.type == TransactionType.INCOME:
        distribution_check = validate_profit_distribution(state.profit_distribution)
        if not distribution_check.is_valid:
            logger.info("transaction_rejected", type=request.type.value, reason=distribution_check.error)
            raise ValidationError(distribution_check.error)

        transaction = replace(
            transaction,
            cost_of_production=request.cost_of_production,
            profit=calculate_profit(request.amount, request.cost_of_production),
        )
        allocations = allocate_income(state.funds, transaction, state.profit_distribution)
        transaction = replace(
            transaction,
            allocations=tuple(
                FundAllocation(fund_id=fund_id, amount=amount)
                for fund_id, amount in allocations.items()
                if amount != 0
            ),
        )
    else:
        transaction = replace(transaction, source_fund_id=request.source_fund_id)

    funds = apply_transaction_to_funds(
        state.funds, transaction, state.profit_distribution, now=now
    )

    logger.info(
        "transaction_recorded",
        transaction_id=transaction.id,
        type=transaction.type.value,
        amount=str(transaction.amount),
        profit=str(transaction.profit) if transaction.profit is not None else None,
        source_fund_id=transaction.source_fund_id,
    )
    return transaction, replace(
        state,
        funds=funds,
        transactions=state.transactions + (transaction,),
        last_updated=now,
    )


def require_fund(state: FinancialState, fund_id: str) -> Fund:
    """Get a fund by ID or raise NotFoundError."""
    fund = state.funds.get(fund_id)
    if fund is None:
        raise NotFoundError(fund_not_found(fund_id))
    return fund


def _check_unique_name(state: FinancialState, name: str, exclude_id: Optional[str] = None) -> None:
    for fund in state.funds.values():
        if fund.id != exclude_id and fund.name == name:
            raise ConflictError(duplicate_fund_name(name))


def create_fund(
    state: FinancialState,
    name: str,
    description: str = "",
    color: Optional[str] = None,
    now: Optional[datetime] = None,
) -> tuple[Fund, FinancialState]:
    """Create a fund with a fresh ID and zeroed balances.

    Raises:
        ValidationError: If the name is empty
        ConflictError: If a fund with the same name exists
    """
    name = name.strip()
    if not name:
        raise ValidationError("Fund name is required")
    _check_unique_name(state, name)

    now = _now(now)
    fund = new_fund(str(uuid4()), name, description, now, color=color)
    logger.info("fund_created", fund_id=fund.id, name=fund.name)
    return fund, replace(state, funds={**state.funds, fund.id: fund}, last_updated=now)


def update_fund(
    state: FinancialState,
    fund_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    color: Optional[str] = None,
    now: Optional[datetime] = None,
) -> tuple[Fund, FinancialState]:
    """Rename a fund or update its metadata.

    Balances and lifetime counters cannot be changed here; only
    transactions move money.

    Raises:
        NotFoundError: If the fund does not exist
        ValidationError: If the new name is empty
        ConflictError: If the new name is taken by another fund
    """
    fund = require_fund(state, fund_id)
    changes = {}
    if name is not None:
        name = name.strip()
        if not name:
            raise ValidationError("Fund name is required")
        _check_unique_name(state, name, exclude_id=fund_id)
        changes["name"] = name
    if description is not None:
        changes["description"] = description
    if color is not None:
        changes["color"] = color

    now = _now(now)
    updated = replace(fund, updated_at=now, **changes)
    logger.info("fund_updated", fund_id=fund_id, fields=sorted(changes))
    return updated, replace(state, funds={**state.funds, fund_id: updated}, last_updated=now)


def count_fund_references(state: FinancialState, fund_id: str) -> int:
    """Count expenses that use the fund as their source."""
    return sum(
        1
        for txn in state.transactions
        if txn.type == TransactionType.EXPENSE and txn.source_fund_id == fund_id
    )


def delete_fund(
    state: FinancialState, fund_id: str, now: Optional[datetime] = None
) -> FinancialState:
    """Delete a fund whose balance is exactly zero and that no expense references.

    The fund is also removed from the active distribution. Deleting the tax
    fund while taxes are enabled turns the tax allocation off and scales the
    remaining entries back up to 100%.

    Raises:
        NotFoundError: If the fund does not exist
        DependencyError: If the fund holds money or is referenced
    """
    fund = require_fund(state, fund_id)

    if fund.current_balance != 0:
        raise DependencyError(fund_delete_blocked_balance(fund.name, fund.current_balance))

    reference_count = count_fund_references(state, fund_id)
    if reference_count > 0:
        raise DependencyError(fund_delete_blocked_references(fund.name, reference_count))

    funds = {key: value for key, value in state.funds.items() if key != fund_id}
    tax_enabled = state.tax_enabled
    if fund.is_tax_fund and state.tax_enabled:
        distribution = disable_tax_allocation(state.profit_distribution, tax_fund_id=fund_id)
        tax_enabled = False
    else:
        distribution = tuple(
            entry for entry in state.profit_distribution if entry.fund_id != fund_id
        )
        if len(distribution) != len(state.profit_distribution):
            logger.warning(
                "fund_removed_from_distribution",
                fund_id=fund_id,
                remaining_total=str(distribution_total(distribution)),
            )

    logger.info("fund_deleted", fund_id=fund_id, name=fund.name)
    return replace(
        state,
        funds=funds,
        profit_distribution=distribution,
        tax_enabled=tax_enabled,
        last_updated=_now(now),
    )


def check_distribution(
    state: FinancialState, entries: Sequence[DistributionEntry]
) -> None:
    """Validate a replacement distribution against the current funds.

    Raises:
        ValidationError: If a percentage is out of range, a fund appears twice
            or the sum is not 100
        NotFoundError: If an entry names a missing fund
    """
    seen = set()
    for entry in entries:
        if entry.percentage < 0 or entry.percentage > HUNDRED:
            raise ValidationError(
                f"Percentage for fund '{entry.fund_id}' must be between 0 and 100"
            )
        if entry.fund_id in seen:
            raise ValidationError(f"Fund '{entry.fund_id}' appears more than once")
        seen.add(entry.fund_id)
        require_fund(state, entry.fund_id)

    result = validate_profit_distribution(entries)
    if not result.is_valid:
        raise ValidationError(result.error)


def _has_tax_entry(entries: Sequence[DistributionEntry]) -> bool:
    return any(entry.fund_id == TAX_FUND_ID for entry in entries)


def tax_mode_matches(state: FinancialState, enabled: bool) -> bool:
    """Check whether the tax flag and the tax entry both already match enabled."""
    return state.tax_enabled == enabled and _has_tax_entry(state.profit_distribution) == enabled


def update_profit_distribution(
    state: FinancialState,
    entries: Sequence[DistributionEntry],
    now: Optional[datetime] = None,
) -> FinancialState:
    """Replace the active distribution wholesale.

    The tax flag follows the new entries: it is on exactly when the tax fund
    is part of the distribution.
    """
    check_distribution(state, entries)
    tax_enabled = _has_tax_entry(entries)
    logger.info(
        "distribution_updated",
        entries={entry.fund_id: str(entry.percentage) for entry in entries},
        tax_enabled=tax_enabled,
    )
    return replace(
        state,
        profit_distribution=tuple(entries),
        tax_enabled=tax_enabled,
        last_updated=_now(now),
    )


def set_tax_enabled(
    state: FinancialState, enabled: bool, now: Optional[datetime] = None
) -> FinancialState:
    """Insert or remove the 5% tax allocation.

    Returns the state unchanged if both the tax flag and the presence of the
    tax entry already match the requested mode.

    Raises:
        ConfigurationError: If there is nothing to rescale
    """
    if tax_mode_matches(state, enabled):
        return state

    now = _now(now)
    funds = state.funds
    if enabled:
        distribution = enable_tax_allocation(state.profit_distribution)
        if TAX_FUND_ID not in funds:
            funds = {**funds, TAX_FUND_ID: default_tax_fund(now)}
    else:
        distribution = disable_tax_allocation(state.profit_distribution)

    logger.info("tax_toggled", enabled=enabled)
    return replace(
        state,
        funds=funds,
        profit_distribution=distribution,
        tax_enabled=enabled,
        last_updated=now,
    )
