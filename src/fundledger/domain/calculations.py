"""Pure financial calculation functions.

Deterministic and side-effect free. All amounts are Decimal.
"""

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal, ROUND_HALF_UP

from fundledger.domain.entities import (
    DistributionEntry,
    Fund,
    FundTotals,
    ValidationResult,
)
from fundledger.domain.errors import (
    ValidationError,
    distribution_overallocated,
    distribution_sum_invalid,
)


CENT = Decimal("0.01")
HUNDRED = Decimal("100")
DISTRIBUTION_TOLERANCE = Decimal("0.01")


def round_currency(amount: Decimal) -> Decimal:
    """Round an amount to the smallest currency unit (two decimal places)."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_profit(income: Decimal, cost_of_production: Decimal) -> Decimal:
    """Calculate profit from income and cost of production.

    Args:
        income: Total income amount
        cost_of_production: Cost of production amount

    Returns:
        income - cost_of_production, without rounding

    Raises:
        ValidationError: If either input is negative or cost exceeds income
    """
    if income < 0:
        raise ValidationError("Income cannot be negative")
    if cost_of_production < 0:
        raise ValidationError("Cost of production cannot be negative")
    if cost_of_production > income:
        raise ValidationError("Cost of production cannot exceed income")

    return income - cost_of_production


def distribution_total(entries: Iterable[DistributionEntry]) -> Decimal:
    """Sum the percentages of a distribution."""
    return sum((entry.percentage for entry in entries), Decimal("0"))


def validate_profit_distribution(entries: Sequence[DistributionEntry]) -> ValidationResult:
    """Check that distribution percentages sum to 100 within tolerance.

    Args:
        entries: Ordered distribution entries

    Returns:
        ValidationResult with an error message if invalid
    """
    total = distribution_total(entries)
    if abs(total - HUNDRED) > DISTRIBUTION_TOLERANCE:
        return ValidationResult(is_valid=False, error=distribution_sum_invalid(total))
    return ValidationResult(is_valid=True)


def distribute_profit(
    profit: Decimal, entries: Sequence[DistributionEntry]
) -> dict[str, Decimal]:
    """Distribute profit to funds according to distribution percentages.

    Every entry except the last receives its percentage share rounded to the
    cent. The last entry receives whatever is left, so the allocations always
    add up to ``profit`` exactly. Reordering the list changes which fund
    absorbs the rounding drift.

    Args:
        profit: Total profit to distribute
        entries: Ordered distribution entries

    Returns:
        Mapping of fund ID to allocated amount, in distribution order

    Raises:
        ValidationError: If the percentages do not sum to 100, or if they
            exceed 100 by enough that the last entry would go negative
    """
    validation = validate_profit_distribution(entries)
    if not validation.is_valid:
        raise ValidationError(validation.error or "Invalid profit distribution")

    allocations: dict[str, Decimal] = {}
    allocated = Decimal("0")
    last_index = len(entries) - 1

    for index, entry in enumerate(entries):
        if index == last_index:
            amount = profit - allocated
            if amount < 0:
                raise ValidationError(distribution_overallocated(allocated, profit))
        else:
            amount = round_currency(profit * entry.percentage / HUNDRED)
            allocated += amount
        allocations[entry.fund_id] = allocations.get(entry.fund_id, Decimal("0")) + amount

    return allocations


def calculate_fund_totals(funds: Mapping[str, Fund]) -> FundTotals:
    """Calculate total balance, inflow and outflow across funds."""
    balance = Decimal("0")
    inflow = Decimal("0")
    outflow = Decimal("0")
    for fund in funds.values():
        balance += fund.current_balance
        inflow += fund.lifetime_inflow
        outflow += fund.lifetime_outflow

    return FundTotals(total_balance=balance, total_inflow=inflow, total_outflow=outflow)
