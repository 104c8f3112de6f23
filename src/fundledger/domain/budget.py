"""Budget domain service.

Budgets are targets, not accounts: money stays in the linked funds, and a
budget only records how its target is split across them.
"""

from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from fundledger.database.base import Database
from fundledger.domain.calculations import (
    DISTRIBUTION_TOLERANCE,
    HUNDRED,
    distribution_total,
)
from fundledger.domain.entities import Budget, BudgetAllocation, BudgetStatus, Fund
from fundledger.domain.errors import (
    NotFoundError,
    ValidationError,
    budget_not_found,
    fund_not_found,
)
from fundledger.domain.store import LedgerStore
from fundledger.log import get_logger


logger = get_logger(__name__)


def validate_budget_allocations(
    allocations: Sequence[BudgetAllocation], funds: Mapping[str, Fund]
) -> None:
    """Check budget allocations against the current funds.

    Raises:
        ValidationError: If there are no allocations, a fund repeats or the
            percentages do not sum to 100
        NotFoundError: If an allocation names a missing fund
    """
    if not allocations:
        raise ValidationError("At least one fund allocation is required")

    seen = set()
    for allocation in allocations:
        if allocation.fund_id in seen:
            raise ValidationError(f"Fund '{allocation.fund_id}' is already allocated")
        seen.add(allocation.fund_id)
        if allocation.fund_id not in funds:
            raise NotFoundError(fund_not_found(allocation.fund_id))
        if allocation.percentage < 0 or allocation.percentage > HUNDRED:
            raise ValidationError(
                f"Percentage for fund '{allocation.fund_id}' must be between 0 and 100"
            )

    total = distribution_total(allocations)
    if abs(total - HUNDRED) > DISTRIBUTION_TOLERANCE:
        raise ValidationError(f"Allocations must sum to 100% (currently {total:.2f}%)")


def _validate_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError("Budget name is required")
    return name


def _validate_target(target_amount: Decimal) -> Decimal:
    if target_amount <= 0:
        raise ValidationError("Valid target amount is required")
    return target_amount


def add_budget(
    budgets: tuple[Budget, ...],
    funds: Mapping[str, Fund],
    name: str,
    target_amount: Decimal,
    allocations: Sequence[BudgetAllocation],
    now: Optional[datetime] = None,
) -> tuple[Budget, tuple[Budget, ...]]:
    """Create an active budget with nothing saved towards it yet."""
    name = _validate_name(name)
    _validate_target(target_amount)
    validate_budget_allocations(allocations, funds)

    if now is None:
        now = datetime.now(UTC)
    budget = Budget(
        id=str(uuid4()),
        name=name,
        target_amount=target_amount,
        current_amount=Decimal("0"),
        status=BudgetStatus.ACTIVE,
        allocations=tuple(allocations),
        created_at=now,
        updated_at=now,
    )
    return budget, budgets + (budget,)


def find_budget(budgets: Sequence[Budget], budget_id: str) -> Budget:
    """Find a budget by ID (a unique prefix is accepted).

    Raises:
        NotFoundError: If no budget or more than one budget matches
    """
    for budget in budgets:
        if budget.id == budget_id:
            return budget
    matches = [budget for budget in budgets if budget.id.startswith(budget_id)]
    if len(matches) != 1:
        raise NotFoundError(budget_not_found(budget_id))
    return matches[0]


def update_budget(
    budgets: tuple[Budget, ...],
    budget_id: str,
    name: Optional[str] = None,
    target_amount: Optional[Decimal] = None,
    current_amount: Optional[Decimal] = None,
    status: Optional[BudgetStatus] = None,
    now: Optional[datetime] = None,
) -> tuple[Budget, tuple[Budget, ...]]:
    """Update budget fields, returning the updated budget and list."""
    budget = find_budget(budgets, budget_id)
    changes = {}
    if name is not None:
        changes["name"] = _validate_name(name)
    if target_amount is not None:
        changes["target_amount"] = _validate_target(target_amount)
    if current_amount is not None:
        if current_amount < 0:
            raise ValidationError("Current amount cannot be negative")
        changes["current_amount"] = current_amount
    if status is not None:
        changes["status"] = status

    if now is None:
        now = datetime.now(UTC)
    updated = replace(budget, updated_at=now, **changes)
    return updated, tuple(updated if b.id == budget.id else b for b in budgets)


def delete_budget(budgets: tuple[Budget, ...], budget_id: str) -> tuple[Budget, ...]:
    """Remove a budget from the list."""
    budget = find_budget(budgets, budget_id)
    return tuple(b for b in budgets if b.id != budget.id)


class BudgetService:
    """Service for managing budgets."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db
        self.store = LedgerStore(db)

    def create_budget(
        self,
        name: str,
        target_amount: Decimal,
        allocations: Sequence[BudgetAllocation],
    ) -> Budget:
        """Create a budget.

        Args:
            name: Budget name
            target_amount: Amount to save
            allocations: Fund allocations summing to 100%

        Returns:
            The new budget

        Raises:
            ValidationError: If name, target or allocations are invalid
            NotFoundError: If an allocation names a missing fund
        """
        data = self.store.load()
        budget, budgets = add_budget(
            data.budgets, data.state.funds, name, target_amount, allocations
        )
        self.store.save(replace(data, budgets=budgets))
        logger.info("budget_created", budget_id=budget.id, name=budget.name)
        return budget

    def get_budget(self, budget_id: str) -> Budget:
        """Get budget by ID or unique ID prefix.

        Raises:
            NotFoundError: If the budget doesn't exist
        """
        return find_budget(self.store.load().budgets, budget_id)

    def list_budgets(self, status: Optional[BudgetStatus] = None) -> list[Budget]:
        """List budgets, optionally filtered by status."""
        return [
            budget
            for budget in self.store.load().budgets
            if status is None or budget.status == status
        ]

    def update_budget(
        self,
        budget_id: str,
        name: Optional[str] = None,
        target_amount: Optional[Decimal] = None,
        current_amount: Optional[Decimal] = None,
    ) -> Budget:
        """Update budget name, target or saved amount.

        Raises:
            NotFoundError: If the budget doesn't exist
            ValidationError: If a new value is invalid
        """
        data = self.store.load()
        budget, budgets = update_budget(
            data.budgets,
            budget_id,
            name=name,
            target_amount=target_amount,
            current_amount=current_amount,
        )
        self.store.save_budgets(budgets)
        return budget

    def set_status(self, budget_id: str, status: BudgetStatus) -> Budget:
        """Mark a budget active, completed or archived."""
        data = self.store.load()
        budget, budgets = update_budget(data.budgets, budget_id, status=status)
        self.store.save_budgets(budgets)
        logger.info("budget_status_changed", budget_id=budget.id, status=status.value)
        return budget

    def complete_budget(self, budget_id: str) -> Budget:
        """Mark a budget completed."""
        return self.set_status(budget_id, BudgetStatus.COMPLETED)

    def archive_budget(self, budget_id: str) -> Budget:
        """Mark a budget archived."""
        return self.set_status(budget_id, BudgetStatus.ARCHIVED)

    def delete_budget(self, budget_id: str) -> None:
        """Delete a budget.

        Raises:
            NotFoundError: If the budget doesn't exist
        """
        data = self.store.load()
        self.store.save_budgets(delete_budget(data.budgets, budget_id))
