"""Domain model entities for fundledger.

These are pure data classes representing business concepts, independent of
how a snapshot is persisted. Every collection inside a state is replaced
wholesale on change, so holding on to an old ``FinancialState`` keeps the
previous snapshot intact.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Closed set of transaction types."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class BudgetStatus(str, Enum):
    """Budget lifecycle status."""

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


@dataclass(frozen=True)
class Fund:
    """Named bucket holding a balance plus lifetime inflow/outflow counters."""

    id: str
    name: str
    description: str
    current_balance: Decimal
    lifetime_inflow: Decimal
    lifetime_outflow: Decimal
    created_at: datetime
    updated_at: datetime
    color: Optional[str] = None
    is_tax_fund: bool = False


@dataclass(frozen=True)
class DistributionEntry:
    """One weighted target of the profit distribution."""

    fund_id: str
    percentage: Decimal


@dataclass(frozen=True)
class FundAllocation:
    """Amount of profit credited to a fund by an income transaction."""

    fund_id: str
    amount: Decimal


@dataclass(frozen=True)
class TransactionRequest:
    """Transaction as submitted, before the engine assigns id and timestamps."""

    type: TransactionType
    amount: Decimal
    date: date
    description: str = ""
    cost_of_production: Optional[Decimal] = None
    source_fund_id: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: str
    type: TransactionType
    amount: Decimal
    date: date
    description: str
    created_at: datetime
    updated_at: datetime
    # INCOME only
    cost_of_production: Optional[Decimal] = None
    profit: Optional[Decimal] = None
    allocations: tuple[FundAllocation, ...] = ()
    # EXPENSE only
    source_fund_id: Optional[str] = None


@dataclass(frozen=True)
class FinancialState:
    """Snapshot of funds, audit trail and distribution settings."""

    funds: dict[str, Fund]
    transactions: tuple[Transaction, ...]
    profit_distribution: tuple[DistributionEntry, ...]
    tax_enabled: bool
    last_updated: datetime


@dataclass(frozen=True)
class BudgetAllocation:
    """Share of a budget target linked to a fund."""

    fund_id: str
    percentage: Decimal


@dataclass(frozen=True)
class Budget:
    """Savings target linked to funds. Budgets are targets, not accounts."""

    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    status: BudgetStatus
    allocations: tuple[BudgetAllocation, ...]
    created_at: datetime
    updated_at: datetime

    @property
    def progress(self) -> Decimal:
        """Percentage of the target reached."""
        return self.current_amount / self.target_amount * 100

    @property
    def remaining(self) -> Decimal:
        """Amount still missing to reach the target (never negative)."""
        return max(self.target_amount - self.current_amount, Decimal("0"))


@dataclass(frozen=True)
class StoredData:
    """Everything that is persisted under one storage key."""

    version: int
    state: FinancialState
    budgets: tuple[Budget, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation rule set."""

    is_valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class FundTotals:
    """Totals across all funds."""

    total_balance: Decimal
    total_inflow: Decimal
    total_outflow: Decimal


@dataclass(frozen=True)
class TopExpense:
    """Expense line shown in reports."""

    description: str
    amount: Decimal
    fund_id: str


@dataclass(frozen=True)
class ReportData:
    """Aggregated figures for a reporting period."""

    start_date: Optional[date]
    end_date: Optional[date]
    income: Decimal
    expenses: Decimal
    cost_of_production: Decimal
    profit: Decimal
    transaction_count: int
    fund_distributions: dict[str, Decimal] = field(default_factory=dict)
    fund_outflows: dict[str, Decimal] = field(default_factory=dict)
    top_expenses: tuple[TopExpense, ...] = ()
