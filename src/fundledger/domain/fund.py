"""Fund domain service."""

from typing import Optional

from fundledger.database.base import Database
from fundledger.domain import engine
from fundledger.domain.calculations import calculate_fund_totals
from fundledger.domain.entities import Fund, FundTotals
from fundledger.domain.store import LedgerStore


class FundService:
    """Service for managing funds."""

    def __init__(self, db: Database):
        """Initialize fund service.

        Args:
            db: Database instance
        """
        self.db = db
        self.store = LedgerStore(db)

    def create_fund(
        self, name: str, description: str = "", color: Optional[str] = None
    ) -> str:
        """Create a new fund with zeroed balances.

        Args:
            name: Fund name
            description: Optional description
            color: Optional color tag (e.g. "#3B82F6")

        Returns:
            Fund ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a fund with the same name already exists
        """
        state = self.store.load_state()
        fund, new_state = engine.create_fund(state, name, description=description, color=color)
        self.store.save_state(new_state)
        return fund.id

    def get_fund(self, fund_id: str) -> Optional[Fund]:
        """Get fund by ID.

        Args:
            fund_id: Fund ID

        Returns:
            Fund entity or None if not found
        """
        return self.store.load_state().funds.get(fund_id)

    def require_fund(self, fund_id: str) -> Fund:
        """Get fund by ID or raise NotFoundError."""
        return engine.require_fund(self.store.load_state(), fund_id)

    def list_funds(self) -> list[Fund]:
        """List all funds in creation order.

        Returns:
            List of fund entities
        """
        return list(self.store.load_state().funds.values())

    def update_fund(
        self,
        fund_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Fund:
        """Rename a fund or update its metadata.

        Args:
            fund_id: Fund ID to update
            name: Optional new name
            description: Optional new description
            color: Optional new color tag

        Returns:
            Updated fund entity

        Raises:
            NotFoundError: If the fund doesn't exist
            ConflictError: If the new name is already used
        """
        state = self.store.load_state()
        fund, new_state = engine.update_fund(
            state, fund_id, name=name, description=description, color=color
        )
        self.store.save_state(new_state)
        return fund

    def delete_fund(self, fund_id: str) -> None:
        """Delete a fund.

        Args:
            fund_id: Fund ID to delete

        Raises:
            NotFoundError: If the fund doesn't exist
            DependencyError: If the balance is not exactly zero or expenses
                reference the fund
        """
        state = self.store.load_state()
        self.store.save_state(engine.delete_fund(state, fund_id))

    def get_reference_count(self, fund_id: str) -> int:
        """Count expenses drawn from a fund."""
        return engine.count_fund_references(self.store.load_state(), fund_id)

    def get_totals(self) -> FundTotals:
        """Get total balance, inflow and outflow across all funds."""
        return calculate_fund_totals(self.store.load_state().funds)
