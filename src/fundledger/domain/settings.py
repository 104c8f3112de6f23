"""Settings domain service: profit distribution and tax toggle."""

from collections.abc import Sequence

from fundledger.database.base import Database
from fundledger.domain import engine
from fundledger.domain.entities import DistributionEntry, FinancialState
from fundledger.domain.store import LedgerStore, default_stored_data
from fundledger.log import get_logger


logger = get_logger(__name__)


class SettingsService:
    """Service for distribution settings."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db
        self.store = LedgerStore(db)

    def get_distribution(self) -> tuple[DistributionEntry, ...]:
        """Get the active profit distribution in list order."""
        return self.store.load_state().profit_distribution

    def is_tax_enabled(self) -> bool:
        """Check whether the tax allocation is active."""
        return self.store.load_state().tax_enabled

    def tax_mode_matches(self, enabled: bool) -> bool:
        """Check whether toggling the tax allocation to enabled would change nothing."""
        return engine.tax_mode_matches(self.store.load_state(), enabled)

    def update_distribution(self, entries: Sequence[DistributionEntry]) -> FinancialState:
        """Replace the active distribution.

        Args:
            entries: Ordered distribution entries; the last entry absorbs
                rounding remainders when profit is distributed

        Returns:
            The new state

        Raises:
            ValidationError: If percentages are out of range, repeated or do
                not sum to 100
            NotFoundError: If an entry names a missing fund
        """
        state = engine.update_profit_distribution(self.store.load_state(), entries)
        self.store.save_state(state)
        return state

    def set_tax_enabled(self, enabled: bool) -> FinancialState:
        """Toggle the 5% tax allocation.

        Args:
            enabled: True to insert the tax share, False to remove it

        Returns:
            The new state

        Raises:
            ConfigurationError: If the distribution has nothing to rescale
        """
        current = self.store.load_state()
        state = engine.set_tax_enabled(current, enabled)
        if state is not current:
            self.store.save_state(state)
        return state

    def reset_to_defaults(self) -> None:
        """Replace all data, budgets included, with the default ledger."""
        logger.info("ledger_reset", key=self.store.key)
        self.store.save(default_stored_data())
