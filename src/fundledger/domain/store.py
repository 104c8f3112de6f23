"""Loading and saving the current ledger snapshot."""

from dataclasses import replace
from datetime import datetime, UTC
from typing import Optional

from fundledger.database.base import Database
from fundledger.database.mappers import CURRENT_VERSION, STORAGE_KEY
from fundledger.domain.defaults import default_state
from fundledger.domain.entities import Budget, FinancialState, StoredData
from fundledger.log import get_logger


logger = get_logger(__name__)


def default_stored_data(now: Optional[datetime] = None) -> StoredData:
    """Build the snapshot of a freshly initialized ledger."""
    if now is None:
        now = datetime.now(UTC)
    return StoredData(version=CURRENT_VERSION, state=default_state(now), budgets=())


class LedgerStore:
    """Holds the "current" snapshot reference on behalf of the services.

    Services load the snapshot, hand it to the engine, and save the successor
    only after the engine call returned successfully.
    """

    def __init__(self, db: Database, key: str = STORAGE_KEY):
        """Initialize ledger store.

        Args:
            db: Database instance
            key: Storage key the snapshot lives under
        """
        self.db = db
        self.key = key

    def load(self) -> StoredData:
        """Load the stored snapshot, falling back to the default ledger.

        Missing, corrupted and version-mismatched data all produce the
        default ledger; nothing is written until the next save.
        """
        data = self.db.load_data(self.key)
        if data is None:
            logger.debug("using_default_ledger", key=self.key)
            return default_stored_data()
        return data

    def load_state(self) -> FinancialState:
        """Load only the financial state."""
        return self.load().state

    def save(self, data: StoredData) -> None:
        """Persist a snapshot."""
        self.db.save_data(self.key, data)

    def save_state(self, state: FinancialState) -> None:
        """Persist a new financial state, keeping the stored budgets."""
        data = self.load()
        self.save(replace(data, state=state))

    def save_budgets(self, budgets: tuple[Budget, ...]) -> None:
        """Persist a new budget list, keeping the stored state."""
        data = self.load()
        self.save(replace(data, budgets=budgets))

    def exists(self) -> bool:
        """Check whether a snapshot has been stored."""
        return self.db.has_data(self.key)

    def clear(self) -> None:
        """Remove the stored snapshot."""
        self.db.delete_data(self.key)
