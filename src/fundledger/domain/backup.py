"""Backup domain service: JSON export, import and clearing of all data."""

from fundledger.database.base import Database
from fundledger.database.mappers import export_data, import_data
from fundledger.domain.entities import StoredData
from fundledger.domain.store import LedgerStore
from fundledger.log import get_logger


logger = get_logger(__name__)


class BackupService:
    """Service for exporting and restoring the whole ledger."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db
        self.store = LedgerStore(db)

    def export_data(self) -> str:
        """Export funds, transactions, settings and budgets as JSON."""
        return export_data(self.store.load())

    def import_data(self, raw: str) -> StoredData:
        """Replace all data with a previously exported JSON document.

        Args:
            raw: JSON document

        Returns:
            The imported data

        Raises:
            DataFormatError: If the document is not valid JSON, has a
                different version or an invalid structure; nothing is saved
        """
        data = import_data(raw)
        self.store.save(data)
        logger.info(
            "data_imported",
            funds=len(data.state.funds),
            transactions=len(data.state.transactions),
            budgets=len(data.budgets),
        )
        return data

    def clear_data(self) -> None:
        """Remove all stored data; the next load starts from the defaults."""
        self.store.clear()
        logger.info("data_cleared", key=self.store.key)

    def has_stored_data(self) -> bool:
        """Check whether any data has been stored."""
        return self.store.exists()
