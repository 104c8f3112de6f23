"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from fundledger.domain.entities import StoredData


class Database(ABC):
    """Abstract database interface for fundledger.

    The database stores whole ledger snapshots keyed by a storage key. It
    never interprets balances; the engine is the only writer of state.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def load_data(self, key: str) -> Optional[StoredData]:
        """Load the snapshot stored under key.

        Returns None if nothing is stored, or if the stored payload is
        corrupted or has a different version.
        """
        pass

    @abstractmethod
    def save_data(self, key: str, data: StoredData) -> None:
        """Store a snapshot under key, replacing any previous one."""
        pass

    @abstractmethod
    def delete_data(self, key: str) -> None:
        """Remove the snapshot stored under key (no-op if absent)."""
        pass

    @abstractmethod
    def has_data(self, key: str) -> bool:
        """Check whether a snapshot is stored under key."""
        pass
