"""Database layer for fundledger application."""

from fundledger.database.base import Database
from fundledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
