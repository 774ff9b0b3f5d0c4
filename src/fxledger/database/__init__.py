"""Database layer for fxledger."""

from fxledger.database.base import Database
from fxledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]

