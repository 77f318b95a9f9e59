"""Database layer for ledgerbook application."""

from ledgerbook.database.base import Database
from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.database.memory import InMemoryDatabase

__all__ = ["Database", "InMemoryDatabase", "create_sqlite_database"]
