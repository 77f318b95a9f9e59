"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    DateRange,
    Entry,
    GSTDetails,
    TDSDetails,
    Transaction,
    TransactionStatus,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for ledgerbook.

    Read methods raise ``StoreReadError`` when the underlying storage fails.
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

    # Account operations
    @abstractmethod
    def create_account(
        self,
        code: str,
        name: str,
        account_type: AccountType,
        is_bank_account: bool = False,
        opening_balance: Decimal = Decimal("0"),
        is_group: bool = False,
        currency: str = "INR",
    ) -> str:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by its chart code."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by code."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        transaction_type: TransactionType,
        date: date,
        entries: Sequence[Entry],
        total_amount: Decimal = Decimal("0"),
        transaction_number: Optional[str] = None,
        description: Optional[str] = None,
        gst_details: Optional[GSTDetails] = None,
        tds_details: Optional[TDSDetails] = None,
    ) -> str:
        """Create a DRAFT transaction with its entries. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID, entries included."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        status: Optional[TransactionStatus] = None,
        date_range: Optional[DateRange] = None,
    ) -> list[Transaction]:
        """List transactions, optionally filtered by status and date range."""
        pass

    @abstractmethod
    def list_posted_transactions(self, date_range: Optional[DateRange] = None) -> list[Transaction]:
        """List POSTED transactions whose date falls in the range."""
        pass

    @abstractmethod
    def update_transaction_status(self, transaction_id: str, status: TransactionStatus) -> None:
        """Update transaction status."""
        pass
