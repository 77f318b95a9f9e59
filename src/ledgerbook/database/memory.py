"""In-memory database built from account and transaction documents."""

import itertools
import logging
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional, Sequence
from datetime import date
from decimal import Decimal

from ledgerbook.database.base import Database
from ledgerbook.database.mappers import account_from_document, transaction_from_document
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
from ledgerbook.domain.errors import NotFoundError, transaction_not_found

logger = logging.getLogger(__name__)


def _map_documents(mapper, documents, kind: str) -> list:
    mapped = []
    for document in documents:
        try:
            mapped.append(mapper(document))
        except ValueError as e:
            logger.warning("Skipping %s document: %s", kind, e)
    return mapped


class InMemoryDatabase(Database):
    """Database kept in process memory.

    Useful for callers that already hold a snapshot of their accounting data
    as plain dictionaries, and for tests.
    """

    def __init__(
        self,
        accounts: Iterable[Account] = (),
        transactions: Iterable[Transaction] = (),
    ):
        self._accounts: dict[str, Account] = {account.id: account for account in accounts}
        self._transactions: dict[str, Transaction] = {txn.id: txn for txn in transactions}
        self._ids = itertools.count(1)

    @classmethod
    def from_documents(
        cls,
        accounts: Iterable[Mapping[str, Any]] = (),
        transactions: Iterable[Mapping[str, Any]] = (),
    ) -> "InMemoryDatabase":
        """Build a database from loosely-typed account and transaction documents.

        Documents that cannot be mapped at all are logged and left out.
        """
        return cls(
            accounts=_map_documents(account_from_document, accounts, "account"),
            transactions=_map_documents(transaction_from_document, transactions, "transaction"),
        )

    def _next_id(self, taken: Mapping[str, Any]) -> str:
        while True:
            candidate = str(next(self._ids))
            if candidate not in taken:
                return candidate

    def connect(self) -> None:
        """Connect to the database."""
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
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
        account_id = self._next_id(self._accounts)
        self._accounts[account_id] = Account(
            id=account_id,
            code=code,
            name=name,
            account_type=AccountType(account_type),
            is_bank_account=is_bank_account,
            opening_balance=opening_balance,
            is_group=is_group,
            currency=currency,
        )
        return account_id

    def get_account(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def get_account_by_code(self, code: str) -> Optional[Account]:
        for account in self._accounts.values():
            if account.code == code:
                return account
        return None

    def list_accounts(self) -> list[Account]:
        return sorted(self._accounts.values(), key=lambda account: account.code)

    # Transaction operations
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
        transaction_id = self._next_id(self._transactions)
        self._transactions[transaction_id] = Transaction(
            id=transaction_id,
            type=TransactionType(transaction_type),
            status=TransactionStatus.DRAFT,
            date=date,
            entries=tuple(entries),
            total_amount=total_amount,
            transaction_number=transaction_number,
            description=description,
            gst_details=gst_details,
            tds_details=tds_details,
        )
        return transaction_id

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def list_transactions(
        self,
        status: Optional[TransactionStatus] = None,
        date_range: Optional[DateRange] = None,
    ) -> list[Transaction]:
        transactions = [
            txn
            for txn in self._transactions.values()
            if (status is None or txn.status == status)
            and (date_range is None or date_range.contains(txn.date))
        ]
        # Undated documents sort first
        return sorted(transactions, key=lambda txn: (txn.date or date.min, txn.id))

    def list_posted_transactions(self, date_range: Optional[DateRange] = None) -> list[Transaction]:
        return self.list_transactions(status=TransactionStatus.POSTED, date_range=date_range)

    def update_transaction_status(self, transaction_id: str, status: TransactionStatus) -> None:
        transaction = self._transactions.get(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self._transactions[transaction_id] = replace(
            transaction, status=TransactionStatus(status)
        )
