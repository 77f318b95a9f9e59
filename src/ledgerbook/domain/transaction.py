"""Transaction domain service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence
from datetime import date
from decimal import Decimal
from ledgerbook.domain.entities import (
    Entry,
    GSTDetails,
    TDSDetails,
    Transaction as TransactionEntity,
    TransactionStatus,
    TransactionType,
)
from ledgerbook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    group_account_entry,
    transaction_not_found,
)
from ledgerbook.domain.posting import LedgerValidation, TransactionPoster

if TYPE_CHECKING:
    from ledgerbook.database.base import Database

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for recording and posting transactions."""

    def __init__(self, db: Database, poster: Optional[TransactionPoster] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            poster: Ledger guard used when posting; defaults to standard settings
        """
        self.db = db
        self.poster = poster or TransactionPoster()

    def create_transaction(
        self,
        transaction_type: TransactionType,
        date: date,
        entries: Sequence[Entry],
        description: Optional[str] = None,
        transaction_number: Optional[str] = None,
        total_amount: Optional[Decimal] = None,
        gst_details: Optional[GSTDetails] = None,
        tds_details: Optional[TDSDetails] = None,
    ) -> str:
        """Record a DRAFT transaction.

        Drafts may be unbalanced; balance is enforced when posting.

        Args:
            transaction_type: Business transaction type
            date: Transaction date
            entries: Debit/credit entries
            description: Optional description
            transaction_number: Optional document number
            total_amount: Document total; defaults to the sum of debits
            gst_details: Optional GST split
            tds_details: Optional TDS deduction

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If an entry references an unknown account
            ValidationError: If an entry targets a group account
        """
        for entry in entries:
            account = self.db.get_account(entry.account_id)
            if account is None:
                raise NotFoundError(account_not_found(entry.account_id))
            if account.is_group:
                raise ValidationError(group_account_entry(account.code))

        transaction_type = TransactionType(transaction_type)
        if total_amount is None:
            total_amount, _ = self.poster.totals(entries)

        transaction_id = self.db.create_transaction(
            transaction_type=transaction_type,
            date=date,
            entries=entries,
            total_amount=total_amount,
            transaction_number=transaction_number,
            description=description,
            gst_details=gst_details,
            tds_details=tds_details,
        )
        logger.info("Recorded draft %s transaction %s", transaction_type.value, transaction_id)
        return transaction_id

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def _require(self, transaction_id: str) -> TransactionEntity:
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def post_transaction(self, transaction_id: str) -> TransactionEntity:
        """Post a draft transaction to the ledger.

        Args:
            transaction_id: Transaction ID

        Returns:
            The posted transaction

        Raises:
            NotFoundError: If the transaction does not exist
            LedgerError: If the transaction is not a draft, has no entries or
                does not balance; the transaction stays DRAFT
        """
        posted = self.poster.post(self._require(transaction_id))
        self.db.update_transaction_status(transaction_id, TransactionStatus.POSTED)
        logger.info("Posted transaction %s", transaction_id)
        return posted

    def void_transaction(self, transaction_id: str) -> TransactionEntity:
        """Void a draft transaction so that reports ignore it.

        Raises:
            NotFoundError: If the transaction does not exist
            InvalidTransitionError: If the transaction is not a draft
        """
        voided = self.poster.void(self._require(transaction_id))
        self.db.update_transaction_status(transaction_id, TransactionStatus.VOID)
        return voided

    def validate_transaction(self, transaction_id: str) -> LedgerValidation:
        """Collect entry problems of a stored transaction without raising."""
        return self.poster.validate_entries(self._require(transaction_id).entries)

    def list_transactions(
        self, status: Optional[TransactionStatus] = None
    ) -> list[TransactionEntity]:
        """List transactions, optionally only those with a given status."""
        return self.db.list_transactions(status=status)
