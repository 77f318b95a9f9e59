"""Ledger validation and transaction status transitions."""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Sequence

from ledgerbook.domain.config import DEFAULT_SETTINGS, LedgerSettings
from ledgerbook.domain.entities import Entry, Transaction, TransactionStatus, ZERO
from ledgerbook.domain.errors import (
    EmptyTransactionError,
    InvalidTransitionError,
    UnbalancedLedgerError,
)
from ledgerbook.utils.amount_parser import round_currency

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[TransactionStatus, frozenset[TransactionStatus]] = {
    TransactionStatus.DRAFT: frozenset({TransactionStatus.POSTED, TransactionStatus.VOID}),
    TransactionStatus.POSTED: frozenset(),
    TransactionStatus.VOID: frozenset(),
}


@dataclass(frozen=True)
class LedgerBalance:
    """Debit and credit totals of a set of entries."""

    total_debit: Decimal
    total_credit: Decimal
    balance: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class LedgerValidation:
    """Diagnostic result of checking entries before saving a draft."""

    errors: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def entry_errors(entry: Entry) -> list[str]:
    """Problems with a single entry, without position prefixes."""
    errors = []
    if not entry.account_id:
        errors.append("Account is required")
    if entry.debit < 0 or entry.credit < 0:
        errors.append("Amounts cannot be negative")
    elif entry.debit > 0 and entry.credit > 0:
        errors.append("Cannot have both debit and credit amounts")
    elif entry.debit == 0 and entry.credit == 0:
        errors.append("Either debit or credit amount must be greater than zero")
    return errors


class TransactionPoster:
    """Guards the double-entry invariant before a transaction is posted."""

    def __init__(self, settings: LedgerSettings = DEFAULT_SETTINGS):
        """Initialize poster.

        Args:
            settings: Engine settings (supplies the balance tolerance)
        """
        self.settings = settings

    def totals(self, entries: Sequence[Entry]) -> tuple[Decimal, Decimal]:
        """Unrounded debit and credit sums."""
        total_debit = sum((entry.debit for entry in entries), ZERO)
        total_credit = sum((entry.credit for entry in entries), ZERO)
        return total_debit, total_credit

    def validate_for_posting(self, transaction: Transaction) -> None:
        """Check that a transaction's entries may be posted.

        Raises:
            EmptyTransactionError: If the transaction has no entries
            UnbalancedLedgerError: If debits and credits differ by more than the tolerance
        """
        if not transaction.entries:
            raise EmptyTransactionError(transaction.id)

        total_debit, total_credit = self.totals(transaction.entries)
        if abs(total_debit - total_credit) > self.settings.balance_tolerance:
            raise UnbalancedLedgerError(total_debit, total_credit)

    def ensure_transition(self, transaction: Transaction, target: TransactionStatus) -> None:
        """Check that the lifecycle allows moving to ``target``.

        Raises:
            InvalidTransitionError: If the transition is not allowed
        """
        if target not in ALLOWED_TRANSITIONS[transaction.status]:
            raise InvalidTransitionError(
                transaction.id, transaction.status.value, target.value
            )

    def post(self, transaction: Transaction) -> Transaction:
        """Validate a draft and return it as POSTED."""
        self.ensure_transition(transaction, TransactionStatus.POSTED)
        self.validate_for_posting(transaction)
        logger.info("Transaction %s validated for posting", transaction.id)
        return replace(transaction, status=TransactionStatus.POSTED)

    def void(self, transaction: Transaction) -> Transaction:
        """Return a draft as VOID."""
        self.ensure_transition(transaction, TransactionStatus.VOID)
        logger.info("Transaction %s voided", transaction.id)
        return replace(transaction, status=TransactionStatus.VOID)

    def calculate_balance(self, entries: Sequence[Entry]) -> LedgerBalance:
        """Totals rounded to 2 decimal places with a balanced flag."""
        total_debit, total_credit = self.totals(entries)
        return LedgerBalance(
            total_debit=round_currency(total_debit),
            total_credit=round_currency(total_credit),
            balance=round_currency(total_debit - total_credit),
            is_balanced=abs(total_debit - total_credit) <= self.settings.balance_tolerance,
        )

    def validate_entries(self, entries: Sequence[Entry]) -> LedgerValidation:
        """Collect every problem with a set of entries without raising."""
        if not entries:
            return LedgerValidation(errors=("At least one ledger entry is required",))

        errors: list[str] = []
        warnings: list[str] = []
        if len(entries) < 2:
            errors.append(
                "At least two ledger entries are required for double-entry bookkeeping"
            )

        for position, entry in enumerate(entries, start=1):
            errors.extend(f"Entry {position}: {error}" for error in entry_errors(entry))

        balance = self.calculate_balance(entries)
        if not balance.is_balanced:
            errors.append(
                f"Total debits ({balance.total_debit}) must equal "
                f"total credits ({balance.total_credit})"
            )

        if len(entries) > self.settings.large_entry_count:
            warnings.append(
                "Large number of entries. Consider splitting into multiple journal entries."
            )
        account_ids = [entry.account_id for entry in entries]
        if len(set(account_ids)) != len(account_ids):
            warnings.append(
                "Multiple entries for the same account detected. This may be intentional."
            )

        return LedgerValidation(errors=tuple(errors), warnings=tuple(warnings))
