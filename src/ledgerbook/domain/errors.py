"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidSectionError(ValidationError):
    """TDS section is not part of the configured section table."""

    def __init__(self, section: str):
        super().__init__(f"Invalid TDS section: {section}")
        self.section = section


class InvalidStateCodeError(ValidationError):
    """GST state code is present but not a recognised state code."""

    def __init__(self, state_code: str):
        super().__init__(f"Invalid GST state code: '{state_code}'")
        self.state_code = state_code


class LedgerError(DomainError):
    """A transaction cannot be posted to the ledger."""


class EmptyTransactionError(LedgerError):
    """Transaction has no ledger entries."""

    def __init__(self, transaction_id: str | None = None):
        target = f"Transaction {transaction_id}" if transaction_id else "Transaction"
        super().__init__(f"{target} has no ledger entries")
        self.transaction_id = transaction_id


class UnbalancedLedgerError(LedgerError):
    """Debits and credits of a transaction differ by more than the tolerance."""

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        self.diff = total_debit - total_credit
        super().__init__(
            f"Total debits ({total_debit:.2f}) must equal total credits "
            f"({total_credit:.2f}); difference is {self.diff:.2f}"
        )


class InvalidTransitionError(LedgerError):
    """Requested status change is not allowed by the transaction lifecycle."""

    def __init__(self, transaction_id: str, current: str, target: str):
        super().__init__(
            f"Transaction {transaction_id} cannot move from {current} to {target}"
        )
        self.transaction_id = transaction_id
        self.current = current
        self.target = target


class StoreReadError(DomainError):
    """The underlying store failed to return data."""


class ReportGenerationError(DomainError):
    """A financial report could not be generated."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_code_not_found(code: str) -> str:
    """Return message for missing account by code."""
    return f"Account with code '{code}' not found"


def duplicate_account_code(code: str) -> str:
    """Return message for duplicate account code."""
    return f"Account with code '{code}' already exists"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def group_account_entry(code: str) -> str:
    """Return message when an entry targets a group account."""
    return f"Account '{code}' is a group account and cannot receive entries"
