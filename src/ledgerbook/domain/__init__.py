"""Domain layer for ledgerbook application."""

from ledgerbook.domain.account import AccountService
from ledgerbook.domain.transaction import TransactionService
from ledgerbook.domain.reporting import ReportService

__all__ = [
    "AccountService",
    "TransactionService",
    "ReportService",
]
