"""Shared pytest fixtures for ledgerbook tests."""

import tempfile
import os
from datetime import date, datetime, UTC
from decimal import Decimal
import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    Entry,
    Transaction,
    TransactionStatus,
)
from ledgerbook.domain.reporting import ReportService
from ledgerbook.domain.transaction import TransactionService

FIXED_NOW = datetime(2024, 4, 30, 12, 0, tzinfo=UTC)

# code, name, type, bank account, opening balance
SAMPLE_CHART = [
    ("1000", "Cash in Hand", AccountType.ASSET, False, "10000"),
    ("1100", "HDFC Bank", AccountType.ASSET, True, "40000"),
    ("1200", "Accounts Receivable", AccountType.ASSET, False, "0"),
    ("1500", "Office Equipment", AccountType.ASSET, False, "0"),
    ("2000", "Accounts Payable", AccountType.LIABILITY, False, "0"),
    ("2500", "Term Loan", AccountType.LIABILITY, False, "0"),
    ("3000", "Owner's Capital", AccountType.EQUITY, False, "0"),
    ("3100", "Retained Earnings", AccountType.EQUITY, False, "0"),
    ("4000", "Sales", AccountType.INCOME, False, "0"),
    ("4100", "Interest Income", AccountType.INCOME, False, "0"),
    ("5000", "Cost of Goods Sold", AccountType.EXPENSE, False, "0"),
    ("6000", "Salary Expense", AccountType.EXPENSE, False, "0"),
]


def make_account(code, name, account_type, is_bank_account=False, opening_balance="0", **kwargs):
    """Build an Account whose ID is its code."""
    return Account(
        id=code,
        code=code,
        name=name,
        account_type=account_type,
        is_bank_account=is_bank_account,
        opening_balance=Decimal(opening_balance),
        **kwargs,
    )


def make_transaction(
    txn_id,
    txn_type,
    entries,
    txn_date=date(2024, 4, 15),
    status=TransactionStatus.POSTED,
):
    """Build a transaction from (account_id, debit, credit) tuples."""
    return Transaction(
        id=txn_id,
        type=txn_type,
        status=status,
        date=txn_date,
        entries=tuple(
            Entry(account_id=account_id, debit=Decimal(debit), credit=Decimal(credit))
            for account_id, debit, credit in entries
        ),
    )


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed timestamp."""
    return lambda: FIXED_NOW


@pytest.fixture
def chart():
    """Sample chart of accounts as domain entities keyed by code."""
    return {
        code: make_account(code, name, account_type, is_bank, opening)
        for code, name, account_type, is_bank, opening in SAMPLE_CHART
    }


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def sample_accounts(account_service):
    """Create the sample chart in the database and return accounts by code."""
    accounts = {}
    for code, name, account_type, is_bank, opening in SAMPLE_CHART:
        account_id = account_service.create_account(
            code=code,
            name=name,
            account_type=account_type,
            is_bank_account=is_bank,
            opening_balance=Decimal(opening),
        )
        accounts[code] = account_service.get_account(account_id)
    return accounts


@pytest.fixture
def post_entries(transaction_service, sample_accounts):
    """Record and post a transaction given (code, debit, credit) tuples."""

    def _post(txn_type, entries, txn_date=date(2024, 4, 15)):
        transaction_id = transaction_service.create_transaction(
            transaction_type=txn_type,
            date=txn_date,
            entries=[
                Entry(
                    account_id=sample_accounts[code].id,
                    debit=Decimal(debit),
                    credit=Decimal(credit),
                )
                for code, debit, credit in entries
            ],
        )
        transaction_service.post_transaction(transaction_id)
        return transaction_id

    return _post


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

