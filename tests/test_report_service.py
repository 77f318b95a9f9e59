"""Tests for the report service."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerbook.database.memory import InMemoryDatabase
from ledgerbook.domain.entities import Entry, TransactionType
from ledgerbook.domain.errors import ReportGenerationError, StoreReadError
from ledgerbook.domain.report import report_to_dict
from ledgerbook.domain.reporting import ReportService, aggregate_balances

from conftest import make_transaction


@pytest.fixture
def posted_books(post_entries):
    """Capital, a sale, a salary run and an asset purchase in April 2024."""
    post_entries(
        TransactionType.JOURNAL_ENTRY,
        [("1100", "100000", "0"), ("3000", "0", "100000")],
        date(2024, 4, 1),
    )
    post_entries(
        TransactionType.CUSTOMER_PAYMENT,
        [("1100", "50000", "0"), ("4000", "0", "50000")],
        date(2024, 4, 10),
    )
    post_entries(
        TransactionType.DIRECT_PAYMENT,
        [("6000", "20000", "0"), ("1100", "0", "20000")],
        date(2024, 4, 20),
    )
    post_entries(
        TransactionType.JOURNAL_ENTRY,
        [("1500", "15000", "0"), ("1100", "0", "15000")],
        date(2024, 5, 5),
    )


class TestBalanceSheet:
    """Tests for balance sheet generation from the store."""

    def test_posted_books_balance(self, report_service, posted_books):
        report = report_service.generate_balance_sheet(date(2024, 5, 31))

        assert report.total_assets == Decimal("130000")
        assert report.equity.capital == Decimal("100000")
        assert report.equity.current_year_profit == Decimal("30000")
        assert report.balanced is True

    def test_as_of_date_excludes_later_transactions(self, report_service, posted_books):
        report = report_service.generate_balance_sheet(date(2024, 4, 30))

        codes = [line.code for line in report.assets.current_assets]
        assert codes == ["1100"]
        assert report.total_assets == Decimal("130000")

    def test_drafts_are_ignored(self, report_service, transaction_service, sample_accounts, posted_books):
        transaction_service.create_transaction(
            transaction_type=TransactionType.JOURNAL_ENTRY,
            date=date(2024, 4, 5),
            entries=[Entry(account_id=sample_accounts["1100"].id, debit=Decimal("999"))],
        )

        report = report_service.generate_balance_sheet(date(2024, 5, 31))

        assert report.total_assets == Decimal("130000")


class TestCashFlow:
    """Tests for cash flow generation from the store."""

    def test_april_cash_flow(self, report_service, posted_books):
        statement = report_service.generate_cash_flow(date(2024, 4, 1), date(2024, 4, 30))

        # Capital brought in by journal entry has no liability leg, so it is operating
        assert statement.operating.total == Decimal("130000")
        assert statement.investing.total == Decimal("0")
        assert statement.net_cash_flow == Decimal("130000")
        assert statement.opening_cash == Decimal("50000")
        assert statement.closing_cash == Decimal("180000")

    def test_may_cash_flow(self, report_service, posted_books):
        statement = report_service.generate_cash_flow(date(2024, 5, 1), date(2024, 5, 31))

        assert statement.investing.total == Decimal("-15000")
        assert statement.operating.total == Decimal("0")


class TestProfitLoss:
    """Tests for profit and loss generation from the store."""

    def test_period_profit(self, report_service, posted_books):
        report = report_service.generate_profit_loss(date(2024, 4, 1), date(2024, 4, 30))

        assert report.sales == Decimal("50000")
        assert report.operating_expenses == Decimal("20000")
        assert report.net_profit == Decimal("30000")
        assert report.profit_margin == Decimal("60.00")

    def test_empty_period(self, report_service, posted_books):
        report = report_service.generate_profit_loss(date(2023, 4, 1), date(2024, 3, 31))
        assert report.net_profit == Decimal("0")


class FailingDatabase(InMemoryDatabase):
    def list_posted_transactions(self, date_range=None):
        raise StoreReadError("connection reset")


def test_store_failure_becomes_report_error(caplog):
    service = ReportService(FailingDatabase())

    with pytest.raises(ReportGenerationError, match="balance sheet") as excinfo:
        service.generate_balance_sheet(date(2024, 3, 31))

    assert isinstance(excinfo.value.__cause__, StoreReadError)
    assert "Store read failed" in caplog.text


def test_in_memory_documents_report(fixed_clock):
    db = InMemoryDatabase.from_documents(
        accounts=[
            {"id": "bank", "code": "1100", "name": "Bank", "type": "ASSET", "isBankAccount": True},
            {"id": "cap", "code": "3000", "name": "Capital", "type": "EQUITY"},
            {"id": "grp", "code": "1000", "name": "Assets", "type": "ASSET", "isGroup": True},
        ],
        transactions=[
            {
                "id": "t1",
                "type": "JOURNAL_ENTRY",
                "status": "POSTED",
                "date": "2024-04-01",
                "entries": [
                    {"accountId": "bank", "debit": "25000"},
                    {"accountId": "cap", "credit": "25000"},
                ],
            },
            {"id": "t2", "type": "JOURNAL_ENTRY", "status": "POSTED", "date": "bad date"},
        ],
    )
    service = ReportService(db)

    first = report_to_dict(service.generate_balance_sheet(date(2024, 4, 30)))
    second = report_to_dict(service.generate_balance_sheet(date(2024, 4, 30)))

    assert first["balanced"] is True
    assert first["total_assets"] == "25000.00"
    first.pop("generated_at")
    second.pop("generated_at")
    assert first == second



def test_malformed_documents_do_not_fail_the_report(fixed_clock):
    entries = [
        {"accountId": "bank", "debit": "100"},
        {"accountId": "recv", "credit": "100"},
    ]
    db = InMemoryDatabase.from_documents(
        accounts=[
            {"id": "bank", "code": "1100", "name": "Bank", "type": "ASSET", "isBankAccount": True},
            {"id": "recv", "code": "1200", "name": "Receivables", "type": "ASSET"},
            {"id": "odd", "code": "9000", "name": "Suspense", "type": "MYSTERY"},
        ],
        transactions=[
            {"id": "t1", "type": "CONTRA_ENTRY", "status": "POSTED", "date": "2024-04-05", "entries": entries},
            {"id": "t2", "status": "POSTED", "date": "2024-04-06", "entries": entries},
            {"status": "POSTED", "date": "2024-04-07", "entries": entries},
        ],
    )

    statement = ReportService(db).generate_cash_flow(date(2024, 4, 1), date(2024, 4, 30))

    assert statement.operating.total == Decimal("200")
    assert statement.operating.lines[0].description == "Other operating activities (2)"
    assert [account.code for account in db.list_accounts()] == ["1100", "1200"]

def test_aggregate_balances_skips_groups_and_unknown_accounts(chart):
    txn = make_transaction(
        "T1",
        TransactionType.JOURNAL_ENTRY,
        [("1100", "10", "0"), ("ghost", "0", "10")],
    )

    balances = aggregate_balances(list(chart.values()), [txn])

    by_code = {balance.account.code: balance for balance in balances}
    assert by_code["1100"].debit == Decimal("10")
    assert len(balances) == len(chart)
