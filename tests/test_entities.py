"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

from ledgerbook.domain.entities import (
    Account,
    AccountBalance,
    AccountType,
    Classification,
    DateRange,
    Entry,
    TDSDetails,
    Transaction,
    TransactionStatus,
    TransactionType,
)


class TestAccount:
    """Tests for Account entity."""

    def test_defaults(self):
        account = Account(id="1", code="1100", name="Bank", account_type=AccountType.ASSET)

        assert account.is_bank_account is False
        assert account.opening_balance == Decimal("0")
        assert account.is_group is False
        assert account.currency == "INR"

    def test_account_immutability(self):
        """Test that Account entities are immutable."""
        account = Account(id="1", code="1100", name="Bank", account_type=AccountType.ASSET)
        with pytest.raises(FrozenInstanceError):
            account.name = "New Name"

    def test_enums_compare_to_strings(self):
        assert AccountType.INCOME == "INCOME"
        assert TransactionStatus("POSTED") is TransactionStatus.POSTED


class TestTransaction:
    """Tests for Transaction entity."""

    def test_create_transaction(self):
        txn = Transaction(
            id="T1",
            type=TransactionType.JOURNAL_ENTRY,
            status=TransactionStatus.DRAFT,
            date=date(2024, 4, 1),
            entries=(Entry("1100", debit=Decimal("10")), Entry("4000", credit=Decimal("10"))),
        )

        assert len(txn.entries) == 2
        assert txn.gst_details is None
        assert txn.total_amount == Decimal("0")

    def test_tds_net_payable(self):
        tds = TDSDetails(
            section="194J",
            rate=Decimal("10"),
            pan_provided=True,
            tds_amount=Decimal("5000"),
            amount=Decimal("50000"),
        )
        assert tds.net_payable == Decimal("45000")

    def test_tds_net_payable_is_rounded(self):
        tds = TDSDetails(
            section="194C",
            rate=Decimal("1"),
            pan_provided=True,
            tds_amount=Decimal("100.005"),
            amount=Decimal("10000.50"),
        )
        assert str(tds.net_payable) == "9900.50"


class TestDateRange:
    """Tests for inclusive date ranges."""

    def test_bounds_are_inclusive(self):
        april = DateRange(date(2024, 4, 1), date(2024, 4, 30))

        assert april.contains(date(2024, 4, 1))
        assert april.contains(date(2024, 4, 30))
        assert not april.contains(date(2024, 3, 31))
        assert not april.contains(date(2024, 5, 1))

    def test_open_ends(self):
        assert DateRange(end=date(2024, 3, 31)).contains(date(1999, 1, 1))
        assert DateRange(start=date(2024, 4, 1)).contains(date(2099, 1, 1))
        assert DateRange().contains(date(2024, 4, 1))

    def test_undated_is_never_contained(self):
        assert not DateRange().contains(None)


def test_account_balance_net():
    account = Account(id="1", code="2000", name="Payables", account_type=AccountType.LIABILITY)
    balance = AccountBalance(account, debit=Decimal("5000"), credit=Decimal("25000"))
    assert balance.net == Decimal("-20000")


@pytest.mark.parametrize(
    "classification,is_asset",
    [
        (Classification.CURRENT_ASSET, True),
        (Classification.FIXED_ASSET, True),
        (Classification.OTHER_ASSET, True),
        (Classification.CURRENT_LIABILITY, False),
        (Classification.CAPITAL, False),
        (Classification.REVENUE, False),
    ],
)
def test_classification_is_asset(classification, is_asset):
    assert classification.is_asset is is_asset
