"""Financial report domain service."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Sequence

from ledgerbook.domain.balance_sheet import BalanceSheetBuilder
from ledgerbook.domain.cash_flow import CashFlowCategorizer
from ledgerbook.domain.entities import (
    Account,
    AccountBalance,
    BalanceSheetReport,
    CashFlowStatement,
    DateRange,
    ProfitLossReport,
    Transaction,
    TransactionStatus,
    ZERO,
)
from ledgerbook.domain.errors import ReportGenerationError, StoreReadError
from ledgerbook.domain.profit_loss import ProfitLossBuilder

if TYPE_CHECKING:
    from ledgerbook.database.base import Database

logger = logging.getLogger(__name__)


def aggregate_balances(
    accounts: Sequence[Account], transactions: Sequence[Transaction]
) -> list[AccountBalance]:
    """Sum posted debits and credits per leaf account.

    Group accounts and entries pointing at unknown accounts are left out.
    """
    debits: dict[str, Decimal] = {}
    credits: dict[str, Decimal] = {}
    leaf_ids = {account.id for account in accounts if not account.is_group}

    for transaction in transactions:
        if transaction.status != TransactionStatus.POSTED:
            continue
        for entry in transaction.entries:
            if entry.account_id not in leaf_ids:
                logger.debug(
                    "Entry of transaction %s references unknown account %s",
                    transaction.id,
                    entry.account_id,
                )
                continue
            debits[entry.account_id] = debits.get(entry.account_id, ZERO) + entry.debit
            credits[entry.account_id] = credits.get(entry.account_id, ZERO) + entry.credit

    return [
        AccountBalance(
            account=account,
            debit=debits.get(account.id, ZERO),
            credit=credits.get(account.id, ZERO),
        )
        for account in accounts
        if account.id in leaf_ids
    ]


class ReportService:
    """Service for generating financial statements from the store."""

    def __init__(
        self,
        db: Database,
        balance_sheet_builder: Optional[BalanceSheetBuilder] = None,
        cash_flow_categorizer: Optional[CashFlowCategorizer] = None,
        profit_loss_builder: Optional[ProfitLossBuilder] = None,
    ):
        """Initialize report service.

        Args:
            db: Database instance
            balance_sheet_builder: Builder for balance sheets
            cash_flow_categorizer: Categorizer for cash flow statements
            profit_loss_builder: Builder for profit and loss statements
        """
        self.db = db
        self.balance_sheet_builder = balance_sheet_builder or BalanceSheetBuilder()
        self.cash_flow_categorizer = cash_flow_categorizer or CashFlowCategorizer()
        self.profit_loss_builder = profit_loss_builder or ProfitLossBuilder()

    def _snapshot(
        self, date_range: DateRange, report_name: str
    ) -> tuple[list[Account], list[Transaction]]:
        """Fetch accounts and posted transactions once for a report."""
        try:
            accounts = self.db.list_accounts()
            transactions = self.db.list_posted_transactions(date_range)
        except StoreReadError as e:
            logger.exception("Store read failed while generating %s", report_name)
            raise ReportGenerationError(f"Failed to generate {report_name}: {e}") from e
        # Stores may hand back undated or out-of-range records
        return accounts, [txn for txn in transactions if date_range.contains(txn.date)]

    def generate_balance_sheet(self, as_of_date: date) -> BalanceSheetReport:
        """Generate a balance sheet as of a date.

        Args:
            as_of_date: Include posted transactions dated on or before this date

        Returns:
            BalanceSheetReport

        Raises:
            ReportGenerationError: If the store cannot be read
        """
        accounts, transactions = self._snapshot(DateRange(end=as_of_date), "balance sheet")
        balances = aggregate_balances(accounts, transactions)
        report = self.balance_sheet_builder.build(balances, as_of_date)
        logger.info(
            "Generated balance sheet as of %s from %d transactions",
            as_of_date,
            len(transactions),
        )
        return report

    def generate_cash_flow(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> CashFlowStatement:
        """Generate a cash flow statement for a period.

        Args:
            start_date: First day of the period, unbounded if None
            end_date: Last day of the period, unbounded if None

        Returns:
            CashFlowStatement

        Raises:
            ReportGenerationError: If the store cannot be read
        """
        date_range = DateRange(start=start_date, end=end_date)
        accounts, transactions = self._snapshot(date_range, "cash flow statement")
        statement = self.cash_flow_categorizer.categorize(transactions, accounts, date_range)
        logger.info(
            "Generated cash flow statement for %s to %s from %d transactions",
            start_date,
            end_date,
            len(transactions),
        )
        return statement

    def generate_profit_loss(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> ProfitLossReport:
        """Generate a profit and loss statement for a period.

        Raises:
            ReportGenerationError: If the store cannot be read
        """
        date_range = DateRange(start=start_date, end=end_date)
        accounts, transactions = self._snapshot(date_range, "profit and loss statement")
        report = self.profit_loss_builder.build(
            aggregate_balances(accounts, transactions), date_range
        )
        logger.info("Generated profit and loss statement for %s to %s", start_date, end_date)
        return report
