"""Cash flow statement categorization.

Only transactions that move money through a cash account contribute. Each
contributing transaction is assigned to operating, investing or financing
activities from its type and the accounts its other entries touch.
"""

import logging
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional, Sequence

from ledgerbook.domain.config import DEFAULT_SETTINGS, LedgerSettings
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    CashFlowStatement,
    DateRange,
    Transaction,
    TransactionStatus,
    TransactionType,
    ZERO,
)
from ledgerbook.domain.report import ReportAssembler

logger = logging.getLogger(__name__)


class Activity(str, Enum):
    OPERATING = "OPERATING"
    INVESTING = "INVESTING"
    FINANCING = "FINANCING"


CUSTOMER_RECEIPTS = "Cash received from customers"
VENDOR_PAYMENTS = "Cash paid to vendors"
ASSET_PURCHASES = "Purchase of assets"
LOAN_PROCEEDS = "Loan proceeds"
LOAN_REPAYMENTS = "Loan repayments"
OTHER_OPERATING = "Other operating activities"

ACCRUAL_ONLY_TYPES = frozenset({TransactionType.CUSTOMER_INVOICE, TransactionType.VENDOR_BILL})


class CashFlowBucket:
    """Accumulates labelled amounts for one activity, in first-seen order."""

    def __init__(self):
        self.amounts: dict[str, Decimal] = {}
        self.counts: dict[str, int] = {}

    def add(self, label: str, amount: Decimal) -> None:
        self.amounts[label] = self.amounts.get(label, ZERO) + amount
        self.counts[label] = self.counts.get(label, 0) + 1

    def labelled_lines(self) -> list[tuple[str, Decimal]]:
        return [
            (f"{label} ({self.counts[label]})", amount)
            for label, amount in self.amounts.items()
        ]

    @property
    def total(self) -> Decimal:
        return sum(self.amounts.values(), ZERO)


class CashFlowCategorizer:
    """Builds a cash flow statement from posted transactions."""

    def __init__(
        self,
        settings: LedgerSettings = DEFAULT_SETTINGS,
        assembler: Optional[ReportAssembler] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        """Initialize categorizer.

        Args:
            settings: Engine settings (supplies the cash account keyword)
            assembler: Report assembler used to lay out the sections
            clock: Source of the generated-at timestamp
        """
        self.settings = settings
        self.assembler = assembler or ReportAssembler()
        self.clock = clock

    def is_cash_account(self, account: Account) -> bool:
        """Bank accounts and accounts named like cash hold cash."""
        keyword = self.settings.cash_account_keyword.lower()
        return account.is_bank_account or keyword in (account.name or "").lower()

    def cash_impact(
        self, transaction: Transaction, accounts_by_id: dict[str, Account]
    ) -> Optional[Decimal]:
        """Net debit to cash accounts, or None when no cash account is touched."""
        impact: Optional[Decimal] = None
        for entry in transaction.entries:
            account = accounts_by_id.get(entry.account_id)
            if account is not None and self.is_cash_account(account):
                impact = (impact or ZERO) + entry.debit - entry.credit
        return impact

    def activity_for(
        self,
        transaction: Transaction,
        cash_impact: Decimal,
        accounts_by_id: dict[str, Account],
    ) -> Optional[tuple[Activity, str]]:
        """Decide the activity and line label for a cash-moving transaction.

        Returns None for accrual-only transaction types.
        """
        if transaction.type in ACCRUAL_ONLY_TYPES:
            return None
        if transaction.type == TransactionType.CUSTOMER_PAYMENT:
            return Activity.OPERATING, CUSTOMER_RECEIPTS
        if transaction.type == TransactionType.VENDOR_PAYMENT:
            return Activity.OPERATING, VENDOR_PAYMENTS
        if transaction.type != TransactionType.JOURNAL_ENTRY:
            return Activity.OPERATING, OTHER_OPERATING

        touched = [accounts_by_id.get(entry.account_id) for entry in transaction.entries]
        touched = [account for account in touched if account is not None]

        # The cash leg itself is an ASSET account and the asset check runs
        # before the liability check, so a loan repaid from a bank account
        # lands in investing.
        has_asset = any(account.account_type == AccountType.ASSET for account in touched)
        has_liability = any(
            account.account_type == AccountType.LIABILITY for account in touched
        )
        if has_asset and cash_impact < 0:
            return Activity.INVESTING, ASSET_PURCHASES
        if has_liability:
            return Activity.FINANCING, LOAN_PROCEEDS if cash_impact > 0 else LOAN_REPAYMENTS
        return Activity.OPERATING, OTHER_OPERATING

    def categorize(
        self,
        transactions: Sequence[Transaction],
        accounts: Sequence[Account],
        date_range: DateRange,
    ) -> CashFlowStatement:
        """Categorize cash movement of posted transactions within a date range.

        Args:
            transactions: Transactions to consider; non-posted ones are ignored
            accounts: Chart of accounts used to resolve entries
            date_range: Inclusive reporting period

        Returns:
            CashFlowStatement with operating, investing and financing sections
        """
        accounts_by_id = {account.id: account for account in accounts}
        buckets = {activity: CashFlowBucket() for activity in Activity}

        for transaction in transactions:
            if transaction.status != TransactionStatus.POSTED:
                continue
            if not date_range.contains(transaction.date):
                continue

            impact = self.cash_impact(transaction, accounts_by_id)
            if impact is None:
                logger.debug("Transaction %s has no cash entries, skipping", transaction.id)
                continue

            decision = self.activity_for(transaction, impact, accounts_by_id)
            if decision is None:
                logger.debug("Transaction %s is accrual-only, skipping", transaction.id)
                continue
            activity, label = decision
            buckets[activity].add(label, impact)

        # Opening cash is the static opening balance; it does not roll forward
        # to the start of the period.
        opening_cash = sum(
            (account.opening_balance for account in accounts if self.is_cash_account(account)),
            ZERO,
        )

        operating = self.assembler.cash_flow_section(
            "Cash Flows from Operating Activities",
            buckets[Activity.OPERATING].labelled_lines(),
            "Net cash from operating activities",
        )
        investing = self.assembler.cash_flow_section(
            "Cash Flows from Investing Activities",
            buckets[Activity.INVESTING].labelled_lines(),
            "Net cash from investing activities",
        )
        financing = self.assembler.cash_flow_section(
            "Cash Flows from Financing Activities",
            buckets[Activity.FINANCING].labelled_lines(),
            "Net cash from financing activities",
        )
        net_cash_flow = operating.total + investing.total + financing.total

        return CashFlowStatement(
            start_date=date_range.start,
            end_date=date_range.end,
            operating=operating,
            investing=investing,
            financing=financing,
            net_cash_flow=net_cash_flow,
            opening_cash=opening_cash,
            closing_cash=opening_cash + net_cash_flow,
            generated_at=self.clock(),
        )
