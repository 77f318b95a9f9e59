"""Domain model entities for ledgerbook.

These are pure data classes representing accounting concepts, independent of
the store schema. Everything past the store boundary works on these immutable
snapshots; reports are computed value objects that are never persisted.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from ledgerbook.utils.amount_parser import round_currency


ZERO = Decimal("0")


class AccountType(str, Enum):
    """Top-level account type of the chart of accounts."""

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionType(str, Enum):
    """Business transaction types recorded in the ledger."""

    CUSTOMER_INVOICE = "CUSTOMER_INVOICE"
    CUSTOMER_PAYMENT = "CUSTOMER_PAYMENT"
    VENDOR_BILL = "VENDOR_BILL"
    VENDOR_PAYMENT = "VENDOR_PAYMENT"
    EXPENSE_CLAIM = "EXPENSE_CLAIM"
    JOURNAL_ENTRY = "JOURNAL_ENTRY"
    BANK_TRANSFER = "BANK_TRANSFER"
    DIRECT_PAYMENT = "DIRECT_PAYMENT"
    DIRECT_RECEIPT = "DIRECT_RECEIPT"
    # Stored under a type this ledger does not know
    OTHER = "OTHER"


class TransactionStatus(str, Enum):
    """Lifecycle status of a transaction."""

    DRAFT = "DRAFT"
    POSTED = "POSTED"
    VOID = "VOID"


class GSTType(str, Enum):
    """How GST is split for a supply."""

    CGST_SGST = "CGST_SGST"
    IGST = "IGST"


class Classification(str, Enum):
    """Report bucket an account is aggregated into."""

    CURRENT_ASSET = "CURRENT_ASSET"
    FIXED_ASSET = "FIXED_ASSET"
    OTHER_ASSET = "OTHER_ASSET"
    CURRENT_LIABILITY = "CURRENT_LIABILITY"
    LONG_TERM_LIABILITY = "LONG_TERM_LIABILITY"
    CAPITAL = "CAPITAL"
    RETAINED_EARNINGS = "RETAINED_EARNINGS"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"

    @property
    def is_asset(self) -> bool:
        return self in (
            Classification.CURRENT_ASSET,
            Classification.FIXED_ASSET,
            Classification.OTHER_ASSET,
        )


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry."""

    id: str
    code: str
    name: str
    account_type: AccountType
    is_bank_account: bool = False
    opening_balance: Decimal = ZERO
    is_group: bool = False
    currency: str = "INR"


@dataclass(frozen=True)
class Entry:
    """A single debit or credit line of a transaction."""

    account_id: str
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    description: Optional[str] = None


@dataclass(frozen=True)
class GSTDetails:
    """GST split for a taxable amount."""

    taxable_amount: Decimal
    gst_type: GSTType
    gst_rate: Decimal
    total_gst: Decimal
    cgst_amount: Optional[Decimal] = None
    sgst_amount: Optional[Decimal] = None
    igst_amount: Optional[Decimal] = None


@dataclass(frozen=True)
class TDSDetails:
    """Tax deducted at source for a payment."""

    section: str
    rate: Decimal
    pan_provided: bool
    tds_amount: Decimal
    amount: Decimal
    pan_number: Optional[str] = None

    @property
    def net_payable(self) -> Decimal:
        """Amount payable to the deductee after TDS, to 2 decimal places."""
        return round_currency(self.amount - self.tds_amount)


@dataclass(frozen=True)
class Transaction:
    """Business transaction with its ledger entries."""

    id: str
    type: TransactionType
    status: TransactionStatus
    date: Optional[date]
    entries: tuple[Entry, ...] = ()
    total_amount: Decimal = ZERO
    transaction_number: Optional[str] = None
    description: Optional[str] = None
    gst_details: Optional[GSTDetails] = None
    tds_details: Optional[TDSDetails] = None


@dataclass(frozen=True)
class LineItem:
    """Invoice line used for invoice-level GST helpers."""

    description: str
    amount: Decimal
    gst_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range; a missing bound is unbounded."""

    start: Optional[date] = None
    end: Optional[date] = None

    def contains(self, value: Optional[date]) -> bool:
        if value is None:
            return False
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True


@dataclass(frozen=True)
class AccountBalance:
    """Posted debit and credit totals of one account."""

    account: Account
    debit: Decimal = ZERO
    credit: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        """Debit-positive net balance."""
        return self.debit - self.credit


@dataclass(frozen=True)
class ReportLine:
    """Displayable line of a report section."""

    description: str
    amount: Decimal
    is_subtotal: bool = False
    indent: int = 0
    account_code: Optional[str] = None


@dataclass(frozen=True)
class ReportSection:
    """Titled group of report lines ending in a subtotal."""

    title: str
    lines: tuple[ReportLine, ...]
    total: Decimal


@dataclass(frozen=True)
class AccountLine:
    """Account-level amount inside a report bucket."""

    account_id: str
    code: str
    name: str
    amount: Decimal


@dataclass(frozen=True)
class CashFlowStatement:
    """Cash flow statement for a period."""

    start_date: Optional[date]
    end_date: Optional[date]
    operating: ReportSection
    investing: ReportSection
    financing: ReportSection
    net_cash_flow: Decimal
    opening_cash: Decimal
    closing_cash: Decimal
    generated_at: datetime


@dataclass(frozen=True)
class BalanceSheetAssets:
    current_assets: tuple[AccountLine, ...] = ()
    fixed_assets: tuple[AccountLine, ...] = ()
    other_assets: tuple[AccountLine, ...] = ()
    total_current_assets: Decimal = ZERO
    total_fixed_assets: Decimal = ZERO
    total_other_assets: Decimal = ZERO
    total_assets: Decimal = ZERO


@dataclass(frozen=True)
class BalanceSheetLiabilities:
    current_liabilities: tuple[AccountLine, ...] = ()
    long_term_liabilities: tuple[AccountLine, ...] = ()
    total_current_liabilities: Decimal = ZERO
    total_long_term_liabilities: Decimal = ZERO
    total_liabilities: Decimal = ZERO


@dataclass(frozen=True)
class BalanceSheetEquity:
    capital_accounts: tuple[AccountLine, ...] = ()
    retained_earnings_accounts: tuple[AccountLine, ...] = ()
    capital: Decimal = ZERO
    retained_earnings: Decimal = ZERO
    current_year_profit: Decimal = ZERO
    total_equity: Decimal = ZERO


@dataclass(frozen=True)
class BalanceSheetReport:
    """Statement of financial position as of a date."""

    as_of_date: date
    assets: BalanceSheetAssets
    liabilities: BalanceSheetLiabilities
    equity: BalanceSheetEquity
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    difference: Decimal
    balanced: bool
    generated_at: datetime


@dataclass(frozen=True)
class EquationCheck:
    """Outcome of checking Assets = Liabilities + Equity."""

    valid: bool
    message: str


@dataclass(frozen=True)
class ProfitLossReport:
    """Revenue, expenses and profit for a period."""

    start_date: Optional[date]
    end_date: Optional[date]
    sales: Decimal
    other_income: Decimal
    total_revenue: Decimal
    cost_of_goods_sold: Decimal
    operating_expenses: Decimal
    other_expenses: Decimal
    total_expenses: Decimal
    gross_profit: Decimal
    operating_profit: Decimal
    net_profit: Decimal
    profit_margin: Decimal
    generated_at: datetime
    sales_accounts: tuple[AccountLine, ...] = field(default_factory=tuple)
    other_income_accounts: tuple[AccountLine, ...] = field(default_factory=tuple)
    cogs_accounts: tuple[AccountLine, ...] = field(default_factory=tuple)
    operating_accounts: tuple[AccountLine, ...] = field(default_factory=tuple)
    other_expense_accounts: tuple[AccountLine, ...] = field(default_factory=tuple)
