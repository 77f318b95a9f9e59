"""Profit and loss statement generation."""

import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ledgerbook.domain.classifier import AccountClassifier
from ledgerbook.domain.entities import (
    Account,
    AccountBalance,
    AccountLine,
    Classification,
    DateRange,
    ProfitLossReport,
    ZERO,
)
from ledgerbook.utils.amount_parser import round_currency

logger = logging.getLogger(__name__)

SALES_KEYWORDS = ("sales", "revenue")
COGS_KEYWORDS = ("cost of goods", "cogs")
OPERATING_EXPENSE_KEYWORDS = ("salary", "rent", "utilities", "depreciation")


def _name_has(account: Account, keywords: Sequence[str]) -> bool:
    name = (account.name or "").lower()
    return any(keyword in name for keyword in keywords)


def _line(account: Account, amount: Decimal) -> AccountLine:
    return AccountLine(account_id=account.id, code=account.code, name=account.name, amount=amount)


def _by_amount(lines: list[AccountLine]) -> tuple[AccountLine, ...]:
    return tuple(sorted(lines, key=lambda line: (-line.amount, line.code)))


def _total(lines: Sequence[AccountLine]) -> Decimal:
    return sum((line.amount for line in lines), ZERO)


class ProfitLossBuilder:
    """Breaks down revenue and expenses for a period."""

    def __init__(
        self,
        classifier: Optional[AccountClassifier] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        self.classifier = classifier or AccountClassifier()
        self.clock = clock

    def is_sales(self, account: Account) -> bool:
        return account.code.startswith("4") or _name_has(account, SALES_KEYWORDS)

    def is_cost_of_goods(self, account: Account) -> bool:
        return account.code.startswith("5") or _name_has(account, COGS_KEYWORDS)

    def is_operating_expense(self, account: Account) -> bool:
        return account.code.startswith(("6", "7")) or _name_has(
            account, OPERATING_EXPENSE_KEYWORDS
        )

    def build(self, balances: Sequence[AccountBalance], date_range: DateRange) -> ProfitLossReport:
        """Build a profit and loss statement.

        Args:
            balances: Posted debit/credit totals per account within the period
            date_range: Reporting period

        Returns:
            ProfitLossReport with account lines ordered by amount, largest first
        """
        sales: list[AccountLine] = []
        other_income: list[AccountLine] = []
        cogs: list[AccountLine] = []
        operating: list[AccountLine] = []
        other_expenses: list[AccountLine] = []

        for balance in balances:
            if balance.net == 0:
                continue
            account = balance.account
            classification = self.classifier.classify(account)

            if classification == Classification.REVENUE:
                line = _line(account, balance.credit - balance.debit)
                (sales if self.is_sales(account) else other_income).append(line)
            elif classification == Classification.EXPENSE:
                line = _line(account, balance.debit - balance.credit)
                if self.is_cost_of_goods(account):
                    cogs.append(line)
                elif self.is_operating_expense(account):
                    operating.append(line)
                else:
                    other_expenses.append(line)

        total_sales = _total(sales)
        total_revenue = total_sales + _total(other_income)
        total_cogs = _total(cogs)
        total_operating = _total(operating)
        total_expenses = total_cogs + total_operating + _total(other_expenses)

        gross_profit = total_sales - total_cogs
        net_profit = total_revenue - total_expenses
        if total_revenue > 0:
            profit_margin = round_currency(net_profit / total_revenue * 100)
        else:
            profit_margin = ZERO

        logger.debug(
            "Profit and loss for %s to %s: revenue %s, expenses %s",
            date_range.start,
            date_range.end,
            total_revenue,
            total_expenses,
        )

        return ProfitLossReport(
            start_date=date_range.start,
            end_date=date_range.end,
            sales=total_sales,
            other_income=_total(other_income),
            total_revenue=total_revenue,
            cost_of_goods_sold=total_cogs,
            operating_expenses=total_operating,
            other_expenses=_total(other_expenses),
            total_expenses=total_expenses,
            gross_profit=gross_profit,
            operating_profit=gross_profit - total_operating,
            net_profit=net_profit,
            profit_margin=profit_margin,
            generated_at=self.clock(),
            sales_accounts=_by_amount(sales),
            other_income_accounts=_by_amount(other_income),
            cogs_accounts=_by_amount(cogs),
            operating_accounts=_by_amount(operating),
            other_expense_accounts=_by_amount(other_expenses),
        )
