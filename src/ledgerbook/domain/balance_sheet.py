"""Balance sheet generation and accounting equation checks."""

import logging
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ledgerbook.domain.classifier import AccountClassifier
from ledgerbook.domain.config import DEFAULT_SETTINGS, LedgerSettings
from ledgerbook.domain.entities import (
    AccountBalance,
    AccountLine,
    BalanceSheetAssets,
    BalanceSheetEquity,
    BalanceSheetLiabilities,
    BalanceSheetReport,
    Classification,
    EquationCheck,
    ZERO,
)

logger = logging.getLogger(__name__)


def _total(lines: Sequence[AccountLine]) -> Decimal:
    return sum((line.amount for line in lines), ZERO)


def _sorted(lines: list[AccountLine]) -> tuple[AccountLine, ...]:
    return tuple(sorted(lines, key=lambda line: (line.code, line.name, line.account_id)))


class BalanceSheetBuilder:
    """Aggregates account balances into a balance sheet."""

    def __init__(
        self,
        classifier: Optional[AccountClassifier] = None,
        settings: LedgerSettings = DEFAULT_SETTINGS,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        self.classifier = classifier or AccountClassifier()
        self.settings = settings
        self.clock = clock

    def build(self, balances: Sequence[AccountBalance], as_of_date: date) -> BalanceSheetReport:
        """Build a balance sheet from account balances.

        Args:
            balances: Posted debit/credit totals per account up to the date
            as_of_date: Date the statement is drawn up at

        Returns:
            BalanceSheetReport; ``difference`` is reported whether or not the
            accounting equation holds
        """
        buckets: dict[Classification, list[AccountLine]] = {c: [] for c in Classification}
        revenue = ZERO
        expenses = ZERO

        for balance in balances:
            if balance.net == 0:
                continue
            classification = self.classifier.classify(balance.account)
            if classification is None:
                continue

            if classification == Classification.REVENUE:
                revenue += balance.credit - balance.debit
                continue
            if classification == Classification.EXPENSE:
                expenses += balance.debit - balance.credit
                continue

            # Assets carry debit balances; liabilities and equity carry credit balances.
            amount = balance.net if classification.is_asset else -balance.net
            account = balance.account
            buckets[classification].append(
                AccountLine(
                    account_id=account.id,
                    code=account.code,
                    name=account.name,
                    amount=amount,
                )
            )

        total_current_assets = _total(buckets[Classification.CURRENT_ASSET])
        total_fixed_assets = _total(buckets[Classification.FIXED_ASSET])
        total_other_assets = _total(buckets[Classification.OTHER_ASSET])
        total_assets = total_current_assets + total_fixed_assets + total_other_assets
        assets = BalanceSheetAssets(
            current_assets=_sorted(buckets[Classification.CURRENT_ASSET]),
            fixed_assets=_sorted(buckets[Classification.FIXED_ASSET]),
            other_assets=_sorted(buckets[Classification.OTHER_ASSET]),
            total_current_assets=total_current_assets,
            total_fixed_assets=total_fixed_assets,
            total_other_assets=total_other_assets,
            total_assets=total_assets,
        )

        total_current_liabilities = _total(buckets[Classification.CURRENT_LIABILITY])
        total_long_term_liabilities = _total(buckets[Classification.LONG_TERM_LIABILITY])
        total_liabilities = total_current_liabilities + total_long_term_liabilities
        liabilities = BalanceSheetLiabilities(
            current_liabilities=_sorted(buckets[Classification.CURRENT_LIABILITY]),
            long_term_liabilities=_sorted(buckets[Classification.LONG_TERM_LIABILITY]),
            total_current_liabilities=total_current_liabilities,
            total_long_term_liabilities=total_long_term_liabilities,
            total_liabilities=total_liabilities,
        )

        capital = _total(buckets[Classification.CAPITAL])
        retained_earnings = _total(buckets[Classification.RETAINED_EARNINGS])
        current_year_profit = revenue - expenses
        total_equity = capital + retained_earnings + current_year_profit
        equity = BalanceSheetEquity(
            capital_accounts=_sorted(buckets[Classification.CAPITAL]),
            retained_earnings_accounts=_sorted(buckets[Classification.RETAINED_EARNINGS]),
            capital=capital,
            retained_earnings=retained_earnings,
            current_year_profit=current_year_profit,
            total_equity=total_equity,
        )

        difference = total_assets - (total_liabilities + total_equity)
        balanced = abs(difference) < self.settings.balance_tolerance
        if not balanced:
            logger.warning(
                "Balance sheet as of %s is out of balance by %s", as_of_date, difference
            )

        return BalanceSheetReport(
            as_of_date=as_of_date,
            assets=assets,
            liabilities=liabilities,
            equity=equity,
            total_assets=total_assets,
            total_liabilities=total_liabilities,
            total_equity=total_equity,
            difference=difference,
            balanced=balanced,
            generated_at=self.clock(),
        )


def validate_accounting_equation(report: BalanceSheetReport) -> EquationCheck:
    """Check Assets = Liabilities + Equity and describe any imbalance."""
    if report.balanced:
        return EquationCheck(valid=True, message="Balance sheet is balanced")

    claims = report.total_liabilities + report.total_equity
    if report.difference > 0:
        message = (
            f"Assets ({report.total_assets:.2f}) exceed liabilities and equity "
            f"({claims:.2f}) by {report.difference:.2f}"
        )
    else:
        message = (
            f"Liabilities and equity ({claims:.2f}) exceed assets "
            f"({report.total_assets:.2f}) by {-report.difference:.2f}"
        )
    return EquationCheck(valid=False, message=message)
