"""Report assembly and serialization.

Builders hand aggregated totals to the assembler, which lays them out as
sections of display lines, each closed by a subtotal line. ``report_to_dict``
turns any report value object into plain JSON-serializable data.
"""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Sequence

from ledgerbook.domain.entities import (
    AccountLine,
    BalanceSheetReport,
    ProfitLossReport,
    ReportLine,
    ReportSection,
    ZERO,
)
from ledgerbook.utils.amount_parser import round_currency


class ReportAssembler:
    """Lays out report totals as line-structured sections."""

    def section(
        self,
        title: str,
        lines: Sequence[ReportLine],
        subtotal_label: str,
    ) -> ReportSection:
        """Close a list of lines with a subtotal line."""
        total = sum((line.amount for line in lines if not line.is_subtotal), ZERO)
        subtotal = ReportLine(description=subtotal_label, amount=total, is_subtotal=True)
        return ReportSection(title=title, lines=tuple(lines) + (subtotal,), total=total)

    def cash_flow_section(
        self,
        title: str,
        labelled_amounts: Sequence[tuple[str, Decimal]],
        subtotal_label: str,
    ) -> ReportSection:
        """Section of labelled cash movements, indented under the title."""
        lines = [
            ReportLine(description=label, amount=amount, indent=1)
            for label, amount in labelled_amounts
        ]
        return self.section(title, lines, subtotal_label)

    def account_section(
        self,
        title: str,
        accounts: Sequence[AccountLine],
        subtotal_label: str,
    ) -> ReportSection:
        """Section listing one line per account."""
        lines = [
            ReportLine(
                description=f"{line.code} {line.name}".strip(),
                amount=line.amount,
                indent=1,
                account_code=line.code,
            )
            for line in accounts
        ]
        return self.section(title, lines, subtotal_label)

    def balance_sheet_sections(self, report: BalanceSheetReport) -> tuple[ReportSection, ...]:
        """Assets, liabilities and equity sections of a balance sheet."""
        assets, liabilities, equity = report.assets, report.liabilities, report.equity
        sections = [
            self.account_section(
                "Current Assets", assets.current_assets, "Total Current Assets"
            ),
            self.account_section("Fixed Assets", assets.fixed_assets, "Total Fixed Assets"),
        ]
        if assets.other_assets:
            sections.append(
                self.account_section("Other Assets", assets.other_assets, "Total Other Assets")
            )
        sections.append(
            self.account_section(
                "Current Liabilities",
                liabilities.current_liabilities,
                "Total Current Liabilities",
            )
        )
        if liabilities.long_term_liabilities:
            sections.append(
                self.account_section(
                    "Long-term Liabilities",
                    liabilities.long_term_liabilities,
                    "Total Long-term Liabilities",
                )
            )
        sections.append(
            self.section(
                "Equity",
                [
                    ReportLine("Capital", equity.capital, indent=1),
                    ReportLine("Retained Earnings", equity.retained_earnings, indent=1),
                    ReportLine("Current Year Profit", equity.current_year_profit, indent=1),
                ],
                "Total Equity",
            )
        )
        return tuple(sections)

    def profit_loss_sections(self, report: ProfitLossReport) -> tuple[ReportSection, ...]:
        """Revenue and expense sections of a profit and loss statement."""
        revenue = self.section(
            "Revenue",
            [
                ReportLine("Sales", report.sales, indent=1),
                ReportLine("Other Income", report.other_income, indent=1),
            ],
            "Total Revenue",
        )
        expenses = self.section(
            "Expenses",
            [
                ReportLine("Cost of Goods Sold", report.cost_of_goods_sold, indent=1),
                ReportLine("Operating Expenses", report.operating_expenses, indent=1),
                ReportLine("Other Expenses", report.other_expenses, indent=1),
            ],
            "Total Expenses",
        )
        return (revenue, expenses)


def _to_plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(round_currency(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _to_plain(item) for key, item in value.items()}
    return value


def report_to_dict(report: Any) -> dict[str, Any]:
    """Convert a report value object into JSON-serializable dictionaries.

    Decimals become strings with two decimal places and dates ISO strings.
    """
    if not is_dataclass(report) or isinstance(report, type):
        raise TypeError(f"Expected a report dataclass, got {type(report).__name__}")
    return _to_plain(report)
