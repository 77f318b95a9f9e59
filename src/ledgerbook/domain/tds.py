"""TDS (tax deducted at source) calculation."""

import logging
import re
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ledgerbook.domain.config import (
    COMMON_TDS_SECTIONS,
    DEFAULT_SETTINGS,
    TDS_SECTIONS,
    LedgerSettings,
    TDSSection,
)
from ledgerbook.domain.entities import TDSDetails, ZERO
from ledgerbook.domain.errors import InvalidSectionError, ValidationError
from ledgerbook.utils.amount_parser import round_currency, to_decimal

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
SENIOR_CITIZEN_EXEMPT_SECTIONS = frozenset({"194A"})


def is_valid_pan(pan: Optional[str]) -> bool:
    """Check a PAN against the AAAAA9999A format."""
    return bool(pan) and PAN_PATTERN.match(pan) is not None


class TDSCalculator:
    """Resolves withholding rates and computes TDS deductions."""

    def __init__(
        self,
        sections: Mapping[str, TDSSection] = TDS_SECTIONS,
        settings: LedgerSettings = DEFAULT_SETTINGS,
        common_sections: Sequence[str] = COMMON_TDS_SECTIONS,
    ):
        """Initialize TDS calculator.

        Args:
            sections: Section table keyed by section code
            settings: Engine settings (supplies the no-PAN penalty rate)
            common_sections: Sections offered first in entry forms
        """
        self.sections = sections
        self.settings = settings
        self._common_sections = tuple(common_sections)

    def section_info(self, section: str) -> TDSSection:
        """Return the table entry for a section.

        Raises:
            InvalidSectionError: If the section is not in the table
        """
        info = self.sections.get(section)
        if info is None:
            raise InvalidSectionError(section)
        return info

    def resolve_rate(
        self,
        section: str,
        pan_number: Optional[str] = None,
        rate_override: Optional[Decimal] = None,
        senior_citizen: bool = False,
    ) -> Decimal:
        """Resolve the rate: override, else no-PAN penalty, else table rate."""
        info = self.section_info(section)
        if rate_override is not None:
            return to_decimal(rate_override)
        if not (pan_number or "").strip():
            return self.settings.no_pan_tds_rate
        if senior_citizen and section in SENIOR_CITIZEN_EXEMPT_SECTIONS:
            return ZERO
        return info.rate

    def calculate_tds(
        self,
        amount: Decimal,
        section: str,
        pan_number: Optional[str] = None,
        rate_override: Optional[Decimal] = None,
        senior_citizen: bool = False,
    ) -> TDSDetails:
        """Calculate TDS on a payment.

        Args:
            amount: Gross payment amount
            section: Statutory section code, e.g. "194C"
            pan_number: Deductee PAN; missing or blank triggers the penalty rate
            rate_override: Explicit rate that wins over every other rule
            senior_citizen: Deductee is a senior citizen (exempts 194A)

        Returns:
            TDSDetails with the deduction rounded to 2 decimal places

        Raises:
            ValidationError: If amount is not positive or the rate is outside 0-100
            InvalidSectionError: If the section is not in the table
        """
        amount = to_decimal(amount)
        if amount <= 0:
            raise ValidationError(f"TDS amount must be greater than zero: {amount}")

        rate = self.resolve_rate(section, pan_number, rate_override, senior_citizen)
        if not ZERO <= rate <= HUNDRED:
            raise ValidationError(f"TDS rate must be between 0 and 100: {rate}")

        pan = (pan_number or "").strip() or None
        if pan is None:
            logger.debug("No PAN for section %s, applying %s%%", section, rate)

        return TDSDetails(
            section=section,
            rate=rate,
            pan_provided=pan is not None,
            tds_amount=round_currency(amount * rate / HUNDRED),
            amount=amount,
            pan_number=pan,
        )

    def is_tds_applicable(self, section: str, amount: Decimal) -> bool:
        """Whether an amount reaches the section's threshold."""
        info = self.sections.get(section)
        if info is None:
            return False
        return to_decimal(amount) >= info.threshold

    def all_sections(self) -> list[tuple[str, TDSSection]]:
        """All sections in table order."""
        return list(self.sections.items())

    def common_sections(self) -> list[str]:
        """Sections most often used on vendor bills."""
        return list(self._common_sections)

    @staticmethod
    def net_payable(amount: Decimal, tds_amount: Decimal) -> Decimal:
        """Amount payable to the deductee after TDS."""
        return round_currency(to_decimal(amount) - to_decimal(tds_amount))
