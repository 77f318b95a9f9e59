"""GST calculation for intra-state and inter-state supplies."""

import logging
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ledgerbook.domain.config import GST_STATE_CODES
from ledgerbook.domain.entities import GSTDetails, GSTType, LineItem, ZERO
from ledgerbook.domain.errors import InvalidStateCodeError, ValidationError
from ledgerbook.utils.amount_parser import round_currency, to_decimal

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


class GSTCalculator:
    """Splits taxable amounts into CGST/SGST or IGST."""

    def __init__(self, state_codes: Mapping[str, str] = GST_STATE_CODES):
        """Initialize GST calculator.

        Args:
            state_codes: Recognised two-digit GST state codes
        """
        self.state_codes = state_codes

    def normalize_state(self, state_code: Optional[str]) -> Optional[str]:
        """Return a validated state code, or None when it is missing.

        Raises:
            InvalidStateCodeError: If a code is given but not recognised
        """
        if state_code is None:
            return None
        code = str(state_code).strip()
        if not code:
            return None
        if len(code) == 1 and code.isdigit():
            code = f"0{code}"
        if code not in self.state_codes:
            raise InvalidStateCodeError(str(state_code))
        return code

    def calculate_gst(
        self,
        taxable_amount: Decimal,
        gst_rate: Decimal,
        source_state: Optional[str] = None,
        destination_state: Optional[str] = None,
    ) -> GSTDetails:
        """Calculate GST for a taxable amount.

        Same-state supplies split the rate evenly into CGST and SGST; anything
        else, including supplies whose state codes are unknown, is charged IGST.

        Args:
            taxable_amount: Amount before tax
            gst_rate: GST rate in percent (e.g. 18)
            source_state: Supplier's GST state code
            destination_state: Place-of-supply GST state code

        Returns:
            GSTDetails with components rounded to 2 decimal places

        Raises:
            ValidationError: If the amount is negative or the rate is outside 0-100
            InvalidStateCodeError: If a state code is present but not recognised
        """
        taxable_amount = to_decimal(taxable_amount)
        gst_rate = to_decimal(gst_rate)
        if taxable_amount < 0:
            raise ValidationError(f"Taxable amount cannot be negative: {taxable_amount}")
        if not ZERO <= gst_rate <= HUNDRED:
            raise ValidationError(f"GST rate must be between 0 and 100: {gst_rate}")

        source = self.normalize_state(source_state)
        destination = self.normalize_state(destination_state)

        if source is None or destination is None:
            logger.debug("State code missing, applying IGST to %s", taxable_amount)
        elif source == destination:
            half = round_currency(taxable_amount * (gst_rate / 2) / HUNDRED)
            return GSTDetails(
                taxable_amount=taxable_amount,
                gst_type=GSTType.CGST_SGST,
                gst_rate=gst_rate,
                cgst_amount=half,
                sgst_amount=half,
                total_gst=half + half,
            )

        igst = round_currency(taxable_amount * gst_rate / HUNDRED)
        return GSTDetails(
            taxable_amount=taxable_amount,
            gst_type=GSTType.IGST,
            gst_rate=gst_rate,
            igst_amount=igst,
            total_gst=igst,
        )

    def average_gst_rate(self, line_items: Sequence[LineItem]) -> Decimal:
        """Unweighted mean of the line items' GST rates.

        Items without a rate count as zero; an empty list averages to zero.
        """
        if not line_items:
            return ZERO
        total = sum((item.gst_rate or ZERO for item in line_items), ZERO)
        return total / len(line_items)

    def calculate_invoice_gst(
        self,
        line_items: Sequence[LineItem],
        source_state: Optional[str] = None,
        destination_state: Optional[str] = None,
    ) -> GSTDetails:
        """Calculate GST on an invoice subtotal at the average line rate."""
        subtotal = sum((item.amount for item in line_items), ZERO)
        return self.calculate_gst(
            subtotal,
            self.average_gst_rate(line_items),
            source_state,
            destination_state,
        )

    @staticmethod
    def grand_total(details: GSTDetails) -> Decimal:
        """Taxable amount plus GST."""
        return details.taxable_amount + details.total_gst
