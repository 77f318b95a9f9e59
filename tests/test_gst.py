"""Tests for GST calculation."""

import pytest
from decimal import Decimal

from ledgerbook.domain.entities import GSTType, LineItem
from ledgerbook.domain.errors import InvalidStateCodeError, ValidationError
from ledgerbook.domain.gst import GSTCalculator


@pytest.fixture
def calculator():
    return GSTCalculator()


class TestCalculateGST:
    """Tests for the CGST/SGST and IGST split."""

    def test_intra_state_splits_evenly(self, calculator):
        """Same state charges half the rate as CGST and half as SGST."""
        details = calculator.calculate_gst(Decimal("10000"), Decimal("18"), "27", "27")

        assert details.gst_type == GSTType.CGST_SGST
        assert details.cgst_amount == Decimal("900.00")
        assert details.sgst_amount == Decimal("900.00")
        assert details.igst_amount is None
        assert details.total_gst == Decimal("1800.00")

    def test_inter_state_charges_igst(self, calculator):
        """Different states charge the full rate as IGST."""
        details = calculator.calculate_gst(Decimal("10000"), Decimal("18"), "27", "29")

        assert details.gst_type == GSTType.IGST
        assert details.igst_amount == Decimal("1800.00")
        assert details.total_gst == Decimal("1800.00")
        assert details.cgst_amount is None
        assert details.sgst_amount is None

    def test_components_always_sum_to_total(self, calculator):
        """CGST + SGST equals the total even when halves need rounding."""
        details = calculator.calculate_gst(Decimal("333.33"), Decimal("5"), "07", "07")

        assert details.cgst_amount == details.sgst_amount
        assert details.cgst_amount + details.sgst_amount == details.total_gst

    def test_rounds_half_up(self, calculator):
        """Components are rounded to two places, half away from zero."""
        details = calculator.calculate_gst(Decimal("0.50"), Decimal("5"), "27", "29")
        # 0.50 * 5% = 0.025
        assert details.igst_amount == Decimal("0.03")

    @pytest.mark.parametrize("source,destination", [(None, "27"), ("27", None), ("", "")])
    def test_missing_state_defaults_to_igst(self, calculator, source, destination):
        """Supplies with an unknown place of supply are treated as inter-state."""
        details = calculator.calculate_gst(Decimal("1000"), Decimal("12"), source, destination)

        assert details.gst_type == GSTType.IGST
        assert details.igst_amount == Decimal("120.00")

    def test_single_digit_state_is_padded(self, calculator):
        details = calculator.calculate_gst(Decimal("1000"), Decimal("18"), "7", "07")
        assert details.gst_type == GSTType.CGST_SGST

    def test_invalid_state_code_raises(self, calculator):
        with pytest.raises(InvalidStateCodeError, match="99"):
            calculator.calculate_gst(Decimal("1000"), Decimal("18"), "99", "27")

    def test_negative_amount_raises(self, calculator):
        with pytest.raises(ValidationError):
            calculator.calculate_gst(Decimal("-1"), Decimal("18"), "27", "27")

    @pytest.mark.parametrize("rate", ["-1", "101"])
    def test_rate_out_of_range_raises(self, calculator, rate):
        with pytest.raises(ValidationError):
            calculator.calculate_gst(Decimal("100"), Decimal(rate), "27", "27")

    def test_accepts_floats_without_binary_noise(self, calculator):
        details = calculator.calculate_gst(100.10, 18, "27", "29")
        assert details.taxable_amount == Decimal("100.1")
        assert details.igst_amount == Decimal("18.02")

    def test_zero_rate(self, calculator):
        details = calculator.calculate_gst(Decimal("500"), Decimal("0"), "27", "27")
        assert details.total_gst == Decimal("0.00")

    def test_repeated_calls_give_identical_details(self, calculator):
        first = calculator.calculate_gst(Decimal("12345.67"), Decimal("18"), "27", "27")
        second = calculator.calculate_gst(Decimal("12345.67"), Decimal("18"), "27", "27")

        assert first == second


class TestInvoiceHelpers:
    """Tests for invoice-level GST helpers."""

    def test_average_rate_is_unweighted(self, calculator):
        """A small 5% line weighs as much as a large 18% line."""
        items = [
            LineItem("Cement", Decimal("100000"), Decimal("18")),
            LineItem("Delivery", Decimal("100"), Decimal("5")),
        ]
        assert calculator.average_gst_rate(items) == Decimal("11.5")

    def test_average_rate_counts_missing_rate_as_zero(self, calculator):
        items = [
            LineItem("Taxed", Decimal("100"), Decimal("18")),
            LineItem("Exempt", Decimal("100")),
        ]
        assert calculator.average_gst_rate(items) == Decimal("9")

    def test_average_rate_of_no_items_is_zero(self, calculator):
        assert calculator.average_gst_rate([]) == Decimal("0")

    def test_invoice_gst_uses_subtotal_and_average_rate(self, calculator):
        items = [
            LineItem("A", Decimal("600"), Decimal("18")),
            LineItem("B", Decimal("400"), Decimal("12")),
        ]
        details = calculator.calculate_invoice_gst(items, "27", "27")

        assert details.taxable_amount == Decimal("1000")
        assert details.gst_rate == Decimal("15")
        assert details.total_gst == Decimal("150.00")

    def test_grand_total(self, calculator):
        details = calculator.calculate_gst(Decimal("10000"), Decimal("18"), "27", "29")
        assert calculator.grand_total(details) == Decimal("11800.00")
