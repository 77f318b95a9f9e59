"""Utility functions for ledgerbook."""

from ledgerbook.utils.date_parser import parse_date
from ledgerbook.utils.amount_parser import parse_amount, round_currency

__all__ = ["parse_date", "parse_amount", "round_currency"]
