"""Static configuration tables for the accounting engine.

Tables are exposed as read-only mappings and handed to the calculators at
construction, so callers can substitute their own without patching globals.
"""

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class LedgerSettings:
    """Tolerances and defaults shared by the engine."""

    balance_tolerance: Decimal = Decimal("0.01")
    no_pan_tds_rate: Decimal = Decimal("20")
    cash_account_keyword: str = "cash"
    currency: str = "INR"
    large_entry_count: int = 20


DEFAULT_SETTINGS = LedgerSettings()


@dataclass(frozen=True)
class TDSSection:
    """Statutory TDS section with its rate (percent) and threshold."""

    description: str
    rate: Decimal
    threshold: Decimal


def _section(description: str, rate: str, threshold: int) -> TDSSection:
    return TDSSection(description=description, rate=Decimal(rate), threshold=Decimal(threshold))


TDS_SECTIONS: Mapping[str, TDSSection] = MappingProxyType(
    {
        "192": _section("Salary", "0", 250000),
        "192A": _section("Premature withdrawal from EPF", "10", 50000),
        "193": _section("Interest on securities", "10", 10000),
        "194": _section("Dividend", "10", 5000),
        "194A": _section("Interest other than on securities", "10", 40000),
        "194B": _section("Winnings from lottery or crossword puzzle", "30", 10000),
        "194C": _section("Payment to contractors", "1", 30000),
        "194D": _section("Insurance commission", "5", 15000),
        "194DA": _section("Payment in respect of life insurance policy", "5", 100000),
        "194EE": _section("Payment in respect of NSS deposits", "10", 2500),
        "194F": _section("Repurchase of units by mutual fund", "20", 0),
        "194G": _section("Commission on sale of lottery tickets", "5", 15000),
        "194H": _section("Commission or brokerage", "5", 15000),
        "194I": _section("Rent", "10", 240000),
        "194IA": _section("Transfer of immovable property", "1", 5000000),
        "194IB": _section("Rent by certain individuals or HUF", "5", 50000),
        "194IC": _section("Payment under joint development agreement", "10", 0),
        "194J": _section("Professional/technical services", "10", 30000),
        "194K": _section("Income in respect of units", "10", 0),
        "194LA": _section("Compensation on acquisition of immovable property", "10", 250000),
        "194M": _section("Payment by certain individuals or HUF", "5", 5000000),
        "194N": _section("Cash withdrawal", "2", 10000000),
        "194O": _section("Payment by e-commerce operator", "1", 500000),
        "194Q": _section("Purchase of goods", "0.1", 5000000),
    }
)

COMMON_TDS_SECTIONS: tuple[str, ...] = ("194C", "194J", "194I", "194H", "194A")

# Two-digit GST state codes (97 is "Other Territory").
GST_STATE_CODES: Mapping[str, str] = MappingProxyType(
    {
        "01": "Jammu and Kashmir",
        "02": "Himachal Pradesh",
        "03": "Punjab",
        "04": "Chandigarh",
        "05": "Uttarakhand",
        "06": "Haryana",
        "07": "Delhi",
        "08": "Rajasthan",
        "09": "Uttar Pradesh",
        "10": "Bihar",
        "11": "Sikkim",
        "12": "Arunachal Pradesh",
        "13": "Nagaland",
        "14": "Manipur",
        "15": "Mizoram",
        "16": "Tripura",
        "17": "Meghalaya",
        "18": "Assam",
        "19": "West Bengal",
        "20": "Jharkhand",
        "21": "Odisha",
        "22": "Chhattisgarh",
        "23": "Madhya Pradesh",
        "24": "Gujarat",
        "25": "Daman and Diu",
        "26": "Dadra and Nagar Haveli",
        "27": "Maharashtra",
        "28": "Andhra Pradesh (old)",
        "29": "Karnataka",
        "30": "Goa",
        "31": "Lakshadweep",
        "32": "Kerala",
        "33": "Tamil Nadu",
        "34": "Puducherry",
        "35": "Andaman and Nicobar Islands",
        "36": "Telangana",
        "37": "Andhra Pradesh",
        "38": "Ladakh",
        "97": "Other Territory",
    }
)

FIXED_ASSET_KEYWORDS: tuple[str, ...] = (
    "equipment",
    "machinery",
    "building",
    "furniture",
    "vehicle",
    "fixed asset",
    "plant",
    "computer",
)

LONG_TERM_LIABILITY_KEYWORDS: tuple[str, ...] = (
    "loan",
    "long term",
    "long-term",
    "debenture",
    "mortgage",
)
