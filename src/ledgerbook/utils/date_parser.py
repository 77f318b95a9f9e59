"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Indian financial year runs April to March.
FISCAL_YEAR_START_MONTH = 4


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "15 Jan 2024") and the relative
    forms "today", "yesterday", "this month", "last month", "this year",
    "last year".

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        # Indian documents write dates day-first
        dt = date_parser.parse(date_str, dayfirst="/" in date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def fiscal_year_start(value: date) -> date:
    """Return the first day of the financial year containing ``value``."""
    year = value.year if value.month >= FISCAL_YEAR_START_MONTH else value.year - 1
    return date(year, FISCAL_YEAR_START_MONTH, 1)


def fiscal_year_label(value: date) -> str:
    """Return the financial year label, e.g. "2024-25" for 15 Jan 2025."""
    start = fiscal_year_start(value)
    return f"{start.year}-{(start.year + 1) % 100:02d}"


def get_date_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Get start and end dates for a named reporting period.

    Args:
        period: this-month, last-month, this-quarter, this-fy or last-fy
        today: Reference date (defaults to today)

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "this-quarter":
        # Quarters follow the financial year: Apr-Jun, Jul-Sep, Oct-Dec, Jan-Mar
        months_into_fy = (today.month - FISCAL_YEAR_START_MONTH) % 12
        start_date = (today - relativedelta(months=months_into_fy % 3)).replace(day=1)
        return (start_date, today)

    elif period == "this-fy":
        return (fiscal_year_start(today), today)

    elif period == "last-fy":
        current_start = fiscal_year_start(today)
        return (current_start - relativedelta(years=1), current_start - timedelta(days=1))

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: "
        "this-month, last-month, this-quarter, this-fy, last-fy"
    )
