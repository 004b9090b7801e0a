"""Timestamp and date formatting utilities."""

from datetime import datetime
from typing import Optional

# Input layouts accepted for résumé dates, tried in order
DATE_INPUT_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m",
    "%Y/%m/%d",
    "%Y/%m",
    "%m/%Y",
    "%m/%d/%Y",
    "%b %Y",
    "%B %Y",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%dT%H:%M:%SZ",
]


def now() -> str:
    """Current local time as a compact sortable stamp (e.g., 20261019_141502)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def today() -> str:
    """Current local date as YYYY-MM-DD."""
    return datetime.now().strftime("%Y-%m-%d")


def parse_resume_date(value: str) -> Optional[datetime]:
    """
    Parse a résumé date string, or None if no known layout matches.

    Year-only strings are not parsed here since they carry no month.
    """
    text = value.strip()
    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_month_year(value: Optional[str]) -> str:
    """
    Format a résumé date at month/year granularity (e.g., "Jan 2023").

    Args:
        value: Date string as entered in the editor (ISO, month/year, etc.)

    Returns:
        Formatted date. Year-only input is returned as the year, empty input as "",
        and anything unparseable verbatim.

    Examples:
        format_month_year("2023-01-15")  # "Jan 2023"
        format_month_year("2023-01")     # "Jan 2023"
        format_month_year("2019")        # "2019"
        format_month_year("Summer '21")  # "Summer '21"
    """
    if not value:
        return ""

    text = value.strip()
    if len(text) == 4 and text.isdigit():
        return text

    parsed = parse_resume_date(text)
    if parsed is None:
        return value

    return parsed.strftime("%b %Y")


def format_date_range(
    start: Optional[str], end: Optional[str] = None, current: bool = False
) -> str:
    """
    Format a start/end pair as "Jan 2020 - Mar 2023".

    A current position always ends in "Present", whatever end date was entered.
    Missing parts are dropped rather than rendered as dangling separators.
    """
    start_text = format_month_year(start)
    end_text = "Present" if current else format_month_year(end)

    if start_text and end_text:
        return f"{start_text} - {end_text}"
    return start_text or end_text
