"""
Shared utilities for VITAE.

Common functionality used across contexts:
- Logging setup
- Text processing (filenames, markup)
- Date formatting
- PDF inspection
"""

from vitae.utils.timestamp import format_month_year, now, today

__all__ = ["format_month_year", "now", "today"]
