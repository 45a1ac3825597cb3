"""
Date Normalization
==================

Turns whatever a provider put in a date column into ISO `YYYY-MM-DD` or None.

Parsing order:
1. ISO datetime ("2025-11-19T10:00:00Z") -> date part
2. ISO date as-is
3. Numeric D-M-Y with '-', '/' or '.' separators. Always day first.
4. Textual "7th November 2025" / "07 Nov 2025"
5. dateutil fallback (day first)

A value that matches a stage but is not a real calendar date gives None;
later stages are not tried. Nothing here raises.
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Optional

from dateutil import parser as dtp

from .base import is_null_token

logger = logging.getLogger(__name__)

FALLBACK_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

MONTHS = {
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11, "december": 12,
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "jun": 6, "jul": 7, "aug": 8,
    "sep": 9, "sept": 9, "oct": 10, "nov": 11, "dec": 12,
}

ISO_DATETIME = re.compile(r"^(\d{4})-(\d{2})-(\d{2})[T ]\d{1,2}:\d{2}")
ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
NUMERIC_DMY = re.compile(r"^(\d{1,2})[-/.](\d{1,2})[-/.](\d{4})(?!\d)")
TEXTUAL_DMY = re.compile(
    r"^(\d{1,2})(?:st|nd|rd|th)?\s+([A-Za-z]{3,9})\.?,?\s+(\d{4})(?!\d)",
    re.IGNORECASE,
)


def _iso(year: int, month: int, day: int) -> Optional[str]:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def normalize_date(value: Any) -> Optional[str]:
    """
    Normalize a raw date value to ISO `YYYY-MM-DD`.

    Args:
        value: String, date/datetime, or anything else a provider sent

    Returns:
        ISO date string, or None when the value is empty or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None

    text = " ".join(str(value).split())
    if is_null_token(text):
        return None

    match = ISO_DATETIME.match(text)
    if match:
        return _iso(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    match = ISO_DATE.match(text)
    if match:
        return _iso(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    match = NUMERIC_DMY.match(text)
    if match:
        return _iso(int(match.group(3)), int(match.group(2)), int(match.group(1)))

    match = TEXTUAL_DMY.match(text)
    if match:
        month = MONTHS.get(match.group(2).lower())
        if month:
            return _iso(int(match.group(3)), month, int(match.group(1)))

    return _fallback(text)


def _fallback(text: str) -> Optional[str]:
    if not re.search(r"\d", text):
        return None
    # dateutil fills missing parts from `default`; two defaults that differ in
    # every part must agree, or the text did not carry a full date
    try:
        first = dtp.parse(text, dayfirst=True, default=FALLBACK_DEFAULTS[0]).date()
        second = dtp.parse(text, dayfirst=True, default=FALLBACK_DEFAULTS[1]).date()
    except (ValueError, OverflowError, TypeError) as e:
        logger.debug(f"Unparseable date {text!r}: {e}")
        return None
    if first != second:
        logger.debug(f"Incomplete date {text!r}")
        return None
    return first.isoformat()
