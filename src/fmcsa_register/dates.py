"""
Date codec for the FMCSA register.

The register endpoint is keyed by a compact ``DD-MMM-YY`` token
(e.g. ``05-JAN-24``); decision dates inside the page appear as slash
separated tokens. Month abbreviations are fixed English uppercase and do
not depend on the process locale.
"""

from datetime import date
from typing import Optional

from fmcsa_register.errors import MalformedDateError


MONTHS = ('JAN', 'FEB', 'MAR', 'APR', 'MAY', 'JUN',
          'JUL', 'AUG', 'SEP', 'OCT', 'NOV', 'DEC')


def encode_request_date(value: date) -> str:
    """
    Format a calendar date as the register request token.

    Args:
        value: Any calendar date (datetime instances are accepted too)

    Returns:
        Token in ``DD-MMM-YY`` format

    Example:
        >>> encode_request_date(date(2024, 1, 5))
        '05-JAN-24'
    """
    return f"{value.day:02d}-{MONTHS[value.month - 1]}-{value.year % 100:02d}"


def decode_request_date(token: str) -> date:
    """
    Parse a ``DD-MMM-YY`` request token back into a calendar date.

    Two-digit years are read in the 2000s, matching the register's range.

    Raises:
        MalformedDateError: If the token is not ``DD-MMM-YY`` or names an
            impossible date (e.g. ``31-FEB-24``)

    Example:
        >>> decode_request_date('05-JAN-24')
        datetime.date(2024, 1, 5)
    """
    expected = "DD-MMM-YY"
    parts = token.strip().split('-') if token else []
    if len(parts) != 3:
        raise MalformedDateError(token, expected)

    day, month, year = parts
    if not (len(day) == 2 and day.isdigit() and len(year) == 2 and year.isdigit()):
        raise MalformedDateError(token, expected)

    month = month.upper()
    if month not in MONTHS:
        raise MalformedDateError(token, expected)

    try:
        return date(2000 + int(year), MONTHS.index(month) + 1, int(day))
    except ValueError as e:
        raise MalformedDateError(token, expected) from e


def today_request_date(today: Optional[date] = None) -> str:
    """Request token for today (or the given day)."""
    return encode_request_date(today or date.today())


def normalize_display_date(token: str) -> str:
    """
    Re-render a ``DD/MM/YY`` token as ``MM/DD/YYYY`` in the 2000s.

    Raises:
        MalformedDateError: If the token does not split into exactly three
            slash-separated parts

    Example:
        >>> normalize_display_date('15/01/24')
        '01/15/2024'
    """
    parts = token.split('/') if token else []
    if len(parts) != 3:
        raise MalformedDateError(token, "DD/MM/YY")

    day, month, year = parts
    return f"{month}/{day}/20{year}"


def display_date_or_raw(token: str) -> str:
    """
    Normalize a display date, falling back to the raw token.

    Example:
        >>> display_date_or_raw('15/01/24')
        '01/15/2024'
        >>> display_date_or_raw('N/A')
        'N/A'
    """
    try:
        return normalize_display_date(token)
    except MalformedDateError:
        return token
