"""
Detection and re-rendering of date literal styles found in SQL text.

A literal such as ``05-JAN-24`` or ``5-january-2024`` is reduced to a
signature recording how its month token is written. A new ISO date can then
be written back in the same style.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from constants import SHORT_MONTHS, FULL_MONTHS, DATE_SEPARATOR, ISO_DATE_FORMAT


_ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
_DATE_LITERAL_RE = re.compile(r'^\d{1,2}-[A-Za-z]{3,9}-(?:\d{2}|\d{4})$')

_MONTH_LOOKUP = {name.lower(): i for i, name in enumerate(SHORT_MONTHS)}
_MONTH_LOOKUP.update({name.lower(): i for i, name in enumerate(FULL_MONTHS)})


@dataclass
class MonthFormat:
    """How the month token of a date literal is written"""
    is_upper_case: bool
    is_lower_case: bool
    is_full_name: bool
    original_value: str


@dataclass
class DateFormatSignature:
    """Observed shape of a day-month-year date literal"""
    day: str
    month: str
    year: str
    month_format: MonthFormat


def detect_format(literal: str) -> Optional[DateFormatSignature]:
    """Detect the style of a date literal, or None if it isn't day-month-year"""
    parts = literal.split(DATE_SEPARATOR)
    if len(parts) != 3:
        return None

    day, month, year = parts
    # Numeric months (ISO and friends) carry no style to preserve
    if not month.isalpha():
        return None

    return DateFormatSignature(
        day=day,
        month=month,
        year=year,
        month_format=MonthFormat(
            is_upper_case=month == month.upper(),
            is_lower_case=month == month.lower(),
            is_full_name=len(month) > 3,
            original_value=month,
        ),
    )


def parse_iso(value: str) -> Optional[date]:
    """Parse a strict YYYY-MM-DD string"""
    value = value.strip()
    if not _ISO_DATE_RE.match(value):
        return None
    try:
        return datetime.strptime(value, ISO_DATE_FORMAT).date()
    except ValueError:
        return None


def render(iso_date: str, signature: DateFormatSignature) -> str:
    """Render an ISO date in the style recorded by ``signature``.

    Raises ValueError if ``iso_date`` is not a valid YYYY-MM-DD date.
    """
    parsed = parse_iso(iso_date)
    if parsed is None:
        raise ValueError(f"Not an ISO date: {iso_date!r}")

    if len(signature.day) == 1:
        day = str(parsed.day)
    else:
        day = f"{parsed.day:02d}"

    if len(signature.year) == 4:
        year = f"{parsed.year:04d}"
    else:
        year = f"{parsed.year:04d}"[-2:]

    month_format = signature.month_format
    table = FULL_MONTHS if month_format.is_full_name else SHORT_MONTHS
    month = table[parsed.month - 1]
    if month_format.is_lower_case:
        month = month.lower()
    elif not month_format.is_upper_case:
        month = month.title()

    return DATE_SEPARATOR.join([day, month, year])


def month_index(token: str) -> Optional[int]:
    """Zero-based month index for an abbreviated or full month name"""
    return _MONTH_LOOKUP.get(token.lower())


def is_date_literal(value: str) -> bool:
    """True if value looks like a day-monthname-year literal"""
    if not _DATE_LITERAL_RE.match(value.strip()):
        return False
    return month_index(value.strip().split(DATE_SEPARATOR)[1]) is not None


def to_iso(literal: str) -> Optional[str]:
    """Convert a date literal to YYYY-MM-DD, or None when it can't be read"""
    literal = literal.strip()
    parsed = parse_iso(literal)
    if parsed is not None:
        return parsed.isoformat()

    if not is_date_literal(literal):
        return None

    day, month, year = literal.split(DATE_SEPARATOR)
    full_year = int('20' + year) if len(year) == 2 else int(year)
    try:
        return date(full_year, month_index(month) + 1, int(day)).isoformat()
    except ValueError:
        return None
