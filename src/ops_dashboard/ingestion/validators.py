"""Cell validators: coerce raw spreadsheet cells into typed values.

Cells arrive from the Sheets API as ``None`` (missing trailing cell),
strings, numbers or booleans. Every validator resolves anything outside its
domain to a default instead of raising.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil import parser as date_parser

# Day zero of spreadsheet date-serials (Lotus/Excel/Sheets convention)
SERIAL_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)

# Fills components missing from partial textual dates deterministically;
# a string whose year changes with the default never named a year
_PARSE_DEFAULT = datetime(1900, 1, 1)
_ALT_YEAR_DEFAULT = datetime(1901, 1, 1)

# Leading decimal literal, as a lenient float reader would accept it
NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _is_number(cell: object) -> bool:
    return isinstance(cell, (int, float)) and not isinstance(cell, bool)


def to_text(cell: object) -> str:
    """Stringify and trim a cell. Missing cells become ``""``."""
    if cell is None:
        return ""
    if isinstance(cell, float) and cell.is_integer():
        # UNFORMATTED_VALUE returns 7 as 7.0 for numeric-looking identifiers
        return str(int(cell))
    return str(cell).strip()


def to_number(cell: object) -> float:
    """Parse a decimal, accepting a comma decimal separator. Defaults to 0."""
    if cell is None or isinstance(cell, bool):
        return 0.0
    if _is_number(cell):
        value = float(cell)
        return value if math.isfinite(value) else 0.0
    text = str(cell).strip().replace(",", ".", 1)
    m = NUMBER_PREFIX.match(text)
    if not m:
        return 0.0
    try:
        value = float(m.group(0))
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def serial_to_datetime(serial: float) -> datetime:
    """Decode a date-serial (days since 1899-12-30 UTC)."""
    return SERIAL_EPOCH + timedelta(days=serial)


def datetime_to_serial(value: datetime) -> float:
    """Encode a datetime as a date-serial. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - SERIAL_EPOCH) / timedelta(days=1)


def to_date(cell: object, dayfirst: bool = False) -> Optional[datetime]:
    """Parse a textual date or a positive date-serial into a UTC datetime.

    Returns None for anything else, including text that does not parse,
    text without a year (``"5"``, ``"may"``) and offset-aware text whose
    UTC value falls outside the datetime range.
    Naive textual dates are interpreted as UTC.
    """
    if isinstance(cell, str):
        text = cell.strip()
        if not text:
            return None
        try:
            parsed = date_parser.parse(text, dayfirst=dayfirst, default=_PARSE_DEFAULT)
            alt = date_parser.parse(text, dayfirst=dayfirst, default=_ALT_YEAR_DEFAULT)
        except (ValueError, OverflowError):
            return None
        if parsed.year != alt.year:
            return None
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        try:
            return parsed.astimezone(timezone.utc)
        except (OverflowError, ValueError):
            return None
    if _is_number(cell) and cell > 0:
        try:
            return serial_to_datetime(float(cell))
        except (OverflowError, ValueError):
            return None
    return None
