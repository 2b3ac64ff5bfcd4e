"""
Raw cell value coercion.

Every function here is total: it returns None when a value cannot be
converted and never raises. Spreadsheet parsers hand over strings, ints,
floats, booleans and datetimes; CSV readers hand over strings only.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional

import pandas as pd
from openpyxl.utils.datetime import from_excel


_CURRENCY_CHARS = re.compile(r"[$£€,\s]")
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_DAY_FIRST_DATE = re.compile(
    r"^(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})"
    r"(?:[ T](\d{1,2}):(\d{2})(?::(\d{2}))?)?$"
)

_TRUE_STRINGS = {"true", "yes", "y", "1"}
_FALSE_STRINGS = {"false", "no", "n", "0"}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def to_text(value: Any) -> Optional[str]:
    """Convert a cell to stripped text. Integral floats lose their `.0` (job numbers)."""
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat()
    text = str(value).strip()
    return text or None


def to_number(value: Any) -> Optional[float]:
    """Parse currency/locale formatted numbers like "$1,234.50" into a finite float."""
    if _is_blank(value) or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    cleaned = _CURRENCY_CHARS.sub("", str(value))
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None

    try:
        number = float(match.group(0))
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def to_int(value: Any) -> Optional[int]:
    number = to_number(value)
    if number is None:
        return None
    return int(round(number))


def to_boolean(value: Any) -> Optional[bool]:
    """Recognize native booleans, 1/0 and yes/no style strings."""
    if isinstance(value, bool):
        return value
    if _is_blank(value):
        return None
    if isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False
        return None

    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    return None


def _format_utc(moment: datetime) -> str:
    """Render a datetime as a UTC ISO-8601 instant with millisecond precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return moment.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def _from_serial(serial: float) -> Optional[str]:
    """Convert a spreadsheet date serial (1900 epoch) into an ISO instant."""
    if not math.isfinite(serial) or serial < 0:
        return None
    try:
        moment = from_excel(serial)
    except (ValueError, OverflowError, TypeError):
        return None
    if moment is None:
        return None
    if isinstance(moment, time):
        # Serials below 1 are pure times of day.
        moment = datetime.combine(date(1899, 12, 30), moment)
    # Serials carry float noise; spreadsheets resolve to the second.
    moment = (moment + timedelta(microseconds=500_000)).replace(microsecond=0)
    return _format_utc(moment)


def _from_day_first(text: str) -> Optional[str]:
    match = _DAY_FIRST_DATE.match(text)
    if not match:
        return None

    day, month, year, hour, minute, second = match.groups()
    full_year = int(year) + 2000 if len(year) == 2 else int(year)
    try:
        moment = datetime(
            full_year,
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
        )
    except ValueError:
        return None
    return _format_utc(moment)


def _from_general(text: str, dayfirst: bool = False) -> Optional[str]:
    try:
        parsed = pd.to_datetime(text, utc=True, dayfirst=dayfirst)
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed is None or pd.isna(parsed):
        return None
    return _format_utc(parsed.to_pydatetime())


def to_date(value: Any) -> Optional[str]:
    """
    Convert a cell into a UTC ISO-8601 string.

    Handles, in order:
    - native datetime/date cells
    - spreadsheet numeric date serials
    - day-first text: DD/MM/YYYY[ HH:MM[:SS]] (2-digit years read as 20YY),
      other slashed forms are also read day-first
    - anything else a general date parser accepts

    Naive values are taken as UTC.
    """
    if _is_blank(value) or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _format_utc(value)
    if isinstance(value, date):
        return _format_utc(datetime.combine(value, time()))

    if isinstance(value, (int, float)):
        return _from_serial(float(value))

    text = str(value).strip()
    if "/" in text:
        parsed = _from_day_first(text)
        if parsed is not None:
            return parsed
        # Slashed variants (AM/PM, fractional seconds) stay day-first.
        return _from_general(text, dayfirst=True)
    return _from_general(text)
