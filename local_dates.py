# local_dates.py
"""
Kalenderdatoer i lokal tid, uten UTC-konvertering.

  format_date_local(d)   -> "YYYY-MM-DD" fra d sin år/måned/dag
  parse_local_date(s)    -> datetime.date eller None
  today_local()          -> dagens dato i STEVNE_TZ (default Europe/Oslo)

A date picked in the browser and a date written by the generator must mean the
same calendar day for every user, so nothing here goes through an instant.
"""
import os
import re
from datetime import date, datetime
from typing import Optional

try:
    from zoneinfo import ZoneInfo
except Exception:
    ZoneInfo = None

DEFAULT_TZ_NAME = "Europe/Oslo"

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)", re.ASCII)


def _local_tz(tz_name: Optional[str] = None):
    name = tz_name or os.environ.get("STEVNE_TZ", DEFAULT_TZ_NAME)
    if ZoneInfo is None or not name:
        return None
    try:
        return ZoneInfo(name)
    except Exception:
        return None


def today_local(tz_name: Optional[str] = None) -> date:
    """Dagens dato i lokal kalender. Faller tilbake til systemets lokale dato."""
    tz = _local_tz(tz_name)
    if tz:
        return datetime.now(tz).date()
    return date.today()


def format_date_local(d) -> str:
    # datetime is a subclass of date; only the calendar fields are read
    return f"{d.year}-{d.month:02d}-{d.day:02d}"


def _lenient_int(part: str) -> Optional[int]:
    m = _INT_PREFIX.match(part or "")
    if not m:
        return None
    return int(m.group(1))


def parse_local_date(date_str) -> Optional[date]:
    """
    Parse "Y-M-D" into a date. Returns None when a component is missing,
    non-numeric or zero, or when the three numbers are not a real calendar day.
    """
    if not date_str or not isinstance(date_str, str):
        return None
    parts = date_str.split("-")
    if len(parts) < 3:
        return None
    y, m, d = (_lenient_int(p) for p in parts[:3])
    if not y or not m or not d:
        return None
    try:
        return date(y, m, d)
    except ValueError:
        return None
