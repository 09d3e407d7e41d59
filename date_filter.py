# date_filter.py
"""
Datofilter for kommende stevner.

start er inkludert fra starten av dagen, end er inkludert ut dagen.
Tom streng eller None betyr "ingen grense" på den siden.
"""
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Dict, Iterable, List, Optional

from local_dates import format_date_local, parse_local_date


def filter_active(start: Optional[str] = "", end: Optional[str] = "") -> bool:
    return bool(start) or bool(end)


def is_event_within_range(date_str: Optional[str], start: Optional[str] = "", end: Optional[str] = "") -> bool:
    """
    True if the event date falls inside [start, end].

    With no bounds every event matches, even one without a date. With an
    active filter, a missing or unparseable date (or bound) never matches.
    """
    if not start and not end:
        return True
    if not date_str:
        return False
    d = parse_local_date(date_str)
    if d is None:
        return False
    if start:
        s = parse_local_date(start)
        if s is None or d < s:
            return False
    if end:
        e = parse_local_date(end)
        if e is None:
            return False
        end_of_day = datetime.combine(e, time.max)
        if datetime.combine(d, time.min) > end_of_day:
            return False
    return True


def _stevner(range_record: Dict[str, Any]) -> List[Dict[str, Any]]:
    stevner = (range_record or {}).get("stevner")
    if not isinstance(stevner, list):
        return []
    return [ev for ev in stevner if isinstance(ev, dict)]


def is_range_visible(range_record: Dict[str, Any], start: Optional[str] = "", end: Optional[str] = "") -> bool:
    if not filter_active(start, end):
        return True
    return any(is_event_within_range(ev.get("date"), start, end) for ev in _stevner(range_record))


def visible_stevner(range_record: Dict[str, Any], start: Optional[str] = "", end: Optional[str] = "") -> List[Dict[str, Any]]:
    """Events to show for a range, in their original order."""
    stevner = _stevner(range_record)
    if not filter_active(start, end):
        return list(stevner)
    return [ev for ev in stevner if is_event_within_range(ev.get("date"), start, end)]


def visible_ranges(ranges: Iterable[Dict[str, Any]], start: Optional[str] = "", end: Optional[str] = "") -> List[Dict[str, Any]]:
    ranges = list(ranges or [])
    if not filter_active(start, end):
        return ranges
    return [r for r in ranges if is_range_visible(r, start, end)]


def _as_bound(value) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return format_date_local(value)
    return str(value).strip()


@dataclass(frozen=True)
class DateRange:
    """The user's selected interval, as canonical YYYY-MM-DD strings."""
    start: str = ""
    end: str = ""

    @classmethod
    def from_args(cls, start=None, end=None) -> "DateRange":
        return cls(start=_as_bound(start), end=_as_bound(end))

    @classmethod
    def cleared(cls) -> "DateRange":
        return cls()

    @property
    def active(self) -> bool:
        return filter_active(self.start, self.end)

    def includes(self, date_str: Optional[str]) -> bool:
        return is_event_within_range(date_str, self.start, self.end)

    def ranges(self, ranges: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return visible_ranges(ranges, self.start, self.end)

    def stevner(self, range_record: Dict[str, Any]) -> List[Dict[str, Any]]:
        return visible_stevner(range_record, self.start, self.end)
