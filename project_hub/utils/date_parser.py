"""Resolve row timestamps (ISO text, free text, epoch seconds/millis) to datetimes."""

import math
import re
from datetime import date, datetime, time, timezone, tzinfo
from enum import Enum
from typing import NamedTuple, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

from config import DATE_FILTER_TIMEZONE

# Numbers below this are epoch seconds, everything else epoch milliseconds
EPOCH_SECONDS_THRESHOLD = 10_000_000_000

RawDateValue = Union[str, int, float, None]

_ISO_PREFIX = re.compile(r"^[+-]?\d{4}(?:-\d{2}|$)")

# Fills fields missing from free text: "March 2024" resolves to March 1
_PARSE_DEFAULT = datetime(1970, 1, 1)


class DateKind(str, Enum):
    """Encoding a raw timestamp arrived in."""

    ISO = "iso"
    TEXT = "text"
    SECONDS = "seconds"
    MILLIS = "millis"


class DateSource(NamedTuple):
    """A raw timestamp tagged with its encoding."""

    kind: DateKind
    value: Union[str, float]


def filter_timezone(name: Optional[str] = None) -> tzinfo:
    """Timezone used for day boundaries and for naive timestamps."""
    name = name or DATE_FILTER_TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def classify_date_value(value: RawDateValue) -> Optional[DateSource]:
    """
    Tag a raw timestamp with its encoding.
    Returns None for absent values (None, blank text, booleans, NaN/inf).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        kind = DateKind.SECONDS if value < EPOCH_SECONDS_THRESHOLD else DateKind.MILLIS
        return DateSource(kind, value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        kind = DateKind.ISO if _ISO_PREFIX.match(text) else DateKind.TEXT
        return DateSource(kind, text)
    return None


def resolve_date_source(source: Optional[DateSource], tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Turn a tagged timestamp into an aware datetime in `tz`, or None if invalid."""
    if source is None:
        return None
    tz = tz or filter_timezone()

    if source.kind in (DateKind.SECONDS, DateKind.MILLIS):
        seconds = source.value if source.kind is DateKind.SECONDS else source.value / 1000
        try:
            return datetime.fromtimestamp(seconds, tz)
        except (OverflowError, OSError, ValueError):
            return None

    parsed = None
    if source.kind is DateKind.ISO:
        parsed = _parse_iso(source.value)
    if parsed is None:
        parsed = _parse_lenient(source.value)
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)


def parse_date_value(value: RawDateValue, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse any supported timestamp encoding. Never raises."""
    return resolve_date_source(classify_date_value(value), tz)


def day_bounds(start: date, end: Optional[date] = None, tz: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    """[start-of-day(start), end-of-day(end or start)] in `tz`."""
    tz = tz or filter_timezone()
    lower = datetime.combine(start, time.min, tzinfo=tz)
    upper = datetime.combine(end or start, time.max, tzinfo=tz)
    return (lower, upper)


def format_display_date(value: Union[datetime, RawDateValue], tz: Optional[tzinfo] = None) -> str:
    """Card label for a timestamp, e.g. 'Mar 15, 2024'. Resolved datetimes are formatted as-is."""
    if isinstance(value, datetime):
        return value.strftime("%b %d, %Y")
    if classify_date_value(value) is None:
        return "No date"
    parsed = parse_date_value(value, tz)
    if parsed is None:
        return "Invalid date"
    return parsed.strftime("%b %d, %Y")


def _parse_iso(text: str) -> Optional[datetime]:
    """Strict ISO-8601, including reduced forms like "2024-03" and "2024"."""
    try:
        return date_parser.isoparse(text)
    except (ValueError, OverflowError):
        return None


def _parse_lenient(text: str) -> Optional[datetime]:
    try:
        return date_parser.parse(text, default=_PARSE_DEFAULT)
    except (ValueError, OverflowError):
        return None
