"""Helper utilities for mapping remote table rows."""

import re
from typing import Any, Iterable, List, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def split_csv(value: Any) -> List[str]:
    """Split a comma-separated var into trimmed, non-empty parts. Lists pass through."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    return [part.strip() for part in str(value).split(",") if part.strip()]


def join_csv(value: Any) -> str:
    """Inverse of split_csv for write payloads."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v).strip() for v in value if v is not None and str(v).strip())
    return str(value)


def or_default(value: Any, default: Any) -> Any:
    """Return value unless it is empty/falsy, mirroring how row vars are filled."""
    return value if value else default


def as_text(value: Any, default: Optional[str] = "") -> Optional[str]:
    """or_default for text vars; non-empty scalars like 5 or 3.5 become strings."""
    if not value or isinstance(value, bool):
        return default
    return value if isinstance(value, str) else str(value)


def parse_leading_int(value: Any) -> Optional[int]:
    """Integer prefix of a serial number ('12', '12abc' -> 12); None if absent."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else None


def unique_sorted(values: Iterable[str]) -> List[str]:
    """Distinct non-empty strings in ascending order."""
    return sorted({v for v in values if v})
