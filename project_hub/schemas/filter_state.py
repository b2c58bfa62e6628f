"""
Filter state for the marketplace view.

Immutable: every transition returns a new FilterState, so the same value can be
fed to the pure filter functions and compared between reruns.
`None` for category/industry means "all"; it cannot collide with a real value.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FilterDimension(str, Enum):
    """Independently clearable filter axes."""

    SEARCH = "search"
    CATEGORY = "category"
    INDUSTRY = "industry"
    DATE_RANGE = "date_range"


def _as_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return value  # left for field validation to reject
    return value


class DateRange(BaseModel):
    """Calendar-day interval; `end` omitted means the single day `start`."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: Optional[date] = None

    @model_validator(mode="before")
    @classmethod
    def _order_bounds(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = {k: _as_date(v) for k, v in data.items()}
        start, end = data.get("start"), data.get("end")
        if isinstance(start, date) and isinstance(end, date) and end < start:
            data["start"], data["end"] = end, start
        return data

    @classmethod
    def from_selection(cls, value: Any) -> Optional["DateRange"]:
        """Build from a date picker value: None, a date, or a 0/1/2-tuple of dates."""
        if value is None:
            return None
        if isinstance(value, date):
            return cls(start=value)
        picked: List[date] = [v for v in value if v is not None]
        if not picked:
            return None
        return cls(start=picked[0], end=picked[1] if len(picked) > 1 else None)


class FilterState(BaseModel):
    """User-controlled filter dimensions. Defaults match everything."""

    model_config = ConfigDict(frozen=True)

    search_term: str = Field(default="", description="Case-insensitive title/description substring")
    category: Optional[str] = Field(default=None, description="Exact category; None = all")
    industry: Optional[str] = Field(default=None, description="Industry tag membership; None = all")
    date_range: Optional[DateRange] = Field(default=None, description="Inclusive day range on updated_at")

    def with_search(self, term: Optional[str]) -> "FilterState":
        return self.model_copy(update={"search_term": term or ""})

    def with_category(self, category: Optional[str]) -> "FilterState":
        return self.model_copy(update={"category": category or None})

    def with_industry(self, industry: Optional[str]) -> "FilterState":
        return self.model_copy(update={"industry": industry or None})

    def with_date_range(self, date_range: Optional[DateRange]) -> "FilterState":
        return self.model_copy(update={"date_range": date_range})

    def clear(self, dimension: FilterDimension) -> "FilterState":
        """Reset one dimension to its default."""
        field_name = {
            FilterDimension.SEARCH: "search_term",
            FilterDimension.CATEGORY: "category",
            FilterDimension.INDUSTRY: "industry",
            FilterDimension.DATE_RANGE: "date_range",
        }[FilterDimension(dimension)]
        return self.model_copy(update={field_name: FilterState.model_fields[field_name].default})

    def clear_all(self) -> "FilterState":
        return FilterState()

    @property
    def is_default(self) -> bool:
        return self == FilterState()
