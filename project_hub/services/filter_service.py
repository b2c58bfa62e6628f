"""Filter projects by search text, category, industry and date range. No UI logic; used by app layer."""

from datetime import tzinfo
from typing import List, NamedTuple, Optional

from schemas.filter_state import DateRange, FilterState
from schemas.project import Project
from utils.date_parser import day_bounds
from utils.helpers import unique_sorted


class Vocabulary(NamedTuple):
    """Selectable values for the categorical filters."""

    categories: List[str]
    industries: List[str]


def matches_date_range(
    project: Project,
    date_range: Optional[DateRange],
    tz: Optional[tzinfo] = None,
) -> bool:
    """
    True if project.updated_at falls within the inclusive day range.
    No range means pass-through; a project without a usable date never matches a range.
    """
    if date_range is None:
        return True
    if project.updated_at is None:
        return False
    lower, upper = day_bounds(date_range.start, date_range.end, tz)
    return lower <= project.updated_at <= upper


def matches_search(project: Project, search_term: str) -> bool:
    """Case-insensitive substring match on title or description. Blank term matches all."""
    term = (search_term or "").strip().casefold()
    if not term:
        return True
    return term in (project.title or "").casefold() or term in (project.description or "").casefold()


def matches_category(project: Project, category: Optional[str]) -> bool:
    """Exact, case-sensitive category match. None matches all."""
    return category is None or project.category == category


def matches_industry(project: Project, industry: Optional[str]) -> bool:
    """Industry tag membership. None matches all."""
    return industry is None or industry in (project.industry or [])


def filter_by_date(
    projects: List[Project],
    date_range: Optional[DateRange],
    tz: Optional[tzinfo] = None,
) -> List[Project]:
    """Filter projects by date range. Does not mutate the input list."""
    if date_range is None:
        return list(projects)
    lower, upper = day_bounds(date_range.start, date_range.end, tz)
    return [p for p in projects if p.updated_at is not None and lower <= p.updated_at <= upper]


def filter_by_attributes(projects: List[Project], state: FilterState) -> List[Project]:
    """Apply search, category and industry predicates (AND). Does not mutate the input list."""
    return [
        p for p in projects
        if matches_search(p, state.search_term)
        and matches_category(p, state.category)
        and matches_industry(p, state.industry)
    ]


def apply_filters(
    projects: List[Project],
    state: FilterState,
    tz: Optional[tzinfo] = None,
) -> List[Project]:
    """
    Full filter pipeline: date range first, then attribute predicates.
    Order-preserving; the default FilterState returns every project.
    """
    filtered = filter_by_date(projects, state.date_range, tz)
    return filter_by_attributes(filtered, state)


def derive_vocabulary(projects: List[Project]) -> Vocabulary:
    """Distinct sorted categories and industries. Pass the unfiltered list so options never shrink."""
    return Vocabulary(
        categories=unique_sorted(p.category for p in projects),
        industries=unique_sorted(tag for p in projects for tag in (p.industry or [])),
    )


def count_active_filters(state: FilterState) -> int:
    """Number of non-default filter dimensions (0-4)."""
    return sum(
        (
            bool(state.search_term.strip()),
            state.category is not None,
            state.industry is not None,
            state.date_range is not None,
        )
    )
