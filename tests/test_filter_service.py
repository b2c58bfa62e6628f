"""
Tests for the project filtering engine.
"""

from datetime import date, timedelta, timezone

import pytest

from schemas.filter_state import DateRange, FilterState
from schemas.project import Project
from services.filter_service import (
    Vocabulary,
    apply_filters,
    count_active_filters,
    derive_vocabulary,
    matches_category,
    matches_date_range,
    matches_industry,
    matches_search,
)

UTC = timezone.utc


def titles(projects):
    return [p.title for p in projects]


class TestDateRangeMatching:
    """Tests for the date interval matcher."""

    def test_no_range_passes_everything(self, sample_projects):
        assert all(matches_date_range(p, None, UTC) for p in sample_projects)

    def test_end_of_day_is_inclusive(self):
        project = Project(title="Late", time_updated="2024-03-15T23:59:59Z")
        dr = DateRange(start=date(2024, 3, 15), end=date(2024, 3, 15))
        assert matches_date_range(project, dr, UTC)

    def test_start_of_day_is_inclusive(self):
        project = Project(title="Early", time_updated="2024-03-15T00:00:00Z")
        assert matches_date_range(project, DateRange(start=date(2024, 3, 15)), UTC)

    def test_missing_end_covers_single_day(self):
        next_day = Project(title="Next", time_updated="2024-03-16T00:00:00Z")
        prev_day = Project(title="Prev", time_updated="2024-03-14T23:59:59Z")
        dr = DateRange(start=date(2024, 3, 15))
        assert not matches_date_range(next_day, dr, UTC)
        assert not matches_date_range(prev_day, dr, UTC)

    def test_missing_date_never_matches_a_range(self):
        project = Project(title="Undated")
        assert not matches_date_range(project, DateRange(start=date(2024, 3, 15)), UTC)

    def test_unparseable_date_never_matches_a_range(self):
        project = Project(title="Garbled", time_updated="xyz")
        assert project.updated_at is None
        assert not matches_date_range(project, DateRange(start=date(2000, 1, 1), end=date(2100, 1, 1)), UTC)

    def test_month_precision_date_is_first_of_month(self):
        project = Project(title="Monthly", time_updated="2024-03")
        assert matches_date_range(project, DateRange(start=date(2024, 3, 1)), UTC)
        assert not matches_date_range(project, DateRange(start=date(2024, 3, 2), end=date(2024, 3, 31)), UTC)

    def test_seconds_and_millis_land_on_same_day(self, sample_projects):
        dr = DateRange(start=date(2023, 11, 14))
        result = apply_filters(sample_projects, FilterState().with_date_range(dr), UTC)
        assert titles(result) == ["Customer Success Portal", "Product Launch Workspace"]

    def test_day_bounds_follow_timezone(self):
        """02:00Z on the 16th is still the 15th five hours west of UTC."""
        project = Project(title="Overnight", time_updated="2024-03-16T02:00:00Z")
        dr = DateRange(start=date(2024, 3, 15))
        assert matches_date_range(project, dr, timezone(timedelta(hours=-5)))
        assert not matches_date_range(project, dr, UTC)


class TestAttributePredicates:
    """Tests for search, category and industry predicates."""

    def test_search_is_case_insensitive(self):
        project = Project(title="Marketing Campaign Hub")
        assert matches_search(project, "CAMPAIGN")

    def test_search_matches_description(self):
        project = Project(title="Portal", description="Two-way support messaging")
        assert matches_search(project, "  Support ")

    @pytest.mark.parametrize("term", ["", "   "])
    def test_blank_search_matches_all(self, term):
        assert matches_search(Project(title="Anything"), term)

    def test_search_ignores_industry_tags(self):
        project = Project(title="Portal", description="Support", industry=["NGO"])
        assert not matches_search(project, "ngo")

    def test_category_exact_and_case_sensitive(self):
        project = Project(title="X", category="Sales")
        assert matches_category(project, "Sales")
        assert not matches_category(project, "sales")
        assert matches_category(project, None)

    def test_category_literally_named_all(self):
        """'all' is an ordinary value; None is the no-filter marker."""
        named_all = Project(title="A", category="all")
        other = Project(title="B", category="Sales")
        assert matches_category(named_all, "all")
        assert not matches_category(other, "all")

    def test_industry_membership(self):
        project = Project(title="X", industry=["FMCG", "Health"])
        assert matches_industry(project, "Health")
        assert not matches_industry(project, "NGO")
        assert matches_industry(project, None)


class TestApplyFilters:
    """Tests for the composed pipeline."""

    def test_default_state_is_identity(self, sample_projects):
        assert apply_filters(sample_projects, FilterState()) == sample_projects

    def test_ngo_industry_end_to_end(self, sample_projects):
        state = FilterState().with_industry("NGO")
        assert titles(apply_filters(sample_projects, state)) == [
            "Customer Success Portal",
            "Event Management Center",
        ]

    def test_search_across_titles_and_descriptions(self, sample_projects):
        state = FilterState().with_search("CAMPAIGN")
        assert titles(apply_filters(sample_projects, state)) == [
            "Marketing Campaign Hub",
            "Sales Enablement Hub",
        ]

    def test_filters_combine_with_and(self, sample_projects):
        state = FilterState().with_search("hub").with_industry("FMCG").with_category("Sales")
        assert titles(apply_filters(sample_projects, state)) == ["Sales Enablement Hub"]

    def test_date_range_preserves_order(self, sample_projects):
        state = FilterState().with_date_range(DateRange(start=date(2024, 3, 1), end=date(2024, 3, 31)))
        assert titles(apply_filters(sample_projects, state, UTC)) == [
            "Marketing Campaign Hub",
            "Sales Enablement Hub",
        ]

    def test_idempotent(self, sample_projects):
        state = FilterState().with_search("hub").with_industry("FMCG")
        once = apply_filters(sample_projects, state)
        assert apply_filters(once, state) == once

    def test_monotonic_when_adding_a_dimension(self, sample_projects):
        loose = FilterState().with_industry("FMCG")
        strict = loose.with_search("campaign")
        loose_result = apply_filters(sample_projects, loose)
        strict_result = apply_filters(sample_projects, strict)
        assert all(p in loose_result for p in strict_result)
        assert len(strict_result) <= len(loose_result)

    def test_clear_all_restores_full_list(self, sample_projects):
        state = FilterState().with_search("zzz").with_category("Sales")
        assert apply_filters(sample_projects, state) == []
        assert apply_filters(sample_projects, state.clear_all()) == sample_projects

    def test_input_not_mutated(self, sample_projects):
        snapshot = list(sample_projects)
        apply_filters(sample_projects, FilterState().with_industry("NGO"))
        assert sample_projects == snapshot

    def test_empty_input(self):
        assert apply_filters([], FilterState().with_search("x")) == []


class TestDeriveVocabulary:
    """Tests for category/industry option lists."""

    def test_sorted_distinct_values(self, sample_projects):
        vocab = derive_vocabulary(sample_projects)
        assert vocab.categories == ["Events", "Marketing", "Product", "Sales", "Support"]
        assert vocab.industries == [
            "Education", "FMCG", "Health", "Hospitality", "NGO", "Retail", "Technology",
        ]

    def test_empty_values_skipped(self):
        projects = [Project(title="A", category="", industry=["", "NGO"])]
        assert derive_vocabulary(projects) == Vocabulary(categories=[], industries=["NGO"])

    def test_empty_input(self):
        assert derive_vocabulary([]) == Vocabulary(categories=[], industries=[])

    def test_independent_of_active_filters(self, sample_projects):
        """Options come from the full list, so they do not shrink as filters apply."""
        before = derive_vocabulary(sample_projects)
        apply_filters(sample_projects, FilterState().with_industry("NGO"))
        assert derive_vocabulary(sample_projects) == before


class TestCountActiveFilters:
    """Tests for active-filter accounting."""

    def test_default_is_zero(self):
        assert count_active_filters(FilterState()) == 0

    def test_search_and_industry(self):
        state = FilterState().with_search("x").with_industry("Health")
        assert count_active_filters(state) == 2

    def test_whitespace_search_not_counted(self):
        assert count_active_filters(FilterState().with_search("   ")) == 0

    def test_all_dimensions(self):
        state = (
            FilterState()
            .with_search("x")
            .with_category("Sales")
            .with_industry("NGO")
            .with_date_range(DateRange(start=date(2024, 1, 1)))
        )
        assert count_active_filters(state) == 4
