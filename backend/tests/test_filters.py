from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from app.config import settings
from app.services.errors import InvalidFilter
from app.services.filters import FilterCriteria, build_filter_spec, normalize_filter, validate_date_range


def test_defaults_when_nothing_is_given() -> None:
    criteria = normalize_filter()
    assert criteria.page == 0
    assert criteria.count == settings.default_page_size
    assert criteria.by_relevance is False
    assert criteria.newer_to_older is True
    assert criteria.from_date is None and criteria.to_date is None
    assert criteria.region_ids == ()
    assert criteria.author_ids == ()
    assert criteria.company_ids == ()


def test_empty_author_ids_are_removed_and_duplicates_collapsed() -> None:
    criteria = normalize_filter(author_ids=["a1", "", None, "a2", "a1"])
    assert criteria.author_ids == ("a1", "a2")


def test_author_ids_are_kept_verbatim() -> None:
    criteria = normalize_filter(author_ids=[" a1 ", "  ", "a1"])
    assert criteria.author_ids == (" a1 ", "  ", "a1")


def test_region_and_company_ids_are_deduplicated_in_order() -> None:
    criteria = normalize_filter(region_ids=[5, 3, 5], company_ids=[2, 2, 9])
    assert criteria.region_ids == (5, 3)
    assert criteria.company_ids == (2, 9)


def test_date_range_is_widened_to_whole_days() -> None:
    criteria = normalize_filter(
        from_date=datetime(2024, 1, 1, 15, 30),
        to_date=datetime(2024, 1, 2, 8, 0, 12, 500),
    )
    assert criteria.from_date == datetime(2024, 1, 1, 0, 0, 0)
    assert criteria.to_date == datetime(2024, 1, 2, 23, 59, 59)


def test_plain_dates_are_accepted() -> None:
    criteria = normalize_filter(from_date=date(2024, 3, 1), to_date=date(2024, 3, 1))
    assert criteria.from_date == datetime(2024, 3, 1, 0, 0, 0)
    assert criteria.to_date == datetime(2024, 3, 1, 23, 59, 59)


def test_same_day_with_later_start_time_is_rejected() -> None:
    with pytest.raises(InvalidFilter):
        normalize_filter(from_date=datetime(2024, 1, 1, 18), to_date=datetime(2024, 1, 1, 9))


@pytest.mark.parametrize(
    "from_date, to_date",
    [
        (datetime(2024, 1, 1), None),
        (None, datetime(2024, 1, 1)),
    ],
)
def test_half_specified_range_is_rejected(from_date, to_date) -> None:
    with pytest.raises(InvalidFilter, match="two date parameters"):
        normalize_filter(from_date=from_date, to_date=to_date, region_ids=[1], page=3)


def test_reversed_range_is_rejected() -> None:
    with pytest.raises(InvalidFilter, match="fromDate"):
        normalize_filter(from_date=datetime(2024, 2, 1), to_date=datetime(2024, 1, 1))


def test_aware_datetimes_compare_in_utc() -> None:
    start = datetime(2024, 1, 1, 10, tzinfo=timezone.utc)
    end = datetime(2024, 1, 1, 11, tzinfo=timezone.utc)
    validate_date_range(start, end)
    with pytest.raises(InvalidFilter):
        validate_date_range(end, start)


def test_negative_paging_is_rejected() -> None:
    with pytest.raises(InvalidFilter):
        normalize_filter(page=-1)
    with pytest.raises(InvalidFilter):
        normalize_filter(count=-5)


def test_offset_is_page_times_count() -> None:
    assert FilterCriteria(page=3, count=7).offset == 21
    assert FilterCriteria(page=3, count=0).offset == 0


def test_filter_spec_only_constrains_listed_dimensions() -> None:
    assert build_filter_spec(normalize_filter()).clauses() == []

    spec = build_filter_spec(normalize_filter(region_ids=[1], company_ids=[2, 3]))
    assert len(spec.clauses()) == 2

    dated = build_filter_spec(
        normalize_filter(from_date=datetime(2024, 1, 1), to_date=datetime(2024, 1, 2), author_ids=["x"])
    )
    assert len(dated.clauses()) == 2


def test_aware_range_is_widened_on_utc_calendar_days() -> None:
    plus_five = timezone(timedelta(hours=5))
    criteria = normalize_filter(
        from_date=datetime(2024, 1, 2, 1, 0, tzinfo=plus_five),
        to_date=datetime(2024, 1, 1, 21, 0, tzinfo=timezone.utc),
    )
    assert criteria.from_date <= criteria.to_date
    assert criteria.from_date == datetime(2024, 1, 1, 0, 0, 0)
    assert criteria.to_date == datetime(2024, 1, 1, 23, 59, 59)
