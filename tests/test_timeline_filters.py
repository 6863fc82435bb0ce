"""
Tests for Timeline Filtering and Grouping
"""

import pytest
from datetime import date, datetime, timezone

from ruralhealth.models.timeline import EventCategory, EventType, TimelineEvent
from ruralhealth.timeline.filters import (
    TimelineFilter,
    filter_timeline_events,
    find_related_events,
    group_timeline_events_by_date,
    group_timeline_events_by_month,
)

UTC = timezone.utc


def event(event_id, category, when, title="Event", description="", related_to=None, **metadata):
    type_by_category = {
        EventCategory.SYMPTOM: EventType.SYMPTOM_REPORT,
        EventCategory.CONDITION: EventType.CONDITION_DIAGNOSIS,
        EventCategory.MEDICATION: EventType.MEDICATION_STARTED,
        EventCategory.LAB: EventType.LAB_RESULT,
        EventCategory.NOTE: EventType.NOTE,
    }
    return TimelineEvent(
        id=event_id,
        type=type_by_category[category],
        category=category,
        date=when,
        title=title,
        description=description,
        related_to=related_to or [],
        metadata=metadata,
    )


@pytest.fixture
def events():
    return [
        event("e1", EventCategory.SYMPTOM, datetime(2024, 1, 5, 8, 0, tzinfo=UTC), "Reported Headache",
              symptom_name="Headache"),
        event("e2", EventCategory.CONDITION, datetime(2024, 1, 5, 23, 0, tzinfo=UTC), "Diagnosed with Migraine",
              "Triggered by stress", condition_name="Migraine"),
        event("e3", EventCategory.MEDICATION, datetime(2024, 1, 20, 9, 0, tzinfo=UTC), "Started Sumatriptan",
              "50mg, As needed", related_to=["e2", "missing"], for_condition="Migraine"),
        event("e4", EventCategory.LAB, datetime(2024, 2, 1, 10, 0, tzinfo=UTC), "HbA1c Result", "6.8 %"),
        event("e5", EventCategory.NOTE, datetime(2024, 2, 1, 15, 0, tzinfo=UTC), "Clinical Note",
              "Routine check-up", tags="check-up, routine"),
    ]


def ids(events):
    return [e.id for e in events]


class TestFilterTimelineEvents:
    """Test event filtering."""

    def test_empty_filter_returns_all(self, events):
        assert ids(filter_timeline_events(events, TimelineFilter())) == ["e1", "e2", "e3", "e4", "e5"]

    def test_categories(self, events):
        """Test category filtering with enum and string values."""
        criteria = TimelineFilter(categories=[EventCategory.SYMPTOM, "lab"])

        assert ids(filter_timeline_events(events, criteria)) == ["e1", "e4"]

    def test_unknown_category_matches_nothing(self, events):
        assert filter_timeline_events(events, TimelineFilter(categories=["billing"])) == []

    def test_unknown_category_alongside_known(self, events):
        criteria = TimelineFilter(categories=["billing", EventCategory.NOTE])

        assert ids(filter_timeline_events(events, criteria)) == ["e5"]

    def test_date_end_covers_whole_day(self, events):
        criteria = TimelineFilter(end_date=date(2024, 1, 5))

        assert ids(filter_timeline_events(events, criteria)) == ["e1", "e2"]

    def test_datetime_end_covers_whole_day(self, events):
        """Test that a midnight end bound still includes later events that day."""
        criteria = TimelineFilter(end_date=datetime(2024, 1, 5, tzinfo=UTC))

        assert ids(filter_timeline_events(events, criteria)) == ["e1", "e2"]

    def test_datetime_start_is_exact(self, events):
        criteria = TimelineFilter(start_date=datetime(2024, 1, 5, 12, 0, tzinfo=UTC))

        assert ids(filter_timeline_events(events, criteria)) == ["e2", "e3", "e4", "e5"]

    def test_date_start_covers_whole_day(self, events):
        criteria = TimelineFilter(start_date=date(2024, 2, 1))

        assert ids(filter_timeline_events(events, criteria)) == ["e4", "e5"]

    def test_search_title_case_insensitive(self, events):
        criteria = TimelineFilter(search_term="SumaTriptan")

        assert ids(filter_timeline_events(events, criteria)) == ["e3"]

    def test_search_term_is_not_trimmed(self, events):
        """Test that surrounding whitespace is part of the term."""
        assert filter_timeline_events(events, TimelineFilter(search_term=" sumatriptan ")) == []
        assert ids(filter_timeline_events(events, TimelineFilter(search_term="started "))) == ["e3"]

    def test_search_description(self, events):
        assert ids(filter_timeline_events(events, TimelineFilter(search_term="stress"))) == ["e2"]

    def test_search_metadata(self, events):
        """Test that string metadata values are searched."""
        assert ids(filter_timeline_events(events, TimelineFilter(search_term="routine"))) == ["e5"]
        assert ids(filter_timeline_events(events, TimelineFilter(search_term="migraine"))) == ["e2", "e3"]

    def test_blank_search_matches_all(self, events):
        assert len(filter_timeline_events(events, TimelineFilter(search_term="   "))) == 5

    def test_criteria_combine(self, events):
        criteria = TimelineFilter(
            categories=["condition", "medication"],
            start_date=date(2024, 1, 6),
            search_term="migraine",
        )

        assert ids(filter_timeline_events(events, criteria)) == ["e3"]


class TestGrouping:
    """Test grouping by day and month."""

    def test_group_by_date(self, events):
        grouped = group_timeline_events_by_date(events)

        assert list(grouped) == ["2024-01-05", "2024-01-20", "2024-02-01"]
        assert ids(grouped["2024-01-05"]) == ["e2", "e1"]

    def test_group_by_month(self, events):
        grouped = group_timeline_events_by_month(events)

        assert list(grouped) == ["2024-01", "2024-02"]
        assert ids(grouped["2024-01"]) == ["e3", "e2", "e1"]
        assert ids(grouped["2024-02"]) == ["e5", "e4"]

    def test_group_empty(self):
        assert group_timeline_events_by_date([]) == {}


class TestFindRelatedEvents:
    def test_resolves_known_ids(self, events):
        """Test that unknown ids are skipped."""
        related = find_related_events(events[2], events)

        assert ids(related) == ["e2"]

    def test_no_links(self, events):
        assert find_related_events(events[0], events) == []
