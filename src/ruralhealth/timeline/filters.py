"""Filtering, grouping and cross-reference lookup over timeline events."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from ruralhealth.analytics.dates import day_key, month_key
from ruralhealth.models.timeline import EventCategory, TimelineEvent


@dataclass
class TimelineFilter:
    """
    Criteria for `filter_timeline_events`. Unset fields match everything.

    `end_date` is inclusive through the end of that day.
    """
    categories: List[Union[str, EventCategory]] = field(default_factory=list)
    start_date: Optional[Union[date, datetime]] = None
    end_date: Optional[Union[date, datetime]] = None
    search_term: Optional[str] = None


def _after_start(event: TimelineEvent, start: Union[date, datetime]) -> bool:
    if isinstance(start, datetime):
        return event.date >= start
    return event.date.date() >= start


def _before_end(event: TimelineEvent, end: Union[date, datetime]) -> bool:
    if isinstance(end, datetime):
        return event.date <= datetime.combine(end.date(), time.max, tzinfo=end.tzinfo)
    return event.date.date() <= end


def _matches_search(event: TimelineEvent, needle: str) -> bool:
    if needle in event.title.lower() or needle in event.description.lower():
        return True
    return any(
        isinstance(value, str) and needle in value.lower()
        for value in event.metadata.values()
    )


def filter_timeline_events(events: Iterable[TimelineEvent], criteria: TimelineFilter) -> List[TimelineEvent]:
    """
    Events matching every set criterion, in their original order.

    Unknown category names match no event. A blank search term is ignored;
    otherwise the term is matched as given, case-insensitively.
    """
    categories = {c.value if isinstance(c, EventCategory) else c for c in criteria.categories}
    search = criteria.search_term or ""
    needle = search.lower() if search.strip() else ""

    result = []
    for event in events:
        if categories and event.category.value not in categories:
            continue
        if criteria.start_date is not None and not _after_start(event, criteria.start_date):
            continue
        if criteria.end_date is not None and not _before_end(event, criteria.end_date):
            continue
        if needle and not _matches_search(event, needle):
            continue
        result.append(event)
    return result


def _group(events: Iterable[TimelineEvent], key: Callable[[datetime], str]) -> Dict[str, List[TimelineEvent]]:
    grouped: Dict[str, List[TimelineEvent]] = {}
    for event in events:
        grouped.setdefault(key(event.date), []).append(event)

    # newest first within each group
    for bucket in grouped.values():
        bucket.sort(key=lambda e: e.date, reverse=True)
    return grouped


def group_timeline_events_by_date(events: Iterable[TimelineEvent]) -> Dict[str, List[TimelineEvent]]:
    """Group events under `YYYY-MM-DD` keys."""
    return _group(events, day_key)


def group_timeline_events_by_month(events: Iterable[TimelineEvent]) -> Dict[str, List[TimelineEvent]]:
    """Group events under `YYYY-MM` keys."""
    return _group(events, month_key)


def find_related_events(event: TimelineEvent, all_events: Sequence[TimelineEvent]) -> List[TimelineEvent]:
    """Resolve `event.related_to` against `all_events`; unknown ids are skipped."""
    by_id = {e.id: e for e in all_events}
    return [by_id[event_id] for event_id in event.related_to if event_id in by_id]
