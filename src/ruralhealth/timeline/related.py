"""
Heuristic Related-Event Discovery

Suggests events that are plausibly connected to a given event even when
no explicit `related_to` link exists: conditions that explain a symptom,
medications prescribed for a condition, labs that monitor it, and
symptoms that shifted after a medication started.
"""

from datetime import timedelta
from typing import List, Sequence

from ruralhealth.analytics.conditions import is_known_association
from ruralhealth.models.timeline import EventType, TimelineEvent

MAX_SUGGESTIONS = 10
NEARBY_WINDOW = timedelta(days=7)

# Severity points a symptom must move after a medication start
SIGNIFICANT_SEVERITY_CHANGE = 2

# Lab name fragments that mark a lab as monitoring a condition
LAB_CONDITION_MARKERS = {
    "Type 2 Diabetes": ("Glucose", "HbA1c"),
}

# Labs that monitor a condition only under this exact name
LAB_CONDITION_PANELS = {
    "Hypertension": "Lipid Panel",
}

_PRESCRIBING_TYPES = (EventType.MEDICATION_STARTED, EventType.MEDICATION_CHANGED)


def _lab_monitors(lab_name: str, condition: str) -> bool:
    if lab_name == LAB_CONDITION_PANELS.get(condition):
        return True
    return any(marker in lab_name for marker in LAB_CONDITION_MARKERS.get(condition, ()))


def _related_to_symptom(event: TimelineEvent, all_events: Sequence[TimelineEvent]) -> List[TimelineEvent]:
    symptom = event.meta_str("symptom_name")
    if not symptom:
        return []
    needle = symptom.lower()

    conditions = [
        e for e in all_events
        if e.type == EventType.CONDITION_DIAGNOSIS
        and (needle in e.description.lower() or needle in (e.meta_str("condition_name") or "").lower())
    ]
    condition_names = {c.meta_str("condition_name") for c in conditions}
    medications = [
        e for e in all_events
        if e.type in _PRESCRIBING_TYPES
        and e.meta_str("for_condition")
        and e.meta_str("for_condition") in condition_names
    ]
    return conditions + medications


def _related_to_condition(event: TimelineEvent, all_events: Sequence[TimelineEvent]) -> List[TimelineEvent]:
    condition = event.meta_str("condition_name")
    if not condition:
        return []

    related = []
    for other in all_events:
        if other.type == EventType.SYMPTOM_REPORT:
            symptom = other.meta_str("symptom_name") or ""
            if is_known_association(condition, symptom) or other.date >= event.date:
                related.append(other)
        elif other.type in _PRESCRIBING_TYPES:
            if other.meta_str("for_condition") == condition:
                related.append(other)
        elif other.type == EventType.LAB_RESULT:
            if other.date >= event.date and _lab_monitors(other.meta_str("lab_name") or "", condition):
                related.append(other)
    return related


def _shifted_symptoms(event: TimelineEvent, all_events: Sequence[TimelineEvent]) -> List[TimelineEvent]:
    """Symptom reports after a medication start that moved noticeably from the last earlier report."""
    reports = [e for e in all_events if e.type == EventType.SYMPTOM_REPORT]

    shifted = []
    for report in reports:
        if report.date <= event.date:
            continue
        symptom = report.meta_str("symptom_name")
        earlier = [
            e for e in reports
            if e.meta_str("symptom_name") == symptom and e.date < event.date
        ]
        if not earlier:
            continue
        previous = max(earlier, key=lambda e: e.date)
        if abs((report.severity or 0) - (previous.severity or 0)) >= SIGNIFICANT_SEVERITY_CHANGE:
            shifted.append(report)
    return shifted


def _related_to_medication(event: TimelineEvent, all_events: Sequence[TimelineEvent]) -> List[TimelineEvent]:
    condition = event.meta_str("for_condition")
    if not condition:
        return []

    related = [
        e for e in all_events
        if e.type == EventType.CONDITION_DIAGNOSIS and e.meta_str("condition_name") == condition
    ]
    if event.type in _PRESCRIBING_TYPES:
        related.extend(_shifted_symptoms(event, all_events))
    return related


def _related_to_lab(event: TimelineEvent, all_events: Sequence[TimelineEvent]) -> List[TimelineEvent]:
    lab_name = event.meta_str("lab_name")
    if not lab_name:
        return []
    return [
        e for e in all_events
        if e.type == EventType.CONDITION_DIAGNOSIS
        and _lab_monitors(lab_name, e.meta_str("condition_name") or "")
    ]


def _nearby_in_category(event: TimelineEvent, all_events: Sequence[TimelineEvent]) -> List[TimelineEvent]:
    return [
        e for e in all_events
        if e.category == event.category
        and e.id != event.id
        and abs(e.date - event.date) <= NEARBY_WINDOW
    ]


def suggest_related_events(
    event: TimelineEvent,
    all_events: Sequence[TimelineEvent],
    limit: int = MAX_SUGGESTIONS,
) -> List[TimelineEvent]:
    """
    Suggest events related to `event`, newest first.

    Args:
        event: Event to find relations for
        all_events: Full patient timeline
        limit: Maximum number of suggestions

    Returns:
        Up to `limit` related events
    """
    if event.type == EventType.SYMPTOM_REPORT:
        related = _related_to_symptom(event, all_events)
    elif event.type == EventType.CONDITION_DIAGNOSIS:
        related = _related_to_condition(event, all_events)
    elif event.type in (EventType.MEDICATION_STARTED, EventType.MEDICATION_STOPPED, EventType.MEDICATION_CHANGED):
        related = _related_to_medication(event, all_events)
    elif event.type == EventType.LAB_RESULT:
        related = _related_to_lab(event, all_events)
    else:
        related = _nearby_in_category(event, all_events)

    related.sort(key=lambda e: e.date, reverse=True)
    return related[:limit]
