"""
Medication Effect Analysis

Compares a symptom's mean severity in the window before a medication
start/stop with the window after it.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import List, Sequence

import structlog

from ruralhealth.analytics.conditions import EffectDirection, classify_change
from ruralhealth.errors import InvalidEventTypeError
from ruralhealth.models.timeline import EventType, TimelineEvent

logger = structlog.get_logger(__name__)

DEFAULT_WINDOW_DAYS = 30


@dataclass
class MedicationEffect:
    """
    Before/after comparison for one medication event and symptom.

    An empty window averages to 0, which is indistinguishable from a real
    zero. Check `before_count` / `after_count` when that matters.
    """
    effect: EffectDirection
    before: float
    after: float
    change: float
    before_count: int
    after_count: int


def _mean_severity(events: List[TimelineEvent]) -> float:
    if not events:
        return 0.0
    return sum(e.severity or 0 for e in events) / len(events)


def analyze_medication_effect_on_symptoms(
    medication_event: TimelineEvent,
    all_events: Sequence[TimelineEvent],
    symptom: str,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> MedicationEffect:
    """
    Analyze how a symptom changed around a medication start or stop.

    Symptom reports within `window_days` strictly before the event form the
    "before" set, those within `window_days` strictly after it the "after"
    set; reports at the event's exact instant belong to neither.

    Args:
        medication_event: A medication_started or medication_stopped event
        all_events: Full patient timeline
        symptom: Symptom name to compare
        window_days: Window length on each side

    Returns:
        MedicationEffect

    Raises:
        InvalidEventTypeError: If the event is not a medication start/stop
    """
    if medication_event.type not in (EventType.MEDICATION_STARTED, EventType.MEDICATION_STOPPED):
        logger.warning(
            "Medication effect requested for non-medication event",
            event_id=medication_event.id,
            event_type=medication_event.type.value,
        )
        raise InvalidEventTypeError(
            f"Invalid event type {medication_event.type.value!r}. "
            "Expected medication_started or medication_stopped."
        )

    pivot = medication_event.date
    window = timedelta(days=window_days)

    reports = [
        e for e in all_events
        if e.type == EventType.SYMPTOM_REPORT and e.meta_str("symptom_name") == symptom
    ]
    before = [e for e in reports if e.date < pivot and pivot - e.date <= window]
    after = [e for e in reports if e.date > pivot and e.date - pivot <= window]

    mean_before = _mean_severity(before)
    mean_after = _mean_severity(after)
    change = mean_after - mean_before

    return MedicationEffect(
        effect=classify_change(change),
        before=mean_before,
        after=mean_after,
        change=change,
        before_count=len(before),
        after_count=len(after),
    )
