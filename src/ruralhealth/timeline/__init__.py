"""
RuralHealth Timeline Module

Unified patient timeline:
- Building events from symptom logs and medical records
- Medication effect analysis
- Filtering, grouping and related-event lookup
"""

from ruralhealth.timeline.builder import generate_patient_timeline
from ruralhealth.timeline.effects import (
    DEFAULT_WINDOW_DAYS,
    MedicationEffect,
    analyze_medication_effect_on_symptoms,
)
from ruralhealth.timeline.filters import (
    TimelineFilter,
    filter_timeline_events,
    group_timeline_events_by_date,
    group_timeline_events_by_month,
    find_related_events,
)
from ruralhealth.timeline.related import suggest_related_events

__all__ = [
    "generate_patient_timeline",
    "DEFAULT_WINDOW_DAYS",
    "MedicationEffect",
    "analyze_medication_effect_on_symptoms",
    "TimelineFilter",
    "filter_timeline_events",
    "group_timeline_events_by_date",
    "group_timeline_events_by_month",
    "find_related_events",
    "suggest_related_events",
]
