"""
Tests for Medication Effect Analysis

Tests windowing, classification thresholds and event type validation.
"""

import pytest
from datetime import datetime, timedelta, timezone

from ruralhealth.analytics.conditions import EffectDirection
from ruralhealth.errors import InvalidEventTypeError
from ruralhealth.models.timeline import EventCategory, EventType, TimelineEvent
from ruralhealth.timeline.effects import analyze_medication_effect_on_symptoms

UTC = timezone.utc
PIVOT = datetime(2024, 2, 1, tzinfo=UTC)


def medication_event(event_type=EventType.MEDICATION_STARTED):
    return TimelineEvent(
        id="medication-start-m1",
        type=event_type,
        category=EventCategory.MEDICATION,
        date=PIVOT,
        title="Started Ibuprofen",
        description="400mg, As needed",
        metadata={"medication_name": "Ibuprofen"},
    )


def report(symptom, severity, offset):
    when = PIVOT + offset
    return TimelineEvent(
        id=f"symptom-{symptom}-{int(when.timestamp() * 1000)}",
        type=EventType.SYMPTOM_REPORT,
        category=EventCategory.SYMPTOM,
        date=when,
        title=f"Reported {symptom}",
        description=f"Severity: {severity}/10",
        severity=severity,
        metadata={"symptom_name": symptom, "severity": severity},
    )


def reports(symptom, severities, days):
    return [report(symptom, s, timedelta(days=d)) for s, d in zip(severities, days)]


class TestMedicationEffect:
    """Test before/after comparison."""

    def test_pain_improves(self):
        """Test five reports averaging 8 before and 3 after."""
        events = (
            reports("Pain", [8, 9, 7, 8, 8], [-1, -2, -3, -4, -5])
            + reports("Pain", [3, 2, 4, 3, 3], [1, 2, 3, 4, 5])
        )

        result = analyze_medication_effect_on_symptoms(medication_event(), events, "Pain")

        assert result.effect == EffectDirection.IMPROVED
        assert result.before == pytest.approx(8.0)
        assert result.after == pytest.approx(3.0)
        assert result.change == pytest.approx(-5.0)
        assert (result.before_count, result.after_count) == (5, 5)

    def test_worsened(self):
        events = reports("Pain", [3, 3], [-1, -2]) + reports("Pain", [6, 6], [1, 2])

        result = analyze_medication_effect_on_symptoms(medication_event(), events, "Pain")

        assert result.effect == EffectDirection.WORSENED
        assert result.change == pytest.approx(3.0)

    def test_small_change_is_unchanged(self):
        events = reports("Pain", [5, 6], [-1, -2]) + reports("Pain", [5, 5], [1, 2])

        result = analyze_medication_effect_on_symptoms(medication_event(), events, "Pain")

        assert result.effect == EffectDirection.UNCHANGED
        assert result.change == pytest.approx(-0.5)

    @pytest.mark.parametrize("before,after,expected", [
        (5, 4, EffectDirection.IMPROVED),
        (4, 5, EffectDirection.WORSENED),
    ])
    def test_threshold_is_inclusive(self, before, after, expected):
        """Test that a change of exactly one point counts as an effect."""
        events = [report("Pain", before, timedelta(days=-1)), report("Pain", after, timedelta(days=1))]

        result = analyze_medication_effect_on_symptoms(medication_event(), events, "Pain")

        assert result.effect == expected

    def test_window_boundaries(self):
        """Test that reports exactly window_days away count and later ones do not."""
        events = [
            report("Pain", 9, timedelta(days=-30)),
            report("Pain", 1, timedelta(days=-30, seconds=-1)),
            report("Pain", 2, timedelta(days=30)),
            report("Pain", 10, timedelta(days=30, seconds=1)),
        ]

        result = analyze_medication_effect_on_symptoms(medication_event(), events, "Pain")

        assert (result.before, result.after) == (9.0, 2.0)
        assert (result.before_count, result.after_count) == (1, 1)

    def test_custom_window(self):
        events = reports("Pain", [8, 2], [-3, -10]) + reports("Pain", [4], [3])

        result = analyze_medication_effect_on_symptoms(medication_event(), events, "Pain", window_days=5)

        assert result.before == 8.0
        assert result.before_count == 1

    def test_same_instant_report_excluded(self):
        events = [report("Pain", 10, timedelta(0))]

        result = analyze_medication_effect_on_symptoms(medication_event(), events, "Pain")

        assert (result.before_count, result.after_count) == (0, 0)

    def test_other_symptoms_ignored(self):
        events = reports("Pain", [6], [-1]) + reports("Nausea", [1], [1]) + reports("Pain", [6], [1])

        result = analyze_medication_effect_on_symptoms(medication_event(), events, "Pain")

        assert result.after == 6.0
        assert result.effect == EffectDirection.UNCHANGED

    def test_empty_window_averages_zero(self):
        """Test that a side with no reports averages to 0."""
        events = reports("Pain", [4, 6], [1, 2])

        result = analyze_medication_effect_on_symptoms(medication_event(), events, "Pain")

        assert result.before == 0.0
        assert result.before_count == 0
        assert result.after == 5.0
        assert result.effect == EffectDirection.WORSENED

    def test_stop_event_accepted(self):
        events = reports("Pain", [3], [-1]) + reports("Pain", [7], [1])

        result = analyze_medication_effect_on_symptoms(
            medication_event(EventType.MEDICATION_STOPPED), events, "Pain"
        )

        assert result.effect == EffectDirection.WORSENED


class TestInvalidEventType:
    """Test event type validation."""

    @pytest.mark.parametrize("event_type", [
        EventType.SYMPTOM_REPORT,
        EventType.LAB_RESULT,
        EventType.MEDICATION_CHANGED,
    ])
    def test_rejects_non_start_stop_events(self, event_type):
        with pytest.raises(InvalidEventTypeError) as exc_info:
            analyze_medication_effect_on_symptoms(medication_event(event_type), [], "Pain")

        assert event_type.value in str(exc_info.value)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            analyze_medication_effect_on_symptoms(medication_event(EventType.NOTE), [], "Pain")
