"""
Patient Analytics Service

Facade over the analytics and timeline functions for presentation code.
Applies configured defaults, supplies "now" from an injectable clock
when the caller does not pass one, and logs each request. Holds no state
between calls.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Union

import structlog

from ruralhealth.analytics.conditions import (
    ConditionSymptomCorrelation,
    MedicationEffectSummary,
    analyze_medication_effects,
    find_condition_symptom_correlations,
)
from ruralhealth.analytics.correlation import CorrelationData, process_symptom_correlation_data
from ruralhealth.analytics.dates import TimeRange, parse_time_range
from ruralhealth.analytics.heatmap import HeatmapData, process_symptom_heatmap_data
from ruralhealth.analytics.trends import TrendChartData, process_symptom_trend_data
from ruralhealth.config import Settings, get_settings
from ruralhealth.models.records import PatientMedicalRecord
from ruralhealth.models.symptoms import PatientSymptomData
from ruralhealth.models.timeline import EventType, TimelineEvent
from ruralhealth.timeline.builder import generate_patient_timeline
from ruralhealth.timeline.effects import MedicationEffect, analyze_medication_effect_on_symptoms

logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def align_to(moment: datetime, reference: Optional[datetime]) -> datetime:
    """
    Give `moment` the same naive/aware form as `reference`.

    Naive timestamps are read as UTC, matching the timeline id scheme.
    """
    if reference is None:
        return moment
    if reference.tzinfo is None and moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    if reference.tzinfo is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _sample_timestamp(data: PatientSymptomData) -> Optional[datetime]:
    for entries in data.symptoms.values():
        if entries:
            return entries[0].date
    return None


@dataclass
class TreatmentCorrelation:
    """Effect of one medication event on the selected symptom."""
    medication_event: TimelineEvent
    analysis: MedicationEffect


class SymptomAnalyticsService:
    """
    Service for patient symptom analytics.

    Usage:
        service = SymptomAnalyticsService()
        chart = service.symptom_trends(data, ["Headache", "Fatigue"])
        events = service.patient_timeline(data, record)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings or get_settings()
        self.clock = clock or utc_now

    def _resolve(
        self,
        data: PatientSymptomData,
        time_range: Optional[Union[str, TimeRange]],
        now: Optional[datetime],
    ):
        range_ = parse_time_range(time_range or self.settings.analytics.default_time_range)
        if now is None:
            # clock readings follow the data's naive/aware convention
            now = align_to(self.clock(), _sample_timestamp(data))
        return range_, now

    def symptom_trends(
        self,
        data: PatientSymptomData,
        symptoms: Sequence[str],
        time_range: Optional[Union[str, TimeRange]] = None,
        now: Optional[datetime] = None,
    ) -> TrendChartData:
        """Trend series for the given symptoms."""
        range_, now = self._resolve(data, time_range, now)
        logger.info(
            "Building symptom trends",
            patient_id=data.patient_id,
            symptoms=list(symptoms),
            time_range=range_.value,
        )
        return process_symptom_trend_data(data, symptoms, range_, now)

    def symptom_heatmap(
        self,
        data: PatientSymptomData,
        time_range: Optional[Union[str, TimeRange]] = None,
        now: Optional[datetime] = None,
    ) -> HeatmapData:
        range_, now = self._resolve(data, time_range, now)
        logger.info("Building symptom heatmap", patient_id=data.patient_id, time_range=range_.value)
        return process_symptom_heatmap_data(data, range_, now)

    def symptom_correlations(self, data: PatientSymptomData) -> CorrelationData:
        logger.info("Computing symptom correlations", patient_id=data.patient_id)
        return process_symptom_correlation_data(data)

    def patient_timeline(
        self,
        symptom_data: Optional[PatientSymptomData] = None,
        medical_record: Optional[PatientMedicalRecord] = None,
    ) -> List[TimelineEvent]:
        source = symptom_data if symptom_data is not None else medical_record
        logger.info(
            "Building patient timeline",
            patient_id=source.patient_id if source is not None else None,
        )
        return generate_patient_timeline(symptom_data, medical_record)

    def medication_effect(
        self,
        medication_event: TimelineEvent,
        events: Sequence[TimelineEvent],
        symptom: str,
        window_days: Optional[int] = None,
    ) -> MedicationEffect:
        window = window_days or self.settings.analytics.medication_effect_window_days
        return analyze_medication_effect_on_symptoms(medication_event, events, symptom, window)

    def treatment_correlations(
        self,
        events: Sequence[TimelineEvent],
        symptom: str,
        window_days: Optional[int] = None,
    ) -> List[TreatmentCorrelation]:
        """
        Effect of every medication start/stop on one symptom.

        Args:
            events: Full patient timeline
            symptom: Symptom to compare
            window_days: Window on each side, defaults to the configured value

        Returns:
            One entry per medication start/stop event, in timeline order
        """
        medication_events = [
            e for e in events
            if e.type in (EventType.MEDICATION_STARTED, EventType.MEDICATION_STOPPED)
        ]
        logger.info(
            "Analyzing treatment correlations",
            symptom=symptom,
            medication_events=len(medication_events),
        )
        return [
            TreatmentCorrelation(
                medication_event=e,
                analysis=self.medication_effect(e, events, symptom, window_days),
            )
            for e in medication_events
        ]

    def condition_correlations(
        self,
        record: PatientMedicalRecord,
        data: PatientSymptomData,
    ) -> List[ConditionSymptomCorrelation]:
        return find_condition_symptom_correlations(record, data)

    def medication_summaries(
        self,
        record: PatientMedicalRecord,
        data: PatientSymptomData,
    ) -> List[MedicationEffectSummary]:
        return analyze_medication_effects(record.medications, data)
