"""
Patient Timeline Builder

Merges symptom reports, diagnoses, medication starts/stops, lab results,
vital signs and clinical notes into one chronologically sorted event list.

Event ids are derived from the source records, so rebuilding from the same
inputs yields the same ids in the same order:

    symptom-<name>-<epochMillis>   condition-<id>
    medication-start-<id>          medication-end-<id>
    lab-<id>    vital-<id>    note-<id>
"""

from typing import Dict, List, Optional

import structlog

from ruralhealth.analytics.dates import epoch_millis
from ruralhealth.models.records import (
    ClinicalNote,
    LabResult,
    MedicalCondition,
    Medication,
    PatientMedicalRecord,
    VitalSign,
)
from ruralhealth.models.symptoms import PatientSymptomData, SymptomEntry
from ruralhealth.models.timeline import EventCategory, EventType, MetadataValue, TimelineEvent

logger = structlog.get_logger(__name__)

NOTE_PREVIEW_LENGTH = 100
ELLIPSIS = "..."


# =============================================================================
# Id scheme
# =============================================================================

def symptom_event_id(entry: SymptomEntry) -> str:
    return f"symptom-{entry.symptom}-{epoch_millis(entry.date)}"


def condition_event_id(condition: MedicalCondition) -> str:
    return f"condition-{condition.id}"


def medication_start_event_id(medication: Medication) -> str:
    return f"medication-start-{medication.id}"


def medication_end_event_id(medication: Medication) -> str:
    return f"medication-end-{medication.id}"


# =============================================================================
# Helpers
# =============================================================================

def humanize_label(value: str) -> str:
    """`blood_pressure` -> `Blood Pressure`."""
    return " ".join(word.capitalize() for word in value.split("_") if word)


def truncate_text(text: str, limit: int = NOTE_PREVIEW_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def _metadata(**values: Optional[MetadataValue]) -> Dict[str, MetadataValue]:
    return {key: value for key, value in values.items() if value is not None}


# =============================================================================
# Per-record event factories
# =============================================================================

def _symptom_event(entry: SymptomEntry) -> TimelineEvent:
    return TimelineEvent(
        id=symptom_event_id(entry),
        type=EventType.SYMPTOM_REPORT,
        category=EventCategory.SYMPTOM,
        date=entry.date,
        title=f"Reported {entry.symptom}",
        description=entry.notes or f"Severity: {entry.severity}/10",
        severity=entry.severity,
        metadata=_metadata(
            symptom_name=entry.symptom,
            severity=entry.severity,
            notes=entry.notes,
        ),
    )


def _condition_event(condition: MedicalCondition) -> TimelineEvent:
    title = f"Diagnosed with {condition.name}"
    return TimelineEvent(
        id=condition_event_id(condition),
        type=EventType.CONDITION_DIAGNOSIS,
        category=EventCategory.CONDITION,
        date=condition.diagnosis_date,
        title=title,
        description=condition.notes or title,
        status=condition.status,
        metadata=_metadata(condition_name=condition.name, notes=condition.notes),
    )


def _medication_events(
    medication: Medication,
    condition_ids_by_name: Dict[str, List[str]],
) -> List[TimelineEvent]:
    start_id = medication_start_event_id(medication)
    end_id = medication_end_event_id(medication)

    related = []
    if medication.for_condition:
        related.extend(condition_ids_by_name.get(medication.for_condition, []))
    if medication.end_date is not None:
        related.append(end_id)

    events = [TimelineEvent(
        id=start_id,
        type=EventType.MEDICATION_STARTED,
        category=EventCategory.MEDICATION,
        date=medication.start_date,
        title=f"Started {medication.name}",
        description=f"{medication.dosage}, {medication.frequency}",
        status=medication.status,
        related_to=related,
        metadata=_metadata(
            medication_name=medication.name,
            dosage=medication.dosage,
            frequency=medication.frequency,
            for_condition=medication.for_condition,
            notes=medication.notes,
        ),
    )]

    if medication.end_date is not None:
        events.append(TimelineEvent(
            id=end_id,
            type=EventType.MEDICATION_STOPPED,
            category=EventCategory.MEDICATION,
            date=medication.end_date,
            title=f"Stopped {medication.name}",
            description=f"Stopped {medication.name} on {medication.end_date.date().isoformat()}",
            status="discontinued",
            related_to=[start_id],
            metadata=_metadata(
                medication_name=medication.name,
                for_condition=medication.for_condition,
                reason="Course completed",
                notes=medication.notes,
            ),
        ))

    return events


def _lab_event(lab: LabResult) -> TimelineEvent:
    description = f"{lab.value} {lab.unit}"
    if lab.reference_range:
        description += f" (Reference: {lab.reference_range})"
    return TimelineEvent(
        id=f"lab-{lab.id}",
        type=EventType.LAB_RESULT,
        category=EventCategory.LAB,
        date=lab.date,
        title=f"{lab.name} Result",
        description=description,
        status="abnormal" if lab.abnormal else "normal",
        metadata=_metadata(
            lab_name=lab.name,
            value=lab.value,
            unit=lab.unit,
            reference_range=lab.reference_range,
            notes=lab.notes,
        ),
    )


def _vital_event(vital: VitalSign) -> TimelineEvent:
    return TimelineEvent(
        id=f"vital-{vital.id}",
        type=EventType.VITAL_SIGN,
        category=EventCategory.VITAL,
        date=vital.date,
        title=humanize_label(vital.type),
        description=f"{vital.value} {vital.unit}",
        status="recorded",
        metadata=_metadata(
            vital_type=vital.type,
            value=vital.value,
            unit=vital.unit,
            notes=vital.notes,
        ),
    )


def _note_event(note: ClinicalNote) -> TimelineEvent:
    return TimelineEvent(
        id=f"note-{note.id}",
        type=EventType.NOTE,
        category=EventCategory.NOTE,
        date=note.date,
        title="Clinical Note",
        description=truncate_text(note.content),
        status="documented",
        metadata=_metadata(
            provider=note.provider,
            tags=", ".join(note.tags) if note.tags else None,
        ),
    )


# =============================================================================
# Builder
# =============================================================================

def generate_patient_timeline(
    symptom_data: Optional[PatientSymptomData] = None,
    medical_record: Optional[PatientMedicalRecord] = None,
) -> List[TimelineEvent]:
    """
    Build the unified timeline for one patient.

    Either input may be omitted; it then contributes no events. The result
    is sorted by date with a stable sort, so same-instant events keep
    their construction order.

    Args:
        symptom_data: Patient symptom log
        medical_record: Patient medical record

    Returns:
        Date-sorted timeline events
    """
    events: List[TimelineEvent] = []

    if symptom_data is not None:
        for entries in symptom_data.symptoms.values():
            events.extend(_symptom_event(entry) for entry in entries)

    if medical_record is not None:
        condition_ids_by_name: Dict[str, List[str]] = {}
        for condition in medical_record.conditions:
            condition_ids_by_name.setdefault(condition.name, []).append(condition_event_id(condition))
            events.append(_condition_event(condition))

        for medication in medical_record.medications:
            events.extend(_medication_events(medication, condition_ids_by_name))

        events.extend(_lab_event(lab) for lab in medical_record.lab_results)
        events.extend(_vital_event(vital) for vital in medical_record.vital_signs)
        events.extend(_note_event(note) for note in medical_record.notes)

    source = symptom_data if symptom_data is not None else medical_record
    logger.debug(
        "Built patient timeline",
        patient_id=source.patient_id if source is not None else None,
        events=len(events),
    )

    return sorted(events, key=lambda e: e.date)
