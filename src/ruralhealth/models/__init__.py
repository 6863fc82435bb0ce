"""
RuralHealth Data Models

Pydantic models for symptom logs, medical records and timeline events.
"""

from ruralhealth.models.symptoms import SymptomEntry, PatientSymptomData
from ruralhealth.models.records import (
    MedicalCondition,
    Medication,
    Allergy,
    VitalSign,
    LabResult,
    ClinicalNote,
    PatientMedicalRecord,
)
from ruralhealth.models.timeline import (
    EventType,
    EventCategory,
    TimelineEvent,
    MEDICATION_EVENT_TYPES,
)

__all__ = [
    # Symptoms
    "SymptomEntry",
    "PatientSymptomData",
    # Records
    "MedicalCondition",
    "Medication",
    "Allergy",
    "VitalSign",
    "LabResult",
    "ClinicalNote",
    "PatientMedicalRecord",
    # Timeline
    "EventType",
    "EventCategory",
    "TimelineEvent",
    "MEDICATION_EVENT_TYPES",
]
