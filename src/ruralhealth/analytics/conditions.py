"""
Condition and Medication Symptom Associations

Links a patient's conditions to the symptoms they track, and summarizes
how each medication coincided with symptom changes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

import structlog

from ruralhealth.models.records import Medication, PatientMedicalRecord
from ruralhealth.models.symptoms import PatientSymptomData

logger = structlog.get_logger(__name__)

# Mean severity must move by at least this many points to count as an effect
EFFECT_THRESHOLD = 1.0


class EffectDirection(str, Enum):
    IMPROVED = "improved"
    WORSENED = "worsened"
    UNCHANGED = "unchanged"


def classify_change(change: float) -> EffectDirection:
    """Map a severity change to an effect using the fixed ±1 threshold."""
    if change <= -EFFECT_THRESHOLD:
        return EffectDirection.IMPROVED
    if change >= EFFECT_THRESHOLD:
        return EffectDirection.WORSENED
    return EffectDirection.UNCHANGED


def classify_summary_change(change: float) -> EffectDirection:
    """Like `classify_change`, but a move of exactly one point is unchanged."""
    if change < -EFFECT_THRESHOLD:
        return EffectDirection.IMPROVED
    if change > EFFECT_THRESHOLD:
        return EffectDirection.WORSENED
    return EffectDirection.UNCHANGED


# Very basic condition -> symptom associations
CONDITION_SYMPTOM_ASSOCIATIONS: Dict[str, List[str]] = {
    "Hypertension": ["Headache", "Dizziness", "Chest Pain"],
    "Type 2 Diabetes": ["Fatigue", "Increased Thirst", "Frequent Urination"],
    "Asthma": ["Shortness of Breath", "Cough", "Wheezing"],
    "Migraine": ["Headache", "Nausea", "Light Sensitivity"],
    "Osteoarthritis": ["Joint Pain", "Stiffness", "Swelling"],
    "Gastroesophageal Reflux Disease": ["Heartburn", "Chest Pain", "Regurgitation"],
}

KNOWN_ASSOCIATION_CONFIDENCE = 0.8
TEMPORAL_ASSOCIATION_CONFIDENCE = 0.6

# Share of a symptom's entries that must follow the diagnosis
TEMPORAL_ASSOCIATION_RATIO = 0.7


@dataclass
class ConditionSymptomCorrelation:
    condition: str
    related_symptoms: List[str]
    confidence: float


@dataclass
class SymptomEffect:
    symptom: str
    effect: EffectDirection


@dataclass
class MedicationEffectSummary:
    medication: str
    affected_symptoms: List[SymptomEffect] = field(default_factory=list)


def is_known_association(condition: str, symptom: str) -> bool:
    return symptom in CONDITION_SYMPTOM_ASSOCIATIONS.get(condition, [])


def find_condition_symptom_correlations(
    record: PatientMedicalRecord,
    symptom_data: PatientSymptomData,
) -> List[ConditionSymptomCorrelation]:
    """
    Associate each condition with the patient's symptoms.

    A symptom is associated when the pairing is in the known association
    table, or when most of its entries were recorded after the diagnosis.
    The reported confidence is that of the last symptom matched.
    """
    correlations = []

    for condition in record.conditions:
        related: List[str] = []
        confidence = 0.0

        for symptom, entries in symptom_data.symptoms.items():
            if is_known_association(condition.name, symptom):
                related.append(symptom)
                confidence = KNOWN_ASSOCIATION_CONFIDENCE
            elif entries:
                after = [e for e in entries if e.date > condition.diagnosis_date]
                if len(after) > len(entries) * TEMPORAL_ASSOCIATION_RATIO:
                    related.append(symptom)
                    confidence = TEMPORAL_ASSOCIATION_CONFIDENCE

        if related:
            correlations.append(ConditionSymptomCorrelation(
                condition=condition.name,
                related_symptoms=related,
                confidence=confidence,
            ))

    logger.debug(
        "Matched conditions to symptoms",
        patient_id=record.patient_id,
        conditions=len(correlations),
    )
    return correlations


def _summarize_medication(medication: Medication, symptom_data: PatientSymptomData) -> MedicationEffectSummary:
    summary = MedicationEffectSummary(medication=medication.name)

    for symptom, entries in symptom_data.symptoms.items():
        if len(entries) < 2:
            continue

        before = [e.severity for e in entries if e.date < medication.start_date]
        after = [e.severity for e in entries if e.date >= medication.start_date]
        if not before or not after:
            continue

        change = sum(after) / len(after) - sum(before) / len(before)
        summary.affected_symptoms.append(SymptomEffect(symptom=symptom, effect=classify_summary_change(change)))

    return summary


def analyze_medication_effects(
    medications: List[Medication],
    symptom_data: PatientSymptomData,
) -> List[MedicationEffectSummary]:
    """
    Compare each symptom's mean severity before and after every medication
    start. The mean must move by more than one point to count as an effect.
    Symptoms without entries on both sides are left out, as are medications
    with no comparable symptom.
    """
    summaries = [_summarize_medication(m, symptom_data) for m in medications]
    return [s for s in summaries if s.affected_symptoms]
