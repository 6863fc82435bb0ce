"""
Mock Patient Data Generator

Generates the demo patients' symptom logs and medical records used by the
dashboards in place of a real data source. All dates are relative to an
explicit `now`, and a seed makes a dataset reproducible.
"""

import random
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

import structlog

from ruralhealth.models.records import (
    Allergy,
    ClinicalNote,
    LabResult,
    MedicalCondition,
    Medication,
    PatientMedicalRecord,
    VitalSign,
)
from ruralhealth.models.symptoms import PatientSymptomData, SymptomEntry

logger = structlog.get_logger(__name__)


# =============================================================================
# Reference Data
# =============================================================================

# patient id -> (name, [(symptom, (min severity, max severity), daily frequency)])
DEMO_PATIENTS = {
    "p1": ("Maria Gonzalez", [
        ("Headache", (3, 7), 0.7),
        ("Fatigue", (2, 6), 0.5),
        ("Chest Pain", (1, 5), 0.3),
    ]),
    "p2": ("John Smith", [
        ("Joint Pain", (4, 8), 0.6),
        ("Shortness of Breath", (2, 7), 0.4),
        ("Cough", (3, 6), 0.8),
    ]),
    "p3": ("Raj Patel", [
        ("Fever", (2, 9), 0.5),
        ("Cough", (3, 7), 0.7),
        ("Fatigue", (4, 8), 0.6),
    ]),
}

# patient id -> [(condition id, name, status, years ago, month, day, notes)]
PATIENT_CONDITIONS = {
    "p1": [
        ("c1", "Hypertension", "confirmed", 3, 6, 12, "Well controlled with medication"),
        ("c2", "Migraine", "confirmed", 5, 3, 8, "Triggered by stress and certain foods"),
    ],
    "p2": [
        ("c3", "Type 2 Diabetes", "confirmed", 7, 9, 23, "Monitoring blood glucose levels"),
        ("c4", "Osteoarthritis", "confirmed", 4, 12, 5, "Affecting knees and hips"),
    ],
    "p3": [
        ("c5", "Asthma", "confirmed", 15, 4, 17, "Seasonal exacerbations"),
        ("c6", "Gastroesophageal Reflux Disease", "provisional", 2, 8, 9, "Dietary modifications recommended"),
    ],
}

# condition -> (medication, dosage, frequency, days after diagnosis, notes)
CONDITION_MEDICATIONS = {
    "Hypertension": ("Lisinopril", "10mg", "Once daily", 7, "Take in the morning"),
    "Migraine": ("Sumatriptan", "50mg", "As needed for migraine attacks", 3, "Maximum 2 tablets in 24 hours"),
    "Type 2 Diabetes": ("Metformin", "500mg", "Twice daily with meals", 5, "Take with food to minimize GI side effects"),
    "Asthma": ("Albuterol Inhaler", "2 puffs", "As needed for shortness of breath", 1, "Use spacer for better delivery"),
}

# patient id -> (allergy id, allergen, reaction, severity, years ago, month, day)
PATIENT_ALLERGIES = {
    "p1": ("a1", "Penicillin", "Rash", "moderate", 10, 5, 15),
    "p2": ("a2", "Shellfish", "Anaphylaxis", "severe", 8, 8, 22),
}

BLOOD_TYPES = ["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]
NOTE_PROVIDER = "Dr. Sarah Johnson"


class MockDataGenerator:
    """
    Generator for mock patient data.

    Usage:
        generator = MockDataGenerator(seed=42)
        now = datetime(2024, 6, 1, tzinfo=timezone.utc)

        patients = generator.generate_patient_symptom_data(now)
        records = generator.generate_medical_records(
            [(p.patient_id, p.patient_name) for p in patients], now
        )
    """

    def __init__(self, seed: Optional[int] = None, history_days: int = 90):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility
            history_days: Days of symptom history per patient
        """
        self._rng = random.Random(seed)
        self.history_days = history_days

    # -------------------------------------------------------------------------
    # Symptoms
    # -------------------------------------------------------------------------

    def generate_symptom_entries(
        self,
        symptom: str,
        now: datetime,
        severity_range: Tuple[int, int],
        frequency: float,
        days: Optional[int] = None,
    ) -> List[SymptomEntry]:
        """
        Random daily entries for one symptom, newest first.

        Each of the last `days` days gets an entry with probability
        `frequency`.
        """
        low, high = severity_range
        entries = []
        for i in range(days if days is not None else self.history_days):
            if self._rng.random() > frequency:
                continue
            severity = self._rng.randint(low, high)
            entries.append(SymptomEntry(
                id=f"{symptom}-{i}",
                symptom=symptom,
                severity=severity,
                date=now - timedelta(days=i),
                notes=f"{symptom} with severity {severity}",
            ))
        return entries

    def generate_patient_symptom_data(self, now: datetime) -> List[PatientSymptomData]:
        """Symptom logs for the three demo patients."""
        patients = []
        for patient_id, (name, symptoms) in DEMO_PATIENTS.items():
            patients.append(PatientSymptomData(
                patient_id=patient_id,
                patient_name=name,
                symptoms={
                    symptom: self.generate_symptom_entries(symptom, now, severity_range, frequency)
                    for symptom, severity_range, frequency in symptoms
                },
            ))

        logger.info(f"Generated symptom data for {len(patients)} mock patients")
        return patients

    # -------------------------------------------------------------------------
    # Medical records
    # -------------------------------------------------------------------------

    def _conditions(self, patient_id: str, now: datetime) -> List[MedicalCondition]:
        return [
            MedicalCondition(
                id=cid,
                name=name,
                status=status,
                diagnosis_date=now.replace(year=now.year - years, month=month, day=day),
                notes=notes,
            )
            for cid, name, status, years, month, day, notes in PATIENT_CONDITIONS.get(patient_id, [])
        ]

    def _medications(self, conditions: Sequence[MedicalCondition]) -> List[Medication]:
        medications = []
        for condition in conditions:
            template = CONDITION_MEDICATIONS.get(condition.name)
            if template is None:
                continue
            name, dosage, frequency, offset_days, notes = template
            medications.append(Medication(
                id=f"m{len(medications) + 1}",
                name=name,
                dosage=dosage,
                frequency=frequency,
                start_date=condition.diagnosis_date + timedelta(days=offset_days),
                for_condition=condition.name,
                status="active",
                notes=notes,
            ))
        return medications

    def _vital_signs(self, conditions: Sequence[MedicalCondition], now: datetime) -> List[VitalSign]:
        hypertensive = any(c.name == "Hypertension" for c in conditions)
        vitals = []

        # One blood pressure reading per month
        for i in range(5):
            systolic, diastolic = 120, 80
            if hypertensive:
                systolic += self._rng.randint(0, 29)
                diastolic += self._rng.randint(0, 14)
            vitals.append(VitalSign(
                id=f"v{len(vitals) + 1}",
                type="blood_pressure",
                value=f"{systolic}/{diastolic}",
                unit="mmHg",
                date=now - timedelta(days=i * 30),
                notes="Most recent reading" if i == 0 else None,
            ))

        for i in range(3):
            vitals.append(VitalSign(
                id=f"v{len(vitals) + 1}",
                type="heart_rate",
                value=str(70 + self._rng.randint(0, 19)),
                unit="bpm",
                date=now - timedelta(days=i * 30),
            ))
        return vitals

    def _lab_results(self, conditions: Sequence[MedicalCondition], now: datetime) -> List[LabResult]:
        names = {c.name for c in conditions}
        labs = []

        if "Type 2 Diabetes" in names:
            for i in range(3):
                value = round(6.5 + self._rng.random(), 1)
                abnormal = value > 6.5
                labs.append(LabResult(
                    id=f"l{len(labs) + 1}",
                    name="HbA1c",
                    value=f"{value:.1f}",
                    unit="%",
                    reference_range="4.0-5.6",
                    date=now - timedelta(days=i * 90),
                    abnormal=abnormal,
                    notes="Above target range" if abnormal else "Within target range",
                ))
            for i in range(4):
                value = round(110 + self._rng.random() * 40)
                labs.append(LabResult(
                    id=f"l{len(labs) + 1}",
                    name="Fasting Glucose",
                    value=str(value),
                    unit="mg/dL",
                    reference_range="70-100",
                    date=now - timedelta(days=i * 30),
                    abnormal=value > 100,
                ))

        if "Hypertension" in names:
            drawn = now - timedelta(days=60)
            for name, value, reference, abnormal in [
                ("Total Cholesterol", "210", "<200", True),
                ("LDL Cholesterol", "130", "<100", True),
                ("HDL Cholesterol", "45", ">40", False),
            ]:
                labs.append(LabResult(
                    id=f"l{len(labs) + 1}",
                    name=name,
                    value=value,
                    unit="mg/dL",
                    reference_range=reference,
                    date=drawn,
                    abnormal=abnormal,
                ))
        return labs

    def _notes(
        self,
        patient_name: str,
        conditions: Sequence[MedicalCondition],
        medications: Sequence[Medication],
        now: datetime,
    ) -> List[ClinicalNote]:
        notes = []
        for i in range(self._rng.randint(2, 4)):
            if i == 0:
                content = (
                    f"Patient {patient_name} presents for follow-up of "
                    f"{', '.join(c.name for c in conditions)}. "
                    f"Current medications include {', '.join(m.name for m in medications)}. "
                    "Patient reports overall stable condition with occasional symptom flares. "
                    "Will continue current treatment plan and follow up in 3 months."
                )
                tags = ["follow-up"] + [c.name.lower().replace(" ", "-") for c in conditions]
            else:
                content = (
                    f"Routine check-up for {patient_name}. Vital signs stable. "
                    "Patient reports compliance with medication regimen. "
                    "No new complaints or concerns at this time. "
                    "Continue current management and return for follow-up as scheduled."
                )
                tags = ["check-up", "routine"]
            notes.append(ClinicalNote(
                id=f"n{i + 1}",
                provider=NOTE_PROVIDER,
                date=now - timedelta(days=i * 45),
                content=content,
                tags=tags,
            ))
        return notes

    def generate_medical_record(self, patient_id: str, patient_name: str, now: datetime) -> PatientMedicalRecord:
        """Build one patient's medical record."""
        age = self._rng.randint(25, 74)
        dob = date(now.year - age, self._rng.randint(1, 12), self._rng.randint(1, 28))

        conditions = self._conditions(patient_id, now)
        medications = self._medications(conditions)

        allergies = []
        allergy = PATIENT_ALLERGIES.get(patient_id)
        if allergy:
            aid, allergen, reaction, severity, years, month, day = allergy
            allergies.append(Allergy(
                id=aid,
                allergen=allergen,
                reaction=reaction,
                severity=severity,
                diagnosed_date=now.replace(year=now.year - years, month=month, day=day),
            ))

        return PatientMedicalRecord(
            patient_id=patient_id,
            patient_name=patient_name,
            date_of_birth=dob,
            gender=self._rng.choice(["Female", "Male"]),
            blood_type=self._rng.choice(BLOOD_TYPES),
            conditions=conditions,
            medications=medications,
            allergies=allergies,
            vital_signs=self._vital_signs(conditions, now),
            lab_results=self._lab_results(conditions, now),
            notes=self._notes(patient_name, conditions, medications, now),
        )

    def generate_medical_records(
        self,
        patients: Sequence[Tuple[str, str]],
        now: datetime,
    ) -> Dict[str, PatientMedicalRecord]:
        """
        Medical records keyed by patient id.

        Args:
            patients: (patient id, patient name) pairs
            now: Reference timestamp
        """
        records = {pid: self.generate_medical_record(pid, name, now) for pid, name in patients}
        logger.info(f"Generated {len(records)} mock medical records")
        return records
