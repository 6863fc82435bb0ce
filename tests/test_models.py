"""
Tests for Data Models
"""

import pytest
from datetime import date, datetime
from pydantic import ValidationError

from ruralhealth.models import (
    EventCategory,
    EventType,
    MedicalCondition,
    PatientMedicalRecord,
    PatientSymptomData,
    SymptomEntry,
    TimelineEvent,
)


class TestSymptomModels:
    """Test symptom entry validation."""

    @pytest.mark.parametrize("severity", [0, 11])
    def test_severity_bounds(self, severity):
        with pytest.raises(ValidationError):
            SymptomEntry(id="s1", symptom="Headache", severity=severity, date=datetime(2024, 1, 1))

    def test_severity_limits_accepted(self):
        low = SymptomEntry(id="s1", symptom="Headache", severity=1, date=datetime(2024, 1, 1))
        high = SymptomEntry(id="s2", symptom="Headache", severity=10, date=datetime(2024, 1, 1))

        assert (low.severity, high.severity) == (1, 10)

    def test_entry_filed_under_wrong_symptom(self):
        """Test that entries must be filed under their own symptom name."""
        entry = SymptomEntry(id="s1", symptom="Cough", severity=4, date=datetime(2024, 1, 1))

        with pytest.raises(ValidationError):
            PatientSymptomData(patient_id="p1", patient_name="Test", symptoms={"Headache": [entry]})

    def test_entries_are_immutable(self):
        entry = SymptomEntry(id="s1", symptom="Cough", severity=4, date=datetime(2024, 1, 1))

        with pytest.raises(ValidationError):
            entry.severity = 5

    def test_entries_for_untracked_symptom(self):
        data = PatientSymptomData(patient_id="p1", patient_name="Test")

        assert data.entries_for("Cough") == []
        assert data.symptom_names == []


class TestRecordModels:
    def test_condition_status(self):
        with pytest.raises(ValidationError):
            MedicalCondition(id="c1", name="Asthma", status="cured", diagnosis_date=datetime(2020, 1, 1))

    @pytest.mark.parametrize("on,expected", [
        (date(2024, 5, 9), 33),
        (date(2024, 5, 10), 34),
    ])
    def test_age_at(self, on, expected):
        record = PatientMedicalRecord(patient_id="p1", patient_name="Test", date_of_birth=date(1990, 5, 10))

        assert record.age_at(on) == expected

    def test_age_unknown(self):
        assert PatientMedicalRecord(patient_id="p1", patient_name="Test").age_at(date(2024, 1, 1)) is None


class TestTimelineEvent:
    def test_meta_str(self):
        event = TimelineEvent(
            id="symptom-Cough-0",
            type=EventType.SYMPTOM_REPORT,
            category=EventCategory.SYMPTOM,
            date=datetime(1970, 1, 1),
            title="Reported Cough",
            description="Severity: 4/10",
            severity=4,
            metadata={"symptom_name": "Cough", "severity": 4},
        )

        assert event.meta_str("symptom_name") == "Cough"
        assert event.meta_str("severity") is None
        assert event.meta_str("missing") is None

    def test_enum_values(self):
        assert EventType("medication_stopped") is EventType.MEDICATION_STOPPED
        assert {c.value for c in EventCategory} == {
            "symptom", "condition", "medication", "lab", "vital", "note", "appointment",
        }
