"""
Medical Record Models

Pydantic models for the read-only patient medical record supplied by the
data source: conditions, medications, allergies, vitals, labs and notes.
"""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _RecordModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class MedicalCondition(_RecordModel):
    """A diagnosed (or suspected) condition."""
    
    id: str
    name: str
    status: Literal["confirmed", "provisional", "suspected", "ruled_out"]
    diagnosis_date: datetime
    notes: Optional[str] = None


class Medication(_RecordModel):
    """
    A prescribed medication.
    
    `for_condition` names the condition it treats, matched against
    `MedicalCondition.name`.
    """
    
    id: str
    name: str
    dosage: str
    frequency: str
    start_date: datetime
    end_date: Optional[datetime] = None
    status: Literal["active", "discontinued", "completed"] = "active"
    for_condition: Optional[str] = None
    notes: Optional[str] = None


class Allergy(_RecordModel):
    """Known allergy."""
    
    id: str
    allergen: str
    reaction: str
    severity: Literal["mild", "moderate", "severe"]
    diagnosed_date: Optional[datetime] = None


class VitalSign(_RecordModel):
    """A recorded vital sign such as `blood_pressure` or `heart_rate`."""
    
    id: str
    type: str
    value: str
    unit: str
    date: datetime
    notes: Optional[str] = None


class LabResult(_RecordModel):
    id: str
    name: str
    value: str
    unit: str
    reference_range: Optional[str] = None
    date: datetime
    abnormal: bool = False
    notes: Optional[str] = None


class ClinicalNote(_RecordModel):
    id: str
    provider: str
    date: datetime
    content: str
    tags: List[str] = Field(default_factory=list)


class PatientMedicalRecord(_RecordModel):
    """Complete medical record for one patient."""
    
    patient_id: str
    patient_name: str
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    blood_type: Optional[str] = None
    
    conditions: List[MedicalCondition] = Field(default_factory=list)
    medications: List[Medication] = Field(default_factory=list)
    allergies: List[Allergy] = Field(default_factory=list)
    vital_signs: List[VitalSign] = Field(default_factory=list)
    lab_results: List[LabResult] = Field(default_factory=list)
    notes: List[ClinicalNote] = Field(default_factory=list)
    
    def age_at(self, on: date) -> Optional[int]:
        """Completed years of age on the given day."""
        if self.date_of_birth is None:
            return None
        dob = self.date_of_birth
        age = on.year - dob.year
        if (on.month, on.day) < (dob.month, dob.day):
            age -= 1
        return age
