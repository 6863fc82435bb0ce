"""
Symptom Domain Models

Pydantic models for patient-reported symptom entries and the per-patient
symptom log they belong to.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SymptomEntry(BaseModel):
    """One timestamped, severity-scored report of a symptom."""
    
    model_config = ConfigDict(frozen=True)
    
    id: str = Field(..., description="Unique within the patient's symptom log")
    symptom: str = Field(..., description="Symptom name")
    severity: int = Field(..., ge=1, le=10, description="1-10 severity score")
    date: datetime = Field(..., description="When the symptom was reported")
    notes: Optional[str] = None


class PatientSymptomData(BaseModel):
    """
    Symptom log for one patient.
    
    `symptoms` maps each tracked symptom name to its entries in the order
    they were recorded.
    """
    
    model_config = ConfigDict(frozen=True)
    
    patient_id: str
    patient_name: str
    symptoms: Dict[str, List[SymptomEntry]] = Field(default_factory=dict)
    
    @model_validator(mode="after")
    def _entries_match_their_symptom(self) -> "PatientSymptomData":
        for name, entries in self.symptoms.items():
            for entry in entries:
                if entry.symptom != name:
                    raise ValueError(
                        f"Entry {entry.id} is for '{entry.symptom}' but is filed under '{name}'"
                    )
        return self
    
    @property
    def symptom_names(self) -> List[str]:
        """Tracked symptom names in insertion order."""
        return list(self.symptoms.keys())
    
    def entries_for(self, symptom: str) -> List[SymptomEntry]:
        """Entries for a symptom, empty when it is not tracked."""
        return self.symptoms.get(symptom, [])
