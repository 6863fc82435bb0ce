"""
Timeline Event Model

A normalized representation of any clinically relevant occurrence on a
shared chronological axis. Events are derived from symptom logs and
medical records, never stored on their own.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, Enum):
    """Timeline event types."""
    SYMPTOM_REPORT = "symptom_report"
    CONDITION_DIAGNOSIS = "condition_diagnosis"
    MEDICATION_STARTED = "medication_started"
    MEDICATION_CHANGED = "medication_changed"
    MEDICATION_STOPPED = "medication_stopped"
    LAB_RESULT = "lab_result"
    VITAL_SIGN = "vital_sign"
    APPOINTMENT = "appointment"
    NOTE = "note"


class EventCategory(str, Enum):
    """Display categories used for filtering."""
    SYMPTOM = "symptom"
    CONDITION = "condition"
    MEDICATION = "medication"
    LAB = "lab"
    VITAL = "vital"
    NOTE = "note"
    APPOINTMENT = "appointment"


MEDICATION_EVENT_TYPES = (
    EventType.MEDICATION_STARTED,
    EventType.MEDICATION_CHANGED,
    EventType.MEDICATION_STOPPED,
)

MetadataValue = Union[bool, int, float, str]


class TimelineEvent(BaseModel):
    """A single event on a patient timeline."""
    
    model_config = ConfigDict(frozen=True)
    
    id: str = Field(..., description="Deterministic id derived from the source record")
    type: EventType
    category: EventCategory
    date: datetime
    title: str
    description: str
    severity: Optional[int] = None
    status: Optional[str] = None
    related_to: List[str] = Field(default_factory=list, description="Ids of related events")
    metadata: Dict[str, MetadataValue] = Field(default_factory=dict)
    
    def meta_str(self, key: str) -> Optional[str]:
        """String metadata value, or None when absent or not a string."""
        value = self.metadata.get(key)
        return value if isinstance(value, str) else None
