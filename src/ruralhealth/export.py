"""
Symptom CSV Export

Serializes symptom entries to the comma-separated layout the dashboards
download. The format is consumed by external tooling and must stay stable:

    Date,Symptom,Severity,Notes
    3/14/2024,Headache,6,"Woke up with a ""throbbing"" pain"

Dates are written M/D/YYYY, notes are always double-quoted with embedded
quotes doubled, and a missing note leaves the field empty.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Sequence

import structlog

from ruralhealth.models.symptoms import PatientSymptomData, SymptomEntry

logger = structlog.get_logger(__name__)

SINGLE_PATIENT_HEADER = "Date,Symptom,Severity,Notes"
MULTI_PATIENT_HEADER = "Patient,Date,Symptom,Severity,Notes"


def format_export_date(moment: datetime) -> str:
    return f"{moment.month}/{moment.day}/{moment.year}"


def quote_field(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _entry_fields(entry: SymptomEntry) -> List[str]:
    notes = quote_field(entry.notes) if entry.notes else ""
    return [format_export_date(entry.date), entry.symptom, str(entry.severity), notes]


def export_symptom_csv(data: PatientSymptomData) -> str:
    """All of one patient's entries, newest first."""
    entries = [e for entries in data.symptoms.values() for e in entries]
    entries.sort(key=lambda e: e.date, reverse=True)

    lines = [SINGLE_PATIENT_HEADER]
    lines.extend(",".join(_entry_fields(e)) for e in entries)

    logger.debug("Exported symptom CSV", patient_id=data.patient_id, rows=len(entries))
    return "\n".join(lines) + "\n"


def export_patients_symptom_csv(
    patients: Sequence[PatientSymptomData],
    symptoms: Optional[Iterable[str]] = None,
) -> str:
    """
    Entries for several patients, optionally limited to some symptoms.

    Rows follow patient order, then each patient's symptom order, then
    entry order.
    """
    wanted = set(symptoms) if symptoms else None

    lines = [MULTI_PATIENT_HEADER]
    for patient in patients:
        for symptom, entries in patient.symptoms.items():
            if wanted is not None and symptom not in wanted:
                continue
            for entry in entries:
                lines.append(",".join([quote_field(patient.patient_name)] + _entry_fields(entry)))

    logger.debug("Exported multi-patient symptom CSV", patients=len(patients), rows=len(lines) - 1)
    return "\n".join(lines) + "\n"
