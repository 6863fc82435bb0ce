"""Calendar heatmap cells for recorded symptom severities."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Union

import structlog

from ruralhealth.analytics.dates import (
    TimeRange,
    day_key,
    generate_date_labels,
    get_start_date_from_range,
)
from ruralhealth.models.symptoms import PatientSymptomData

logger = structlog.get_logger(__name__)


@dataclass
class HeatmapCell:
    symptom: str
    date: str
    severity: int


@dataclass
class HeatmapData:
    """
    Sparse heatmap: only (symptom, day) pairs with a recorded entry get a
    cell. Missing cells mean "no data", not low severity.
    """
    symptoms: List[str]
    dates: List[str]
    values: List[HeatmapCell] = field(default_factory=list)


def process_symptom_heatmap_data(
    data: PatientSymptomData,
    time_range: Union[str, TimeRange],
    now: datetime,
) -> HeatmapData:
    """Heatmap cells for every symptom over the window ending at `now`."""
    start_date = get_start_date_from_range(now, time_range)
    dates = generate_date_labels(start_date, now)
    symptoms = data.symptom_names

    values: List[HeatmapCell] = []
    for symptom in symptoms:
        by_day: Dict[str, int] = {}
        for entry in data.entries_for(symptom):
            by_day.setdefault(day_key(entry.date), entry.severity)

        for label in dates:
            if label in by_day:
                values.append(HeatmapCell(symptom=symptom, date=label, severity=by_day[label]))

    logger.debug(
        "Built symptom heatmap",
        patient_id=data.patient_id,
        cells=len(values),
        days=len(dates),
    )
    return HeatmapData(symptoms=symptoms, dates=dates, values=values)
