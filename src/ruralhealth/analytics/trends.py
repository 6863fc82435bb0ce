"""
Symptom Trend Series

Builds one severity series per selected symptom, aligned to a shared
calendar-day axis, for line-chart rendering.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Union

import structlog

from ruralhealth.analytics.dates import (
    TimeRange,
    day_key,
    generate_date_labels,
    get_start_date_from_range,
)
from ruralhealth.models.symptoms import PatientSymptomData, SymptomEntry

logger = structlog.get_logger(__name__)


CHART_COLORS = [
    "#f43f5e",  # rose-500
    "#3b82f6",  # blue-500
    "#10b981",  # emerald-500
    "#f59e0b",  # amber-500
    "#8b5cf6",  # violet-500
    "#ec4899",  # pink-500
    "#06b6d4",  # cyan-500
    "#84cc16",  # lime-500
    "#6366f1",  # indigo-500
    "#14b8a6",  # teal-500
]

# Appended to a hex colour for the translucent fill
BACKGROUND_ALPHA = "33"
LINE_TENSION = 0.3


@dataclass
class TrendDataset:
    """Severity series for one symptom."""
    label: str
    data: List[Optional[int]]
    border_color: str
    background_color: str
    tension: float = LINE_TENSION


@dataclass
class TrendChartData:
    labels: List[str]
    datasets: List[TrendDataset] = field(default_factory=list)


def get_chart_color(index: int) -> str:
    """Palette colour for the series at `index`, cycling past the end."""
    return CHART_COLORS[index % len(CHART_COLORS)]


def _unique_in_order(names: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(names))


def _daily_series(entries: List[SymptomEntry], labels: List[str]) -> List[Optional[int]]:
    """Severity per day label, forward-filled from the first observation on."""
    by_day: Dict[str, int] = {}
    for entry in entries:
        # first entry of the day wins
        by_day.setdefault(day_key(entry.date), entry.severity)

    series: List[Optional[int]] = []
    last_value: Optional[int] = None
    for label in labels:
        value = by_day.get(label)
        if value is not None:
            last_value = value
        series.append(last_value)
    return series


def process_symptom_trend_data(
    data: PatientSymptomData,
    selected_symptoms: Iterable[str],
    time_range: Union[str, TimeRange],
    now: datetime,
) -> TrendChartData:
    """
    Build aligned trend series for the selected symptoms.

    Entries outside `[start, now]` are ignored. Each day uses the severity
    recorded that calendar day, otherwise the last earlier value; days
    before a symptom's first observation in the window stay None.

    Args:
        data: Patient symptom log
        selected_symptoms: Symptom names, order preserved, duplicates dropped
        time_range: Named range ending at `now`
        now: Reference timestamp

    Returns:
        Date labels plus one dataset per symptom
    """
    start_date = get_start_date_from_range(now, time_range)
    labels = generate_date_labels(start_date, now)

    datasets = []
    for index, symptom in enumerate(_unique_in_order(selected_symptoms)):
        in_window = [e for e in data.entries_for(symptom) if start_date <= e.date <= now]
        in_window.sort(key=lambda e: e.date)

        color = get_chart_color(index)
        datasets.append(TrendDataset(
            label=symptom,
            data=_daily_series(in_window, labels),
            border_color=color,
            background_color=f"{color}{BACKGROUND_ALPHA}",
        ))

    logger.debug(
        "Built symptom trend series",
        patient_id=data.patient_id,
        symptoms=len(datasets),
        days=len(labels),
    )
    return TrendChartData(labels=labels, datasets=datasets)
