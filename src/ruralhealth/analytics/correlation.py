"""
Symptom Correlation Engine

Pairwise Pearson correlation between symptom severity series, paired on
the calendar days both symptoms were recorded.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence

import structlog

from ruralhealth.analytics.dates import day_key
from ruralhealth.models.symptoms import PatientSymptomData, SymptomEntry

logger = structlog.get_logger(__name__)

# Pairs observed together on fewer days than this correlate as 0
MIN_COMMON_DAYS = 3


@dataclass
class CorrelationData:
    """Symptom names and the square matrix indexed by them."""
    symptoms: List[str]
    correlation_matrix: List[List[float]]


def _severity_by_day(entries: Sequence[SymptomEntry]) -> Dict[str, int]:
    # later entries on the same day overwrite earlier ones
    return {day_key(entry.date): entry.severity for entry in entries}


def pearson(values_a: Sequence[float], values_b: Sequence[float]) -> float:
    """Pearson coefficient of two equal-length series; 0 when either is constant."""
    n = len(values_a)
    mean_a = sum(values_a) / n
    mean_b = sum(values_b) / n

    numerator = 0.0
    sum_sq_a = 0.0
    sum_sq_b = 0.0
    for a, b in zip(values_a, values_b):
        diff_a = a - mean_a
        diff_b = b - mean_b
        numerator += diff_a * diff_b
        sum_sq_a += diff_a * diff_a
        sum_sq_b += diff_b * diff_b

    denominator = math.sqrt(sum_sq_a * sum_sq_b)
    return 0.0 if denominator == 0 else numerator / denominator


def calculate_correlation(entries_a: Sequence[SymptomEntry], entries_b: Sequence[SymptomEntry]) -> float:
    """
    Correlation of two symptoms over the days both were recorded.

    Returns 0 when they share fewer than MIN_COMMON_DAYS days.
    """
    map_a = _severity_by_day(entries_a)
    map_b = _severity_by_day(entries_b)

    common_days = [day for day in map_a if day in map_b]
    if len(common_days) < MIN_COMMON_DAYS:
        return 0.0

    return pearson(
        [map_a[day] for day in common_days],
        [map_b[day] for day in common_days],
    )


def process_symptom_correlation_data(data: PatientSymptomData) -> CorrelationData:
    """
    Build the symptom correlation matrix for a patient.

    The diagonal is 1; each unordered pair is computed once and mirrored,
    so the matrix is symmetric.
    """
    symptoms = data.symptom_names
    size = len(symptoms)
    matrix = [[0.0] * size for _ in range(size)]

    for i in range(size):
        matrix[i][i] = 1.0
        for j in range(i + 1, size):
            value = calculate_correlation(
                data.entries_for(symptoms[i]),
                data.entries_for(symptoms[j]),
            )
            matrix[i][j] = value
            matrix[j][i] = value

    logger.debug("Computed symptom correlations", patient_id=data.patient_id, symptoms=size)
    return CorrelationData(symptoms=symptoms, correlation_matrix=matrix)
