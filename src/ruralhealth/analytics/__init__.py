"""
RuralHealth Analytics Module

Symptom analytics over in-memory patient data:
- Time range resolution and date axes
- Forward-filled trend series
- Pairwise symptom correlation
- Sparse heatmap cells
- Condition/medication symptom associations
"""

from ruralhealth.analytics.dates import (
    TimeRange,
    ALL_TIME_LOOKBACK_YEARS,
    parse_time_range,
    get_start_date_from_range,
    resolve_time_range,
    generate_date_labels,
)
from ruralhealth.analytics.trends import (
    CHART_COLORS,
    TrendDataset,
    TrendChartData,
    get_chart_color,
    process_symptom_trend_data,
)
from ruralhealth.analytics.correlation import (
    MIN_COMMON_DAYS,
    CorrelationData,
    calculate_correlation,
    process_symptom_correlation_data,
)
from ruralhealth.analytics.heatmap import (
    HeatmapCell,
    HeatmapData,
    process_symptom_heatmap_data,
)
from ruralhealth.analytics.conditions import (
    EffectDirection,
    ConditionSymptomCorrelation,
    MedicationEffectSummary,
    SymptomEffect,
    classify_change,
    classify_summary_change,
    find_condition_symptom_correlations,
    analyze_medication_effects,
)

__all__ = [
    # Dates
    "TimeRange",
    "ALL_TIME_LOOKBACK_YEARS",
    "parse_time_range",
    "get_start_date_from_range",
    "resolve_time_range",
    "generate_date_labels",
    # Trends
    "CHART_COLORS",
    "TrendDataset",
    "TrendChartData",
    "get_chart_color",
    "process_symptom_trend_data",
    # Correlation
    "MIN_COMMON_DAYS",
    "CorrelationData",
    "calculate_correlation",
    "process_symptom_correlation_data",
    # Heatmap
    "HeatmapCell",
    "HeatmapData",
    "process_symptom_heatmap_data",
    # Conditions
    "EffectDirection",
    "ConditionSymptomCorrelation",
    "MedicationEffectSummary",
    "SymptomEffect",
    "classify_change",
    "classify_summary_change",
    "find_condition_symptom_correlations",
    "analyze_medication_effects",
]
