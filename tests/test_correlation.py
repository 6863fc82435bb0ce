"""
Tests for Symptom Correlation Engine
"""

import pytest
from datetime import datetime, timedelta

from ruralhealth.analytics.correlation import (
    MIN_COMMON_DAYS,
    calculate_correlation,
    pearson,
    process_symptom_correlation_data,
)
from ruralhealth.models.symptoms import PatientSymptomData, SymptomEntry

START = datetime(2024, 2, 1, 9, 0)


def series(symptom, severities, offset_hours=0):
    return [
        SymptomEntry(
            id=f"{symptom}-{i}",
            symptom=symptom,
            severity=severity,
            date=START + timedelta(days=i, hours=offset_hours),
        )
        for i, severity in enumerate(severities)
    ]


class TestPearson:
    """Test the raw coefficient."""

    def test_perfect_positive(self):
        assert pearson([1, 2, 3, 4], [2, 4, 6, 8]) == pytest.approx(1.0)

    def test_perfect_negative(self):
        assert pearson([1, 2, 3, 4], [8, 6, 4, 2]) == pytest.approx(-1.0)

    def test_constant_series_is_zero(self):
        assert pearson([5, 5, 5], [1, 2, 3]) == 0.0


class TestCalculateCorrelation:
    """Test correlation over shared days."""

    def test_pairs_on_calendar_day(self):
        """Test that entries pair by day regardless of time of day."""
        a = series("Headache", [1, 2, 3, 4])
        b = series("Fatigue", [2, 4, 6, 8], offset_hours=10)

        assert calculate_correlation(a, b) == pytest.approx(1.0)

    def test_too_few_common_days(self):
        """Test that fewer than the minimum shared days gives 0."""
        assert MIN_COMMON_DAYS == 3
        a = series("Headache", [1, 5])
        b = series("Fatigue", [5, 1])

        assert calculate_correlation(a, b) == 0.0

    def test_only_shared_days_count(self):
        a = series("Headache", [1, 2, 3, 9])
        b = series("Fatigue", [1, 2, 3])

        assert calculate_correlation(a, b) == pytest.approx(1.0)

    def test_last_entry_of_day_wins(self):
        """Test that a later same-day entry overrides an earlier one."""
        a = series("Headache", [3, 2, 3]) + [
            SymptomEntry(id="late", symptom="Headache", severity=1, date=START + timedelta(hours=6)),
        ]
        b = series("Fatigue", [1, 2, 3])

        assert calculate_correlation(a, b) == pytest.approx(1.0)

    def test_constant_symptom(self):
        a = series("Headache", [4, 4, 4, 4])
        b = series("Fatigue", [1, 3, 2, 5])

        assert calculate_correlation(a, b) == 0.0


class TestCorrelationMatrix:
    """Test the matrix builder."""

    @pytest.fixture
    def data(self):
        return PatientSymptomData(
            patient_id="p1",
            patient_name="Test Patient",
            symptoms={
                "Headache": series("Headache", [1, 2, 3, 4]),
                "Fatigue": series("Fatigue", [2, 4, 6, 8]),
                "Cough": series("Cough", [8, 6, 4, 2]),
            },
        )

    def test_shape_and_order(self, data):
        result = process_symptom_correlation_data(data)

        assert result.symptoms == ["Headache", "Fatigue", "Cough"]
        assert len(result.correlation_matrix) == 3
        assert all(len(row) == 3 for row in result.correlation_matrix)

    def test_diagonal_is_one(self, data):
        matrix = process_symptom_correlation_data(data).correlation_matrix

        assert [matrix[i][i] for i in range(3)] == [1.0, 1.0, 1.0]

    def test_symmetric(self, data):
        matrix = process_symptom_correlation_data(data).correlation_matrix

        for i in range(3):
            for j in range(3):
                assert matrix[i][j] == matrix[j][i]

    def test_values(self, data):
        matrix = process_symptom_correlation_data(data).correlation_matrix

        assert matrix[0][1] == pytest.approx(1.0)
        assert matrix[0][2] == pytest.approx(-1.0)
        assert all(-1.0 <= v <= 1.0 for row in matrix for v in row)

    def test_no_symptoms(self):
        data = PatientSymptomData(patient_id="p1", patient_name="Empty")
        result = process_symptom_correlation_data(data)

        assert result.symptoms == []
        assert result.correlation_matrix == []

    def test_symptom_without_entries(self):
        data = PatientSymptomData(
            patient_id="p1",
            patient_name="Test Patient",
            symptoms={"Headache": series("Headache", [1, 2, 3]), "Nausea": []},
        )

        assert process_symptom_correlation_data(data).correlation_matrix == [[1.0, 0.0], [0.0, 1.0]]
