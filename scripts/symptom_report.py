#!/usr/bin/env python3
"""
RuralHealth Symptom Report

Generates mock patient data and prints the analytics a dashboard would
show for one patient: trends, heatmap, correlations, timeline and
medication effects.

Usage:
    python scripts/symptom_report.py

    # Or with options
    python scripts/symptom_report.py --patient p2 --range 90days --csv
"""
import argparse
import json
import sys
from dataclasses import asdict, is_dataclass
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pydantic import BaseModel

from ruralhealth.config import get_settings
from ruralhealth.export import export_symptom_csv
from ruralhealth.ingestion import MockDataGenerator
from ruralhealth.observability import configure_logging, get_logger
from ruralhealth.service import SymptomAnalyticsService


def to_jsonable(value):
    """Convert dataclasses and pydantic models for json.dumps."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    return value


def load_patient(patient_id: str, now):
    """Mock symptom log and medical record for one patient."""
    settings = get_settings()
    generator = MockDataGenerator(
        seed=settings.mock_data.seed,
        history_days=settings.mock_data.history_days,
    )
    patients = {p.patient_id: p for p in generator.generate_patient_symptom_data(now)}
    if patient_id not in patients:
        raise SystemExit(f"Unknown patient {patient_id!r}, expected one of {', '.join(patients)}")

    data = patients[patient_id]
    return data, generator.generate_medical_record(data.patient_id, data.patient_name, now)


def build_report(service: SymptomAnalyticsService, data, record, time_range: str = None, symptom: str = None) -> dict:
    now = service.clock()
    events = service.patient_timeline(data, record)
    symptom = symptom or data.symptom_names[0]

    return {
        "patient": {"id": data.patient_id, "name": data.patient_name},
        "trends": service.symptom_trends(data, data.symptom_names, time_range, now),
        "heatmap": service.symptom_heatmap(data, time_range, now),
        "correlations": service.symptom_correlations(data),
        "timeline_events": len(events),
        "treatment_correlations": [
            {
                "medication_event": c.medication_event.id,
                "symptom": symptom,
                **asdict(c.analysis),
            }
            for c in service.treatment_correlations(events, symptom)
        ],
        "condition_correlations": service.condition_correlations(record, data),
        "medication_summaries": service.medication_summaries(record, data),
    }


def main():
    parser = argparse.ArgumentParser(description="Print a symptom analytics report for a mock patient")
    parser.add_argument("--patient", type=str, default="p1", help="Patient ID (p1, p2, p3)")
    parser.add_argument("--range", type=str, default=None, help="Time range (7days, 30days, 90days, 6months, 1year, all)")
    parser.add_argument("--symptom", type=str, default=None, help="Symptom for treatment correlations")
    parser.add_argument("--csv", action="store_true", help="Print the patient's symptom CSV instead")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(level=settings.app.log_level, json_logs=settings.app.log_json)
    logger = get_logger("symptom_report")

    service = SymptomAnalyticsService(settings)
    data, record = load_patient(args.patient, service.clock())

    if args.csv:
        print(export_symptom_csv(data), end="")
        return

    report = build_report(service, data, record, args.range, args.symptom)
    logger.info("Report built", patient_id=data.patient_id)
    print(json.dumps({k: to_jsonable(v) for k, v in report.items()}, indent=2, default=str))


if __name__ == "__main__":
    main()
