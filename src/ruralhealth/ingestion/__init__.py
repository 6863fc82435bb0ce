"""Mock data sources for demos and tests."""

from ruralhealth.ingestion.mock_data import MockDataGenerator

__all__ = ["MockDataGenerator"]
