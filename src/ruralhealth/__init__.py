"""
RuralHealth Connect: Symptom Analytics Core

Turns per-patient symptom logs and medical records into chart-ready
trend series, correlation matrices, heatmap cells and a unified
clinical timeline.
"""

__version__ = "0.1.0"
__author__ = "RuralHealth Connect Team"
