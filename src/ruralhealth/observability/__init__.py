"""
RuralHealth Observability Module

Structured logging via structlog.
"""

from ruralhealth.observability.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
