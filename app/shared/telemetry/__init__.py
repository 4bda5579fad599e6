"""Logging setup and OpenTelemetry tracing for the API process."""

from app.shared.telemetry.logging import get_logger, setup_logging
from app.shared.telemetry.telemetry import TelemetryConfig, get_telemetry, set_telemetry
from app.shared.telemetry.tracing import set_span_error, traced

__all__ = [
    "TelemetryConfig",
    "get_logger",
    "get_telemetry",
    "set_span_error",
    "set_telemetry",
    "setup_logging",
    "traced",
]
