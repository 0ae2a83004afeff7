"""Telemetry helpers (logging setup)."""

from taskflow.shared.telemetry.logging import RequestIdLogFilter, setup_logging

__all__ = ["RequestIdLogFilter", "setup_logging"]
