"""Domain entities and value objects used by the console logging core."""

from __future__ import annotations

from .entries import LogEntry
from .levels import DEFAULT_LEVELS, SEVERITY, SeverityModel, UnknownLevelError
from .styles import Style

__all__ = [
    "DEFAULT_LEVELS",
    "LogEntry",
    "SEVERITY",
    "SeverityModel",
    "Style",
    "UnknownLevelError",
]
