"""Adapter implementations for the console logging ports."""

from __future__ import annotations

from .destination import StreamDestination
from .output import FailureIsolatingOutput, SerializedOutput, TerminalOutput, build_output
from .terminal import Text, XTerm, for_destination

__all__ = [
    "FailureIsolatingOutput",
    "SerializedOutput",
    "StreamDestination",
    "TerminalOutput",
    "Text",
    "XTerm",
    "build_output",
    "for_destination",
]
