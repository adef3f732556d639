"""Ports (protocols) consumed by the application layer."""

from __future__ import annotations

from .output import DestinationPort, OutputPort
from .terminal import TerminalPort

__all__ = ["DestinationPort", "OutputPort", "TerminalPort"]
