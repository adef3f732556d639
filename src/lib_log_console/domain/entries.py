"""Domain entry describing a single emitted log message.

Purpose
-------
Provide an immutable, serialisable representation of what a logger hands to
its output chain once the severity gate has accepted it.

Contents
--------
* :class:`LogEntry` dataclass with dictionary/JSON helpers.
* ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer so formatting adapters (terminal, JSON lines) render
the same data without reaching back into the logger.
"""

from __future__ import annotations

import json
import traceback
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Immutable log entry travelling down an output chain.

    Attributes
    ----------
    severity:
        Level name the entry was emitted at (``"info"``, ``"warn"``...).
    rank:
        Integer rank of ``severity`` in the emitting model.
    message:
        Rendered message passed by the caller; may span several lines.
    subject:
        Optional subsystem or object the entry is about.
    attributes:
        Shallow copy of caller-supplied key/value pairs.
    timestamp:
        Time of emission, timezone-aware UTC.
    error:
        Optional exception attached by :meth:`Logger.failure` and friends.
    """

    severity: str
    rank: int
    message: str
    subject: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    error: BaseException | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "attributes", dict(self.attributes))

    def format_error(self) -> str | None:
        """Return the formatted traceback of :attr:`error`, if any."""

        if self.error is None:
            return None
        return "".join(traceback.format_exception(type(self.error), self.error, self.error.__traceback__)).rstrip("\n")

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry to a dictionary with an ISO8601 timestamp."""

        data: dict[str, Any] = {
            "time": self.timestamp.isoformat(),
            "severity": self.severity,
            "message": self.message,
        }
        if self.subject is not None:
            data["subject"] = self.subject
        if self.attributes:
            data["attributes"] = dict(self.attributes)
        if self.error is not None:
            data["error"] = {
                "kind": type(self.error).__name__,
                "message": str(self.error),
                "backtrace": self.format_error(),
            }
        return data

    def to_json(self) -> str:
        """Serialize the entry to JSON with sorted keys for deterministic output."""

        return json.dumps(self.to_dict(), sort_keys=True, default=str)

    def replace(self, **changes: Any) -> "LogEntry":
        """Return a copied entry with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogEntry"]
