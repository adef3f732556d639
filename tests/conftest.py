from __future__ import annotations

from collections.abc import Iterator
from io import StringIO

import pytest

from lib_log_console.application.resolver import RESOLVER
from lib_log_console.runtime import _state


_CONSOLE_VARIABLES = (
    "CONSOLE_LEVEL",
    "CONSOLE_VERBOSE",
    "CONSOLE_OUTPUT",
    "CONSOLE_DEBUG",
    "CONSOLE_INFO",
    "CONSOLE_WARN",
    "CONSOLE_ERROR",
    "CONSOLE_FATAL",
    "NO_COLOR",
    "FORCE_COLOR",
)


@pytest.fixture(autouse=True)
def clean_console_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from the process-wide resolver, context logger, and environment."""

    for name in _CONSOLE_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    RESOLVER.clear()
    token = _state.set_logger(None)
    try:
        yield
    finally:
        _state.reset_logger(token)
        _state.set_factory(None)
        RESOLVER.clear()


@pytest.fixture
def buffer() -> StringIO:
    return StringIO()


class RecordingOutput:
    """Output double collecting entries and close calls."""

    def __init__(self) -> None:
        self.entries: list[object] = []
        self.closed = 0

    def write(self, entry: object) -> None:
        self.entries.append(entry)

    def close(self) -> None:
        self.closed += 1


@pytest.fixture
def recording_output() -> RecordingOutput:
    return RecordingOutput()
