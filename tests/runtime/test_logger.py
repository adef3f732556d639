from __future__ import annotations

import gc
import json
import sys
from io import StringIO
from types import SimpleNamespace

import pytest

from lib_log_console.adapters.output import FailureIsolatingOutput, build_output
from lib_log_console.application.resolver import RESOLVER
from lib_log_console.domain.entries import LogEntry
from lib_log_console.domain.levels import SEVERITY, UnknownLevelError
from lib_log_console.runtime.logger import Logger


def _flags(**values: int) -> SimpleNamespace:
    defaults = {"debug": 0, "dev_mode": False, "quiet": 0, "verbose": 0}
    defaults.update(values)
    return SimpleNamespace(**defaults)


def test_output_is_wrapped_in_failure_isolation(recording_output) -> None:
    logger = Logger(recording_output)
    assert isinstance(logger.output, FailureIsolatingOutput)
    assert logger.output.inner is recording_output


def test_suppressed_levels_write_nothing(buffer: StringIO) -> None:
    logger = Logger(build_output(buffer, env={}), level="warn")

    assert logger.info("hidden") is False
    assert buffer.getvalue() == ""

    assert logger.error("shown") is True
    assert "shown" in buffer.getvalue()


def test_entry_is_not_built_when_suppressed(recording_output, monkeypatch: pytest.MonkeyPatch) -> None:
    built: list[str] = []
    original = LogEntry.__post_init__

    def tracking_post_init(self: LogEntry) -> None:
        built.append(self.message)
        original(self)

    monkeypatch.setattr(LogEntry, "__post_init__", tracking_post_init)
    Logger(recording_output, level="error").debug("never built")

    assert built == []


def test_entry_carries_subject_attributes_and_rank(recording_output) -> None:
    logger = Logger(recording_output, level="debug")
    logger.warn("slow query", subject="db", duration=1.5)

    entry = recording_output.entries[0]
    assert entry.severity == "warn"
    assert entry.rank == SEVERITY.WARN
    assert entry.subject == "db"
    assert entry.attributes == {"duration": 1.5}


def test_name_is_default_subject(recording_output) -> None:
    Logger(recording_output, name="cache").info("warm")
    assert recording_output.entries[0].subject == "cache"


def test_integer_levels_are_accepted(recording_output) -> None:
    logger = Logger(recording_output)
    assert logger.log(SEVERITY.ERROR, "by rank") is True
    assert recording_output.entries[0].severity == "error"


def test_unknown_level_raises(recording_output) -> None:
    with pytest.raises(UnknownLevelError):
        Logger(recording_output).log("loud", "nope")


def test_exception_as_message_attaches_error(recording_output) -> None:
    logger = Logger(recording_output)
    try:
        raise ValueError("bad input")
    except ValueError as exc:
        logger.error(exc)

    entry = recording_output.entries[0]
    assert entry.message == "bad input"
    assert isinstance(entry.error, ValueError)
    assert "Traceback" in entry.format_error()


def test_failure_logs_at_error_with_traceback(recording_output) -> None:
    logger = Logger(recording_output)
    try:
        raise RuntimeError("boom")
    except RuntimeError as exc:
        assert logger.failure("job crashed", exc, job=7) is True

    entry = recording_output.entries[0]
    assert entry.severity == "error"
    assert entry.message == "job crashed"
    assert entry.attributes == {"job": 7}
    assert entry.error is not None


def test_progress_reports_through_logger(recording_output) -> None:
    logger = Logger(recording_output)
    progress = logger.progress("import", 2, minimum_output_duration=0)
    progress.increment().increment()

    assert [entry.message for entry in recording_output.entries] == [
        "1/2 completed (50.0%)",
        "2/2 completed (100.0%)",
    ]
    assert recording_output.entries[-1].subject == "import"


def test_broken_stream_never_reaches_caller() -> None:
    stream = StringIO()
    notices = StringIO()
    logger = Logger(build_output(stream, env={}), fallback=notices)
    stream.close()

    assert logger.info("into the void") is True
    assert logger.info("still fine") is True
    assert notices.getvalue().count("\n") == 1


def test_diagnostic_hook_is_passed_to_failure_layer() -> None:
    events: list[str] = []
    stream = StringIO()
    logger = Logger(build_output(stream, env={}), fallback=StringIO(), diagnostic=lambda name, payload: events.append(name))
    stream.close()

    logger.info("lost")

    assert events == ["output_degraded"]


def test_close_releases_chain_once(recording_output) -> None:
    logger = Logger(recording_output)
    logger.close()
    logger.close()
    assert recording_output.closed == 1


def test_derived_logger_does_not_close_shared_chain(recording_output) -> None:
    logger = Logger(recording_output)
    derived = logger.with_(name="child", level="error")

    derived.close()
    assert recording_output.closed == 0
    assert derived.output is logger.output

    logger.close()
    assert recording_output.closed == 1


def test_derived_logger_keeps_chain_open_after_owner_is_collected(buffer: StringIO) -> None:
    derived = Logger(build_output(buffer, env={}, output_format="text")).with_(name="db")
    gc.collect()

    assert derived.info("still here") is True
    assert "still here" in buffer.getvalue()


def test_chain_is_released_once_owner_and_derived_loggers_are_gone(recording_output) -> None:
    derived = Logger(recording_output).with_(name="db").with_(level="debug")
    gc.collect()
    assert recording_output.closed == 0

    del derived
    gc.collect()
    assert recording_output.closed == 1


def test_context_manager_closes(recording_output) -> None:
    with Logger(recording_output) as logger:
        logger.info("inside")
    assert recording_output.closed == 1


def test_collected_logger_releases_chain(recording_output) -> None:
    logger = Logger(recording_output)
    logger.info("bye")
    del logger
    gc.collect()
    assert recording_output.closed == 1


def test_writes_after_close_are_dropped(recording_output) -> None:
    logger = Logger(recording_output)
    logger.close()
    logger.info("late")
    assert recording_output.entries == []


def test_verbose_toggle_reaches_terminal_output(buffer: StringIO) -> None:
    logger = Logger(build_output(buffer, env={}))
    logger.verbose()
    logger.info("detailed")
    assert "[pid=" in buffer.getvalue()


def test_default_log_level_prefers_environment() -> None:
    assert Logger.default_log_level({"CONSOLE_LEVEL": "error"}) == SEVERITY.ERROR
    assert Logger.default_log_level({"CONSOLE_LEVEL": "1"}) == SEVERITY.INFO


def test_malformed_environment_level_raises() -> None:
    with pytest.raises(UnknownLevelError):
        Logger.default_log_level({"CONSOLE_LEVEL": "chatty"})


@pytest.mark.parametrize(
    "flags, expected",
    [
        (_flags(), SEVERITY.INFO),
        (_flags(debug=1), SEVERITY.DEBUG),
        (_flags(dev_mode=True), SEVERITY.DEBUG),
        (_flags(quiet=1), SEVERITY.WARN),
    ],
)
def test_default_log_level_follows_interpreter_flags(monkeypatch: pytest.MonkeyPatch, flags: SimpleNamespace, expected: int) -> None:
    monkeypatch.setattr(sys, "flags", flags)
    assert Logger.default_log_level({}) == expected


def test_verbose_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "flags", _flags())
    assert Logger.is_verbose_default({}) is False
    assert Logger.is_verbose_default({"CONSOLE_VERBOSE": "true"}) is True
    monkeypatch.setattr(sys, "flags", _flags(verbose=1))
    assert Logger.is_verbose_default({}) is True
    assert Logger.is_verbose_default({"CONSOLE_VERBOSE": "0"}) is False


def test_default_logger_reads_environment(buffer: StringIO) -> None:
    env = {"CONSOLE_LEVEL": "warn", "CONSOLE_OUTPUT": "json", "CONSOLE_VERBOSE": "1"}
    logger = Logger.default_logger(buffer, env)

    assert logger.threshold() == SEVERITY.WARN
    assert logger.is_verbose() is True
    logger.info("hidden")
    logger.warn("visible")

    lines = buffer.getvalue().splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["visible"]


def test_default_logger_registers_subsystems_and_fallback(buffer: StringIO) -> None:
    logger = Logger.default_logger(buffer, {"CONSOLE_LEVEL": "error", "CONSOLE_DEBUG": "db, cache.redis"})

    assert RESOLVER.fallback is logger
    assert RESOLVER.resolve("db") == SEVERITY.DEBUG
    assert RESOLVER.resolve("cache.redis.pool") == SEVERITY.DEBUG
    assert RESOLVER.resolve("cache") is None

    derived = RESOLVER.logger_for("db.migrations")
    assert derived is not None
    assert derived.threshold() == SEVERITY.DEBUG
    assert derived.output is logger.output
    assert derived.debug("shown") is True
    assert logger.debug("hidden") is False


def test_explicit_arguments_beat_environment(buffer: StringIO) -> None:
    logger = Logger.default_logger(buffer, {"CONSOLE_LEVEL": "fatal"}, level="debug", output_format="text")
    assert logger.threshold() == SEVERITY.DEBUG
    logger.debug("plain")
    assert "plain" in buffer.getvalue()


def test_later_default_loggers_keep_runtime_registrations(buffer: StringIO) -> None:
    env = {"CONSOLE_DEBUG": "db"}
    Logger.default_logger(buffer, env)
    RESOLVER.register("db", "error")

    Logger.default_logger(buffer, env)

    assert RESOLVER.resolve("db") == SEVERITY.ERROR
