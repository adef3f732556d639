from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from lib_log_console.domain.entries import LogEntry


def _entry(**overrides: object) -> LogEntry:
    data: dict[str, object] = {
        "severity": "info",
        "rank": 1,
        "message": "hello",
        "subject": "tests",
        "attributes": {"foo": "bar"},
        "timestamp": datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return LogEntry(**data)  # type: ignore[arg-type]


def test_entry_requires_timezone_aware_timestamp() -> None:
    with pytest.raises(ValueError, match="timezone-aware"):
        _entry(timestamp=datetime(2026, 1, 2))


def test_entry_normalises_timestamp_to_utc() -> None:
    local = datetime(2026, 1, 2, 5, 0, tzinfo=timezone(timedelta(hours=2)))
    assert _entry(timestamp=local).timestamp == datetime(2026, 1, 2, 3, 0, tzinfo=timezone.utc)


def test_entry_copies_attributes() -> None:
    attributes = {"foo": "bar"}
    entry = _entry(attributes=attributes)
    attributes["foo"] = "changed"
    assert entry.attributes == {"foo": "bar"}


def test_to_json_is_sorted_and_deterministic() -> None:
    entry = _entry()
    payload = entry.to_json()

    assert payload == entry.to_json()
    assert json.loads(payload) == {
        "time": "2026-01-02T03:04:05+00:00",
        "severity": "info",
        "message": "hello",
        "subject": "tests",
        "attributes": {"foo": "bar"},
    }
    assert list(json.loads(payload)) == sorted(json.loads(payload))


def test_to_dict_omits_empty_optional_fields() -> None:
    data = _entry(subject=None, attributes={}).to_dict()
    assert set(data) == {"time", "severity", "message"}


def test_error_is_serialised_with_backtrace() -> None:
    try:
        raise KeyError("missing")
    except KeyError as exc:
        entry = _entry(error=exc)

    data = entry.to_dict()
    assert data["error"]["kind"] == "KeyError"
    assert "Traceback" in data["error"]["backtrace"]
    assert "KeyError: 'missing'" in entry.format_error()


def test_non_json_attribute_values_fall_back_to_str() -> None:
    entry = _entry(attributes={"when": datetime(2026, 1, 1, tzinfo=timezone.utc)})
    assert json.loads(entry.to_json())["attributes"]["when"] == "2026-01-01 00:00:00+00:00"


def test_replace_returns_modified_copy() -> None:
    entry = _entry()
    changed = entry.replace(message="bye")
    assert changed.message == "bye"
    assert entry.message == "hello"
