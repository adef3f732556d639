from __future__ import annotations

import pytest

from lib_log_console.domain.levels import DEFAULT_LEVELS, SEVERITY, SeverityModel, UnknownLevelError


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", 0),
        ("INFO", 1),
        ("Warn", 2),
        ("error", 3),
        ("FATAL", 4),
    ],
)
def test_rank_accepts_case_insensitive_names(name: str, expected: int) -> None:
    assert SEVERITY.rank(name) == expected


def test_rank_rejects_unknown_level() -> None:
    with pytest.raises(UnknownLevelError, match="Unknown log level"):
        SEVERITY.rank("verbose")


def test_unknown_level_error_is_a_value_error() -> None:
    assert issubclass(UnknownLevelError, ValueError)


@pytest.mark.parametrize("name", list(DEFAULT_LEVELS))
def test_named_constants_match_ranks(name: str) -> None:
    assert getattr(SEVERITY, name.upper()) == DEFAULT_LEVELS[name]


def test_lowercase_attribute_is_not_a_constant() -> None:
    with pytest.raises(AttributeError):
        SEVERITY.warn  # noqa: B018


def test_model_orders_names_by_rank_and_exposes_bounds() -> None:
    model = SeverityModel.from_mapping({"loud": 30, "quiet": 5, "normal": 10})

    assert model.names == ("quiet", "normal", "loud")
    assert model.minimum == 5
    assert model.maximum == 30
    assert model.silent == 31


def test_non_contiguous_custom_levels_are_supported() -> None:
    model = SeverityModel.from_mapping({"trace": 0, "notice": 15, "alert": 100})

    assert model.NOTICE == 15
    assert model.name_for(100) == "alert"
    assert model.name_for(50) is None


@pytest.mark.parametrize(
    "mapping",
    [
        {},
        {"a": 1, "b": 1},
        {"a": -1},
        {"a": 1.5},
        {"a": True},
        {"": 1},
    ],
)
def test_from_mapping_rejects_invalid_tables(mapping: dict) -> None:
    with pytest.raises(ValueError):
        SeverityModel.from_mapping(mapping)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("warn", 2),
        (" Error ", 3),
        (3, 3),
        (99, 99),
        (-1, -1),
        ("7", 7),
    ],
)
def test_coerce_accepts_names_and_integers(value: object, expected: int) -> None:
    assert SEVERITY.coerce(value) == expected  # type: ignore[arg-type]


@pytest.mark.parametrize("value", [None, 1.0, True, False, b"info", ["info"], "loud", "--5", "5-", "²", "٣", "1e3", ""])
def test_coerce_rejects_malformed_values(value: object) -> None:
    with pytest.raises(UnknownLevelError):
        SEVERITY.coerce(value)  # type: ignore[arg-type]
