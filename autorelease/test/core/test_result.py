"""Tests for autorelease.core.result module."""

import pytest

from autorelease.core.result import Err, Ok, Result


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err("odd")
    return Ok(n // 2)


def test_ok_holds_value() -> None:
    result = _half(4)
    assert isinstance(result, Ok)
    assert result.value == 2
    assert repr(result) == "Ok(2)"


def test_err_holds_error() -> None:
    result = _half(3)
    assert isinstance(result, Err)
    assert result.error == "odd"
    assert repr(result) == "Err('odd')"


def test_pattern_matching() -> None:
    match _half(3):
        case Ok(value):
            pytest.fail(f"unexpected value {value}")
        case Err(error):
            assert error == "odd"


def test_frozen() -> None:
    with pytest.raises(AttributeError):
        Ok(1).value = 2  # type: ignore[misc]
