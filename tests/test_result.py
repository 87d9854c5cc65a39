"""Tests for the result module."""

from __future__ import annotations

import pytest

from pitch_report.result import Err, Ok, UnwrapError


class TestOk:
    def test_flags(self) -> None:
        result = Ok(42)
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_unwrap(self) -> None:
        assert Ok(42).unwrap() == 42

    def test_unwrap_err_raises(self) -> None:
        with pytest.raises(UnwrapError):
            Ok(42).unwrap_err()


class TestErr:
    def test_flags(self) -> None:
        result = Err(ValueError("bad"))
        assert result.is_ok() is False
        assert result.is_err() is True

    def test_unwrap_raises_with_error_text(self) -> None:
        with pytest.raises(UnwrapError, match="bad"):
            Err(ValueError("bad")).unwrap()

    def test_unwrap_err(self) -> None:
        error = ValueError("bad")
        assert Err(error).unwrap_err() is error
