"""Result type for failures the caller is expected to report, not raise.

The plot selectors return ``Result[Selection, SelectionError]`` so that an
unknown player name or a thin sample becomes a message on the console instead
of a traceback.

Usage:
    result = select_pitch_locations(frame, "Cole, Gerrit")
    if result.is_ok():
        plot_pitch_locations(result.unwrap(), path)
    else:
        print(result.unwrap_err())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, final

T = TypeVar("T")
E = TypeVar("E", bound=Exception)
_T = TypeVar("_T")


class UnwrapError(Exception):
    """Raised when unwrap() is called on an Err or unwrap_err() on an Ok."""


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result."""

    _value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_err(self) -> Exception:
        raise UnwrapError("Called unwrap_err on Ok value")


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result carrying the error to report."""

    _error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> _T:  # noqa: UP049 # pyright: ignore[reportInvalidTypeVarUse]
        raise UnwrapError(f"Called unwrap on Err value: {self._error}")

    def unwrap_err(self) -> E:
        return self._error


Result = Ok[T] | Err[E]
