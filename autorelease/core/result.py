"""Result type for explicit error handling.

Every call that talks to the release store or parses its output returns a
Result instead of raising, so the workflow can decide in one place whether
a failure is fatal and which exit code it maps to.

Usage:
    match store.view_release("v1.4.0"):
        case Ok(detail):
            print(detail.target_commitish)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result holding `value`."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result holding `error`."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[E]
