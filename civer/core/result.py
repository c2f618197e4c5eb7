"""Result type for explicit error handling.

Every resolution step returns either ``Ok(value)`` or ``Err(error)`` instead of
raising, so a failure can be reported exactly once by the caller.

Usage:
    match parse_tag(tag):
        case Ok(version):
            console.info(f"parsed {version}")
        case Err(error):
            console.error(error.pretty())
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result.

    Attributes:
        error: The error payload.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
