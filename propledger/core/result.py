"""Result[T, E]: errors travel as values through the registry.

Ok[T] carries a success value; Err[E] carries a RegistryError (or a plain
string for configuration parsing). Registry operations never raise for
expected failures: a missing record or a foreign caller is an Err, not an
exception. Callers branch with match/case.

Supports: .unwrap.
Free function: unwrap (tests and the invocation boundary only).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NoReturn, final


@final
@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success variant of Result."""

    value: T

    def unwrap(self) -> T:
        return self.value


@final
@dataclass(frozen=True, slots=True)
class Err[E]:
    """Error variant of Result."""

    error: E

    def unwrap(self) -> NoReturn:
        """Raise RuntimeError; there is no value to return."""
        raise RuntimeError(f"Called unwrap on Err: {self.error}")


type Result[T, E] = Ok[T] | Err[E]


def unwrap[T](result: Ok[T] | Err[Any]) -> T:
    """Extract the Ok value or raise RuntimeError. Test/boundary code only."""
    if isinstance(result, Ok):
        return result.value
    if isinstance(result, Err):
        raise RuntimeError(f"unwrap on Err: {result.error}")
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")
