"""``Ok | Err`` return values.

GitHub calls fail in ordinary ways (404 on a contents lookup, 409 on a stale
blob, a 502 halfway through a listing), so ghrel returns failures instead of
raising them. Narrow with ``isinstance``::

    result = resolve_next_version(client, "octo", "repo", sha)
    if isinstance(result, Err):
        console.error(result.error.pretty())
        return
    print(result.value)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Never, TypeGuard

__all__ = ["Err", "Ok", "Result", "is_err", "is_ok"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def unwrap(self) -> T:
        return self.value

    def unwrap_or[D](self, default: D) -> T:
        return self.value

    def map_err[F](self, convert: Callable[[object], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def unwrap(self) -> Never:
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or[D](self, default: D) -> D:
        return default

    def map_err[F](self, convert: Callable[[E], F]) -> Err[F]:
        """Wrap the error in another type, e.g. ``HttpError`` into a hosting error."""
        return Err(convert(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    return isinstance(result, Err)
