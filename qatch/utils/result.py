"""Lightweight Result types (Ok/Err) used for parse and validation outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeGuard, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[E]]


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> TypeGuard[Err[E]]:
    return isinstance(result, Err)


def unwrap(result: Result[T, E]) -> T:
    """Return the Ok value or raise the carried error."""
    if isinstance(result, Ok):
        return result.value
    raise result.error


def error_of(result: Result[T, E]) -> Optional[E]:
    if isinstance(result, Err):
        return result.error
    return None
