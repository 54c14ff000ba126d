"""
Explicit success/failure values returned by store calls.

Repositories never raise into the service layer; they return ``Ok`` with the
value or ``Failure`` with a message, and callers branch with ``isinstance``.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    message: str


Result = Union[Ok[T], Failure]


def failure_from(error: Exception) -> Failure:
    """Build a Failure from an exception, keeping its message or type name"""
    return Failure(message=str(error) or type(error).__name__)
