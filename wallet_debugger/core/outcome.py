"""
Outcome of a call into the wallet.

Every external call made by the connection manager and the sign-in
handshake is wrapped so that it yields an ``Outcome`` instead of raising:

- ``SUCCESS``: the call returned a usable value
- ``SOFT_FAILURE``: the call completed but returned nothing usable
  (None or an empty sequence)
- ``HARD_FAILURE``: the call raised; the exception is kept on the outcome

Operations branch on the outcome kind and turn failures into log entries,
so no exception crosses an operation boundary.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar


T = TypeVar("T")


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    SOFT_FAILURE = "soft_failure"
    HARD_FAILURE = "hard_failure"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    kind: OutcomeKind
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(OutcomeKind.SUCCESS, value=value)

    @classmethod
    def soft_failure(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(OutcomeKind.SOFT_FAILURE, value=value)

    @classmethod
    def hard_failure(cls, error: Exception) -> "Outcome[T]":
        return cls(OutcomeKind.HARD_FAILURE, error=error)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def is_hard_failure(self) -> bool:
        return self.kind is OutcomeKind.HARD_FAILURE

    @property
    def detail(self) -> Any:
        """Diagnostic payload: the exception on hard failure, else the value."""
        return self.error if self.error is not None else self.value


def _is_usable(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple, str)):
        return len(value) > 0
    return True


def from_value(value: Optional[T]) -> Outcome[T]:
    """Classify a returned value as success or soft failure."""
    if _is_usable(value):
        return Outcome.success(value)
    return Outcome.soft_failure(value)


async def capture(
    call: Callable[[], Awaitable[T]],
    *,
    timeout: Optional[float] = None,
    require_value: bool = True,
) -> Outcome[T]:
    """Await an external call and classify how it ended.

    Args:
        call: Zero-argument callable producing the awaitable to run
        timeout: Seconds to wait before giving up (None waits forever)
        require_value: When False, any normal return counts as success
            (for calls such as a chain switch that return nothing)
    """
    try:
        if timeout is None:
            value = await call()
        else:
            value = await asyncio.wait_for(call(), timeout=timeout)
    except Exception as exc:
        return Outcome.hard_failure(exc)

    if not require_value:
        return Outcome.success(value)
    return from_value(value)


def attempt(call: Callable[[], T]) -> Outcome[T]:
    """Synchronous counterpart of ``capture`` for local steps that may raise."""
    try:
        return Outcome.success(call())
    except Exception as exc:
        return Outcome.hard_failure(exc)
