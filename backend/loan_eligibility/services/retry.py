"""Bounded retry with three-way outcome classification for upstream calls."""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from loan_eligibility.core.enums import UpstreamOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

AbandonCheck = Callable[[], Awaitable[bool]]


@dataclass(frozen=True)
class UpstreamResult(Generic[T]):
    """
    Classified outcome of an upstream call.

    Attributes:
        outcome: SUCCESS, NOT_FOUND or UNAVAILABLE
        value: The parsed fact on success, None otherwise
        detail: Human-readable description of the failure
        attempts: Number of attempts made to reach this outcome
    """

    outcome: UpstreamOutcome
    value: Optional[T] = None
    detail: str = ""
    attempts: int = 0

    @classmethod
    def success(cls, value: T) -> "UpstreamResult[T]":
        return cls(outcome=UpstreamOutcome.SUCCESS, value=value)

    @classmethod
    def not_found(cls, detail: str = "") -> "UpstreamResult[T]":
        return cls(outcome=UpstreamOutcome.NOT_FOUND, detail=detail)

    @classmethod
    def unavailable(cls, detail: str) -> "UpstreamResult[T]":
        return cls(outcome=UpstreamOutcome.UNAVAILABLE, detail=detail)

    @property
    def is_success(self) -> bool:
        return self.outcome == UpstreamOutcome.SUCCESS


async def call_with_retry(
    operation: Callable[[], Awaitable[UpstreamResult[T]]],
    attempts: int = 3,
    delay: float = 0.25,
    should_abandon: Optional[AbandonCheck] = None,
    label: str = "upstream",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> UpstreamResult[T]:
    """
    Run a classified operation, retrying only UNAVAILABLE outcomes.

    SUCCESS and NOT_FOUND are returned immediately. UNAVAILABLE is retried
    with a fixed delay until ``attempts`` have been made, after which the
    last failure is returned. ``should_abandon`` is consulted before each
    retry so that a disconnected caller stops the loop early.

    Args:
        operation: Zero-argument coroutine factory performing one attempt
        attempts: Total number of attempts (at least one is always made)
        delay: Fixed delay in seconds between attempts
        should_abandon: Optional cooperative cancellation check
        label: Name used in log messages
        sleep: Sleep coroutine, replaceable in tests

    Returns:
        The classified result of the final attempt
    """
    attempts = max(1, attempts)
    result: UpstreamResult[T] = UpstreamResult.unavailable("no attempt made")

    for attempt in range(1, attempts + 1):
        result = replace(await operation(), attempts=attempt)

        if result.outcome != UpstreamOutcome.UNAVAILABLE:
            return result

        logger.warning(
            f"{label} unavailable on attempt {attempt}/{attempts}: {result.detail}"
        )

        if attempt == attempts:
            break

        if should_abandon is not None and await should_abandon():
            logger.info(f"{label} retries abandoned after attempt {attempt}")
            return replace(result, detail=f"request abandoned: {result.detail}")

        await sleep(delay)

    return result
