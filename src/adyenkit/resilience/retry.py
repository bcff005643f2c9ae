"""
Retry Strategies using Tenacity.

Bounded retry with exponential backoff for Adyen API calls. Attempts within
one call are strictly sequential; the sleep between them is injectable so
tests can simulate elapsed time.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from adyenkit.core.exceptions import AdyenError
from adyenkit.core.logging import get_logger

SleepFunc = Callable[[float], Awaitable[Any]]

_logger = get_logger("retry")


def is_transient_error(exception: BaseException) -> bool:
    """Network failures and 5xx responses are transient; everything else is final."""
    return isinstance(exception, AdyenError) and exception.is_transient()


@dataclass(frozen=True)
class RetryPolicy:
    """Retry limits for one call: ``max_retries + 1`` attempts in total."""

    max_retries: int = 2
    base_backoff: float = 0.1

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Delay applied after failed attempt ``attempt`` (1-based)."""
        return self.base_backoff * 2 ** (attempt - 1)

    def retrying(self, sleep: SleepFunc = asyncio.sleep) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception(is_transient_error),
            wait=wait_exponential(multiplier=self.base_backoff, exp_base=2),
            stop=stop_after_attempt(self.max_attempts),
            sleep=sleep,
            reraise=True,
            before_sleep=_log_before_sleep,
        )


def _log_before_sleep(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    _logger.warning(
        f"Retrying in {delay:.3f}s (attempt {retry_state.attempt_number} failed: {exc})"
    )


async def execute_with_retry(
    func: Callable[[int], Awaitable[Any]],
    policy: RetryPolicy,
    sleep: SleepFunc = asyncio.sleep,
) -> Any:
    """
    Execute ``func(attempt_number)`` under ``policy``.

    The error that ends the loop (non-transient, or the last transient one
    once attempts are exhausted) is re-raised with ``attempts`` set.
    """
    attempt_number = 0
    try:
        async for attempt in policy.retrying(sleep=sleep):
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                return await func(attempt_number)
    except AdyenError as e:
        e.attempts = attempt_number
        raise
