# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Resilience utilities (retries with backoff, timeouts)."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from taskdeck.shared.config import load_config
from taskdeck.shared.errors import ApplicationError, ErrorKind, is_operational_error
from taskdeck.shared.logging import logger

T = TypeVar("T")

RetryObserver = Callable[[int, BaseException], None]

# Timed-out operations keep running; hold a reference until they finish.
_ORPHANS: set[asyncio.Future] = set()


@dataclass(frozen=True, slots=True)
class RetryOptions:
    max_retries: int = 3
    initial_delay: float = 1.0
    max_delay: float = 10.0
    on_retry: RetryObserver | None = None
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("retry delays must be non-negative")

    @classmethod
    def from_config(cls, on_retry: RetryObserver | None = None) -> RetryOptions:
        cfg = load_config().resilience
        return cls(
            max_retries=cfg.max_retries,
            initial_delay=cfg.initial_delay,
            max_delay=cfg.max_delay,
            on_retry=on_retry,
        )


def backoff_delay(attempt: int, initial_delay: float, max_delay: float) -> float:
    """Delay after the failed attempt with 0-based index ``attempt``."""
    return min(initial_delay * 2**attempt, max_delay)


def is_retryable(error: BaseException) -> bool:
    """Operational errors are not transient, except network failures."""
    if not isinstance(error, Exception):
        return False
    if is_operational_error(error):
        return error.kind is ErrorKind.NETWORK  # type: ignore[union-attr]
    return True


async def with_retry(  # noqa: UP047
    operation: Callable[[], Awaitable[T]],
    options: RetryOptions | None = None,
) -> T:
    """Run ``operation`` with exponential backoff between failed attempts."""

    options = options or RetryOptions.from_config()
    name = getattr(operation, "__name__", repr(operation))

    def _before_sleep(state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        logger.warning(
            f"resilience: attempt={state.attempt_number} func={name} failed "
            f"({type(error).__name__}: {error}); retrying in {state.next_action.sleep:.2f}s"
        )
        if options.on_retry is not None and error is not None:
            options.on_retry(state.attempt_number, error)

    retrying = AsyncRetrying(
        stop=stop_after_attempt(options.max_retries),
        wait=wait_exponential(
            multiplier=options.initial_delay,
            min=0,
            max=options.max_delay,
        ),
        retry=retry_if_exception(is_retryable),
        before_sleep=_before_sleep,
        sleep=options.sleep,
        reraise=True,
    )

    async for attempt in retrying:
        with attempt:
            logger.debug(f"resilience: attempt={attempt.retry_state.attempt_number} func={name}")
            return await operation()

    raise RuntimeError("resilience: reached unexpected branch")


def _forget_orphan(future: asyncio.Future) -> None:
    _ORPHANS.discard(future)
    if future.cancelled():
        logger.debug("resilience: orphaned operation cancelled")
        return
    error = future.exception()
    if error is not None:
        logger.debug(f"resilience: orphaned operation failed after timeout: {error!r}")
    else:
        logger.debug("resilience: orphaned operation completed after timeout")


async def with_timeout(  # noqa: UP047
    operation: Awaitable[T],
    timeout: float | None = None,
    message: str | None = None,
) -> T:
    """Race ``operation`` against a timer without cancelling the loser.

    When the timer wins a TIMEOUT error is raised while the operation keeps
    running unobserved; its outcome is only logged.
    """

    timeout = timeout if timeout is not None else load_config().resilience.default_timeout
    future = asyncio.ensure_future(operation)
    try:
        return await asyncio.wait_for(asyncio.shield(future), timeout=timeout)
    except TimeoutError as exc:
        if future.done():
            return future.result()
        _ORPHANS.add(future)
        future.add_done_callback(_forget_orphan)
        logger.warning(f"resilience: operation timed out after {timeout:.2f}s")
        raise ApplicationError.of(ErrorKind.TIMEOUT, message) from exc


__all__ = [
    "RetryOptions",
    "backoff_delay",
    "is_retryable",
    "with_retry",
    "with_timeout",
]
