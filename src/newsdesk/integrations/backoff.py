"""Exponential backoff around any fallible ask() capability."""

import asyncio
import time
from typing import Awaitable, Callable, Protocol

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_RETRIES = 5
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 30.0
DEFAULT_MAX_JITTER = 0.25


class AskClient(Protocol):
    """Anything that can be asked a text question and answers with text."""

    async def ask(self, text: str) -> str: ...


class BackoffCaller:
    """Retry decorator for an AskClient.

    Failed calls are retried up to ``max_retries`` times. Before retry
    number n the caller sleeps ``min(base_delay * 2**(n-1), max_delay)``
    seconds plus a uniform jitter of up to ``max_jitter`` seconds.
    Intermediate errors are logged and dropped; once retries are
    exhausted the last error propagates unchanged.

    The caller is itself an AskClient, so it can wrap (or be wrapped by)
    any other implementation.
    """

    def __init__(
        self,
        inner: AskClient,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        max_jitter: float = DEFAULT_MAX_JITTER,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the backoff caller.

        Args:
            inner: Client to call.
            max_retries: Retries after the first attempt (total calls is
                max_retries + 1).
            base_delay: Delay before the first retry, in seconds.
            max_delay: Upper bound of the exponential part of the delay.
            max_jitter: Upper bound of the random delay added on top.
            sleep: Coroutine used to wait between attempts.
        """
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")

        self.inner = inner
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.max_jitter = max_jitter
        self._sleep = sleep
        self._backoff = wait_exponential(multiplier=base_delay, min=0, max=max_delay)

    def __repr__(self) -> str:
        return (
            f"BackoffCaller(max_retries={self.max_retries}, "
            f"base_delay={self.base_delay}, max_delay={self.max_delay})"
        )

    def delay_for(self, attempt: int) -> float:
        """Delay before the retry following failed attempt ``attempt``, without jitter."""
        if attempt < 1:
            raise ValueError("attempt numbers start at 1")
        state = RetryCallState(retry_object=None, fn=None, args=(), kwargs={})
        state.attempt_number = attempt
        return self._backoff(state)

    async def ask(self, text: str) -> str:
        """Ask the wrapped client, retrying with backoff on failure.

        Args:
            text: Request payload.

        Returns:
            The first successful response.

        Raises:
            Exception: The last error of the wrapped client once
                max_retries + 1 attempts have failed.
        """
        started = time.monotonic()
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=self._backoff + wait_random(0, self.max_jitter),
            before_sleep=self._log_attempt_failed,
            sleep=self._sleep,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    return await self.inner.ask(text)
        except Exception as e:
            logger.error(
                "ask_retries_exhausted",
                attempts=retrying.statistics.get("attempt_number"),
                max_retries=self.max_retries,
                elapsed_ms_total=round((time.monotonic() - started) * 1000),
                error=str(e),
            )
            raise

    def _log_attempt_failed(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else None
        logger.warning(
            "ask_attempt_failed",
            attempt=retry_state.attempt_number,
            max_retries=self.max_retries,
            elapsed_ms_total=round(retry_state.seconds_since_start * 1000),
            delay_s=round(delay, 3) if delay is not None else None,
            error=str(error),
        )
