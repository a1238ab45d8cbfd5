"""HTTP provider that retries throttled requests with exponential backoff.

Wraps another `HttpProvider` and exposes the same `send` signature. A
request that fails with 429 or 503 is resubmitted unchanged after waiting
`initial_delay`, then twice that, and so on, until it succeeds, fails for
another reason, or the retry budget runs out.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

import httpx

from backoffhttp.domain.events.retry_events import (
    DomainEvent,
    RetryBudgetExhausted,
    RetryScheduled,
    SendAttemptStarted,
    SendFailed,
    SendSucceeded,
)
from backoffhttp.domain.exceptions import MaximumRetryAttemptedError, OperationCancelledError, ServiceError
from backoffhttp.domain.interfaces.http_provider import HttpProvider
from backoffhttp.domain.models.common import CancellationToken, HttpCompletionOption, run_cancellable
from backoffhttp.domain.models.retry import FatalFailure, RetryPolicy
from backoffhttp.infrastructure.resilience.classification import classify_failure

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]
SleepFunc = Callable[[float], Awaitable[None]]


def log_event(event: DomainEvent) -> None:
    """Default event handler."""
    logger.debug(f"EVENT: {event}")


class RetryingHttpProvider(HttpProvider):
    """Retries 429/503 failures of the wrapped provider."""

    def __init__(
        self,
        provider: HttpProvider,
        policy: Optional[RetryPolicy] = None,
        event_handler: Optional[EventHandler] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """Initializes the RetryingHttpProvider.

        Args:
            provider: The provider that performs each attempt.
            policy: Retry budget and backoff settings (defaults: 10 attempts, 0.5s).
            event_handler: Callable receiving domain events for each attempt.
            sleep: Coroutine function used to wait between attempts.
        """
        self._provider = provider
        self.policy = policy or RetryPolicy()
        self._event_handler = event_handler or log_event
        self._sleep = sleep

        logger.debug(
            f"RetryingHttpProvider initialized: max_attempts={self.policy.max_attempts}, "
            f"initial_delay={self.policy.initial_delay}s, max_delay={self.policy.max_delay}, "
            f"cancellable_backoff={self.policy.cancellable_backoff}"
        )

    async def send(
        self,
        request: httpx.Request,
        completion_option: HttpCompletionOption = HttpCompletionOption.RESPONSE_CONTENT_READ,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> httpx.Response:
        """Sends `request`, retrying while the remote API throttles it.

        Returns:
            The response of the first successful attempt.

        Raises:
            MaximumRetryAttemptedError: If all `policy.max_attempts` attempts were throttled.
            OperationCancelledError: If the token was cancelled.
            Exception: Any non-throttling failure of the wrapped provider, unchanged.
        """
        method, url = request.method, str(request.url)
        attempts_made = 0
        schedule = self.policy.delays()
        last_error: Optional[BaseException] = None

        while attempts_made < self.policy.max_attempts:
            attempt_number = attempts_made + 1
            self._event_handler(SendAttemptStarted(method=method, url=url, attempt_number=attempt_number))
            start_time = time.perf_counter()
            try:
                response = await self._provider.send(request, completion_option, cancellation_token)
            except OperationCancelledError:
                raise
            except Exception as e:
                outcome = classify_failure(e)
                if isinstance(outcome, FatalFailure):
                    detail = e.inner_exception if isinstance(e, ServiceError) and e.inner_exception else e
                    logger.error(
                        f"Non-retryable error sending {method} {url} on attempt {attempt_number}: {detail!r}",
                        exc_info=True,
                    )
                    self._event_handler(SendFailed(
                        method=method, url=url, attempt_number=attempt_number,
                        error_type=type(e).__name__, error_message=str(e),
                    ))
                    raise

                last_error = e
                attempts_made += 1
                if attempts_made >= self.policy.max_attempts:
                    break

                current_delay = next(schedule)
                logger.warning(
                    f"Request {method} {url} throttled with status {outcome.status_code} "
                    f"({attempt_number}/{self.policy.max_attempts}). "
                    f"Retrying in {current_delay * 1000:.0f} ms."
                )
                self._event_handler(RetryScheduled(
                    method=method, url=url, attempt_number=attempt_number,
                    delay_seconds=current_delay, status_code=outcome.status_code,
                ))
                await self._backoff(current_delay, cancellation_token)
                continue

            latency_ms = (time.perf_counter() - start_time) * 1000
            self._event_handler(SendSucceeded(
                method=method, url=url, attempt_number=attempt_number,
                latency_ms=latency_ms, status_code=response.status_code,
            ))
            return response

        logger.error(f"Max retry attempts ({self.policy.max_attempts}) reached for {method} {url}. Last error: {last_error}")
        self._event_handler(RetryBudgetExhausted(method=method, url=url, max_attempts=self.policy.max_attempts))
        raise MaximumRetryAttemptedError(self.policy.max_attempts, last_error) from last_error

    async def _backoff(self, delay: float, cancellation_token: Optional[CancellationToken]) -> None:
        if cancellation_token is None or not self.policy.cancellable_backoff:
            await self._sleep(delay)
            return
        cancellation_token.raise_if_cancellation_requested()
        await run_cancellable(self._sleep(delay), cancellation_token)

    async def aclose(self) -> None:
        await self._provider.aclose()
