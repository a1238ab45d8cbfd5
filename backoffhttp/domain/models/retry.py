"""Retry policy and failure classification value objects."""

import numbers
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from backoffhttp.domain.exceptions import InvalidConfigurationError

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_INITIAL_DELAY_S = 0.5


def _is_positive_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class RetryPolicy:
    """Immutable retry budget and backoff settings.

    Attributes:
        max_attempts: Total number of send attempts permitted per request.
        initial_delay: Wait in seconds before the first retry; doubles after each retry.
        max_delay: Optional ceiling in seconds for a single wait. None means uncapped.
        cancellable_backoff: Whether the caller's cancellation token interrupts the wait.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    initial_delay: float = DEFAULT_INITIAL_DELAY_S
    max_delay: Optional[float] = None
    cancellable_backoff: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int) or self.max_attempts <= 0:
            raise InvalidConfigurationError(
                f"Provide a retry count greater than zero (got {self.max_attempts!r})."
            )
        if not _is_positive_number(self.initial_delay):
            raise InvalidConfigurationError(
                f"Provide a delay greater than zero (got {self.initial_delay!r})."
            )
        if self.max_delay is not None and not _is_positive_number(self.max_delay):
            raise InvalidConfigurationError(
                f"Provide a maximum delay greater than zero (got {self.max_delay!r})."
            )

    def next_delay(self, current_delay: float) -> float:
        """Returns the wait that follows `current_delay`."""
        delay = current_delay * 2
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay

    def first_delay(self) -> float:
        """Returns the wait before the first retry, capped by `max_delay`."""
        if self.max_delay is not None:
            return min(self.initial_delay, self.max_delay)
        return self.initial_delay

    def delays(self) -> Iterator[float]:
        """Yields the waits between attempts, one per permitted retry."""
        delay = self.first_delay()
        for _ in range(self.max_attempts - 1):
            yield delay
            delay = self.next_delay(delay)


@dataclass(frozen=True)
class RetryableFailure:
    """A failed attempt caused by remote throttling; worth resubmitting."""

    status_code: int
    reason: str


@dataclass(frozen=True)
class FatalFailure:
    """A failed attempt that must be surfaced to the caller unchanged."""

    error: BaseException


ClassifiedFailure = Union[RetryableFailure, FatalFailure]
