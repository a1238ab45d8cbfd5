"""Exceptions raised by backoffhttp.

`ServiceError` is the wrapper every provider raises for a failed call; the
retry layer inspects its inner exception to decide whether the failure is
transient.
"""

from typing import Optional


class BackoffHttpError(Exception):
    """Base class for all backoffhttp errors."""


class InvalidConfigurationError(BackoffHttpError, ValueError):
    """Raised when a retry policy is constructed with invalid values."""


class ServiceError(BackoffHttpError):
    """Raised by an HTTP provider when a service call fails.

    Attributes:
        status_code: HTTP status of the failed response, if one was received.
        inner_exception: The underlying transport error, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        inner_exception: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.inner_exception = inner_exception

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({str(self)!r}, status_code={self.status_code!r}, "
            f"inner_exception={self.inner_exception!r})"
        )


class MaximumRetryAttemptedError(BackoffHttpError):
    """Raised when every permitted attempt was throttled."""

    def __init__(self, max_attempts: int, last_exception: Optional[BaseException] = None):
        self.max_attempts = max_attempts
        self.last_exception = last_exception
        super().__init__(f"Maximum retry attempts ({max_attempts}) have been attempted.")


class OperationCancelledError(BackoffHttpError):
    """Raised when the caller's cancellation token is triggered."""

    def __init__(self, message: str = "The operation was cancelled."):
        super().__init__(message)
