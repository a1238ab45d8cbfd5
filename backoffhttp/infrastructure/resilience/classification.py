"""Classifies a failed send attempt as retryable or fatal.

Only remote throttling is retryable: a `ServiceError` whose inner exception
is an HTTP status error for 429 (Too Many Requests) or 503 (Service
Unavailable). Anything else is fatal.
"""

import httpx

from backoffhttp.domain.exceptions import ServiceError
from backoffhttp.domain.models.retry import ClassifiedFailure, FatalFailure, RetryableFailure

RETRYABLE_STATUS_CODES = frozenset({429, 503})


def classify_failure(error: BaseException) -> ClassifiedFailure:
    """Classifies the error raised by one send attempt.

    Args:
        error: The exception raised by the underlying provider.

    Returns:
        RetryableFailure for a 429/503 service error, FatalFailure(error) otherwise.
    """
    if not isinstance(error, ServiceError):
        return FatalFailure(error)

    inner = error.inner_exception
    if not isinstance(inner, httpx.HTTPStatusError):
        return FatalFailure(error)

    status_code = inner.response.status_code
    if status_code not in RETRYABLE_STATUS_CODES:
        return FatalFailure(error)

    return RetryableFailure(status_code=status_code, reason=inner.response.reason_phrase)
