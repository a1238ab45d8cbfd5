"""backoffhttp: retry-with-backoff for outbound HTTP requests.

Wraps an HTTP provider and transparently resubmits requests that were
throttled by the remote API (HTTP 429) or rejected because the service was
temporarily unavailable (HTTP 503), doubling the wait between attempts.
"""

from backoffhttp.domain.exceptions import (
    BackoffHttpError,
    InvalidConfigurationError,
    MaximumRetryAttemptedError,
    OperationCancelledError,
    ServiceError,
)
from backoffhttp.domain.models.common import CancellationToken, HttpCompletionOption
from backoffhttp.domain.models.retry import RetryPolicy
from backoffhttp.infrastructure.http.httpx_provider import HttpxProvider
from backoffhttp.infrastructure.resilience.retrying_provider import RetryingHttpProvider
from backoffhttp.core.provider_factory import create_http_provider

__all__ = [
    "BackoffHttpError",
    "CancellationToken",
    "HttpCompletionOption",
    "HttpxProvider",
    "InvalidConfigurationError",
    "MaximumRetryAttemptedError",
    "OperationCancelledError",
    "RetryPolicy",
    "RetryingHttpProvider",
    "ServiceError",
    "create_http_provider",
]
