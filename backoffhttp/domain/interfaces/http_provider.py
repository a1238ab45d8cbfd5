"""Interface for HTTP providers.

A provider sends one request and returns one response, or raises. Providers
are stackable: a decorating provider exposes the same `send` signature as
the one it wraps.
"""

import abc
from typing import Optional

import httpx

from ..models.common import CancellationToken, HttpCompletionOption


class HttpProvider(abc.ABC):
    """Abstract Base Class for sending HTTP requests."""

    @abc.abstractmethod
    async def send(
        self,
        request: httpx.Request,
        completion_option: HttpCompletionOption = HttpCompletionOption.RESPONSE_CONTENT_READ,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> httpx.Response:
        """Sends a request asynchronously.

        Args:
            request: The fully-formed outbound request.
            completion_option: Whether to buffer the body or leave it to stream.
            cancellation_token: Optional token observed while the request is in flight.

        Returns:
            The response received for a successful call.

        Raises:
            ServiceError: If the call failed.
            OperationCancelledError: If the token was cancelled.
        """
        pass

    @abc.abstractmethod
    async def aclose(self) -> None:
        """Releases any resources held by the provider."""
        pass

    async def __aenter__(self) -> "HttpProvider":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
