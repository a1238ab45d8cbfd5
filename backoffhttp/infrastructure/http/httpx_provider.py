"""HTTP provider backed by httpx.AsyncClient.

Every non-success response and every transport failure is raised as a
`ServiceError` wrapping the httpx error, so callers (and the retry layer)
see one failure shape regardless of what went wrong.
"""

import logging
from typing import Optional

import httpx

from backoffhttp.domain.exceptions import ServiceError
from backoffhttp.domain.interfaces.http_provider import HttpProvider
from backoffhttp.domain.models.common import CancellationToken, HttpCompletionOption, run_cancellable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 100.0


class HttpxProvider(HttpProvider):
    """Sends requests with an httpx.AsyncClient."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout_s: float = DEFAULT_TIMEOUT_S):
        """Initializes the provider.

        Args:
            client: Optional preconfigured client. It is not closed by `aclose()`.
            timeout_s: Timeout for the client created when none is supplied.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    async def send(
        self,
        request: httpx.Request,
        completion_option: HttpCompletionOption = HttpCompletionOption.RESPONSE_CONTENT_READ,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> httpx.Response:
        if cancellation_token is not None:
            cancellation_token.raise_if_cancellation_requested()
        return await run_cancellable(self._send(request, completion_option), cancellation_token)

    async def _send(self, request: httpx.Request, completion_option: HttpCompletionOption) -> httpx.Response:
        stream = completion_option is HttpCompletionOption.RESPONSE_HEADERS_READ
        try:
            response = await self._client.send(request, stream=stream)
        except httpx.TransportError as e:
            logger.debug(f"Transport error sending {request.method} {request.url}: {e!r}")
            raise ServiceError(
                f"An error occurred sending the request {request.method} {request.url}.",
                inner_exception=e,
            ) from e

        if not response.is_error:
            return response

        # Buffer the error body so it is available on the raised exception.
        if stream:
            try:
                await response.aread()
            finally:
                await response.aclose()
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ServiceError(
                f"{request.method} {request.url} failed with status {response.status_code} "
                f"{response.reason_phrase}.",
                status_code=response.status_code,
                inner_exception=e,
            ) from e
        return response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
