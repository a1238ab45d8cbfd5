"""Common value objects shared by providers and the retry layer."""

import asyncio
import enum
from typing import Any, Awaitable, Optional

from backoffhttp.domain.exceptions import OperationCancelledError


class HttpCompletionOption(enum.Enum):
    """When a send operation is considered complete."""

    RESPONSE_CONTENT_READ = "response_content_read"  # body fully buffered
    RESPONSE_HEADERS_READ = "response_headers_read"  # body left to stream


class CancellationToken:
    """Cooperative cancellation signal passed down to every send attempt.

    The token may be created outside a running event loop and shared by
    several concurrent calls. Once cancelled it stays cancelled.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Requests cancellation of every operation observing this token."""
        self._event.set()

    def raise_if_cancellation_requested(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError()

    async def wait(self) -> None:
        """Suspends until cancellation is requested."""
        await self._event.wait()


async def run_cancellable(awaitable: Awaitable[Any], cancellation_token: Optional[CancellationToken] = None) -> Any:
    """Awaits `awaitable`, abandoning it if the token is cancelled first.

    Args:
        awaitable: The coroutine or future to run.
        cancellation_token: Optional token; without one this is a plain await.

    Returns:
        The result of `awaitable`. Exceptions it raises propagate unchanged.

    Raises:
        OperationCancelledError: If the token fired before `awaitable` finished.
    """
    if cancellation_token is None:
        return await awaitable

    operation = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancellation_token.wait())
    try:
        done, _ = await asyncio.wait({operation, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not operation.done():
            operation.cancel()

    if operation in done:
        return operation.result()

    # Let the abandoned operation run its cleanup before reporting.
    await asyncio.gather(operation, return_exceptions=True)
    raise OperationCancelledError()
