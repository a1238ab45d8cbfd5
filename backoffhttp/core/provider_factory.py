"""Composition root for the retrying HTTP provider."""

import logging
from typing import Optional

import httpx

from backoffhttp.domain.models.retry import RetryPolicy
from backoffhttp.infrastructure.config.settings import get_log_level, get_retry_policy, load_configuration
from backoffhttp.infrastructure.http.httpx_provider import HttpxProvider
from backoffhttp.infrastructure.monitoring.logger_setup import setup_logging
from backoffhttp.infrastructure.resilience.retrying_provider import EventHandler, RetryingHttpProvider

logger = logging.getLogger(__name__)


def create_http_provider(
    client: Optional[httpx.AsyncClient] = None,
    policy: Optional[RetryPolicy] = None,
    event_handler: Optional[EventHandler] = None,
    configure_logging: bool = False,
) -> RetryingHttpProvider:
    """Builds an httpx-backed provider wrapped with throttling retries.

    Args:
        client: Optional httpx client to send requests with.
        policy: Retry policy; read from configuration when omitted.
        event_handler: Optional callable receiving retry domain events.
        configure_logging: Whether to set up root logging at the configured level.

    Raises:
        InvalidConfigurationError: If the configured retry settings are invalid.
    """
    if policy is None or configure_logging:
        load_configuration()
    if configure_logging:
        setup_logging(get_log_level())
    if policy is None:
        policy = get_retry_policy()
    logger.info(f"Creating retrying HTTP provider: max_attempts={policy.max_attempts}, initial_delay={policy.initial_delay}s")
    return RetryingHttpProvider(HttpxProvider(client), policy=policy, event_handler=event_handler)
