"""Retry utilities with exponential backoff for demand source transports."""

import logging

import httpx
import structlog
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = structlog.stdlib.get_logger(__name__)

# Only transport-level failures are retried; HTTP status errors are final
TRANSIENT_ERRORS = (httpx.TransportError,)


def http_retry(
    max_attempts: int = 2,
    min_wait: float = 0.5,
    max_wait: float = 4.0,
    exceptions: tuple = TRANSIENT_ERRORS,
):
    """Retry decorator for outbound HTTP calls.

    Args:
        max_attempts: Max attempts including the first call
        min_wait: Min wait between retries (seconds)
        max_wait: Max wait between retries (seconds)
        exceptions: Exception types to retry on
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
