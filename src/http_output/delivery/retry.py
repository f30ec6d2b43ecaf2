"""
Module: retry.py
Description: Retry helper for hosts without their own flush retry.

The engine never retries; a propagated TransportError hands the chunk
back to the host. Hosts that have no buffering layer can wrap deliver()
here to retry transport failures with exponential backoff. Other errors
(serialization, configuration) are not retried.
"""

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from http_output.errors import TransportError
from http_output.models.record import Chunk
from http_output.models.result import DeliveryResult
from http_output.utils.logger import get_logger

logger = get_logger(__name__)


def _log_retry(retry_state: RetryCallState) -> None:
    logger.info(
        "Retrying chunk delivery",
        attempt=retry_state.attempt_number,
        sleep_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
        error=str(retry_state.outcome.exception()) if retry_state.outcome else None
    )


def deliver_with_retry(
    engine,
    chunk: Chunk,
    attempts: int = 5,
    min_wait: float = 1,
    max_wait: float = 30
) -> DeliveryResult:
    """
    Deliver a chunk, retrying transport failures.

    Each retry is a new delivery attempt and goes through the engine's
    rate limiter, so a retry inside the interval is gated.

    Args:
        engine: DeliveryEngine with raise_on_error set
        chunk: Records to deliver
        attempts: Maximum number of attempts
        min_wait: Smallest backoff in seconds
        max_wait: Largest backoff in seconds

    Returns:
        Result of the first attempt that did not raise

    Raises:
        TransportError: If every attempt failed
    """
    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(TransportError),
        before_sleep=_log_retry,
        reraise=True
    )
    return retrying(engine.deliver, chunk)
