"""
Module: engine.py
Description: Per-chunk delivery orchestration and error policy.

For each chunk the engine consults the rate limiter, builds the
request, sends it and classifies the outcome:

- gated by the rate limiter: dropped silently, reported as GATED
- 2xx: ACCEPTED
- non-2xx: logged as a warning and dropped, never raised
- transport failure: raised to the host when raise_on_error is set,
  otherwise logged and dropped as FAILED

Key Components:
- DeliveryEngine: blocking engine for synchronous hosts
- AsyncDeliveryEngine: same semantics with an awaitable deliver()

Dependencies: httpx, structlog
"""

import time
from collections import Counter
from typing import Callable, Dict

import httpx

from http_output.config.settings import OutputSettings, load_settings
from http_output.delivery.rate_limit import RateLimiter
from http_output.delivery.request import RequestBuilder
from http_output.delivery.transport import AsyncTransportClient, TransportClient
from http_output.errors import TransportError
from http_output.models.config import OutputConfig
from http_output.models.record import Chunk
from http_output.models.result import DeliveryOutcome, DeliveryResult
from http_output.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

# Rejection bodies are logged, truncated
MAX_LOGGED_BODY = 500


class DeliveryEngine:
    """
    Delivers chunks to one configured endpoint.

    One instance lives for the process lifetime. Its configuration is
    frozen; the rate limiter state is the only thing that changes.

    Args:
        config: Engine configuration
        transport: Transport override, mainly for tests
        clock: Monotonic clock in seconds used by the rate limiter
    """

    transport_class = TransportClient

    def __init__(
        self,
        config: OutputConfig,
        transport=None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.config = config
        self.request_builder = RequestBuilder(config)
        self.rate_limiter = RateLimiter(config.rate_limit, clock=clock)
        self.transport = transport or self.transport_class(config.tls, config.timeouts)
        self._stats: Counter = Counter()

        logger.info(
            "Delivery engine initialized",
            endpoint_url=config.endpoint.url,
            method=config.endpoint.method.value,
            serializer=config.serializer.value,
            authentication=config.auth.method.value,
            rate_limit_msec=config.rate_limit.interval_msec,
            raise_on_error=config.error_policy.raise_on_error
        )

    @classmethod
    def from_settings(cls, settings: OutputSettings, **kwargs) -> "DeliveryEngine":
        return cls(settings.to_config(), **kwargs)

    @classmethod
    def from_options(cls, **options) -> "DeliveryEngine":
        """
        Build an engine from connector options.

        Raises:
            ConfigError: If the options are invalid
        """
        settings = load_settings(**options)
        configure_logging(settings.log_level)
        return cls.from_settings(settings)

    @property
    def endpoint_url(self) -> str:
        return self.config.endpoint.url

    @property
    def stats(self) -> Dict[DeliveryOutcome, int]:
        """Number of attempts per outcome since construction."""
        return {outcome: self._stats[outcome] for outcome in DeliveryOutcome}

    def deliver(self, chunk: Chunk) -> DeliveryResult:
        """
        Attempt delivery of one chunk.

        Args:
            chunk: Records to send as a single request

        Returns:
            DeliveryResult for every chunk the host may advance past

        Raises:
            SerializationError: If the chunk cannot be serialized
            TransportError: If the request failed below the HTTP layer
                and raise_on_error is set
        """
        request = self._prepare(chunk)
        if isinstance(request, DeliveryResult):
            return request

        try:
            response = self.transport.send(request)
        except TransportError as e:
            return self._transport_failed(e)

        return self._classify(response)

    def _prepare(self, chunk: Chunk):
        """Return the request to send, or the result when nothing is sent."""
        if not chunk:
            return self._record(DeliveryResult(outcome=DeliveryOutcome.EMPTY))

        if not self.rate_limiter.should_send():
            logger.debug(
                "Chunk dropped by rate limiter",
                endpoint_url=self.endpoint_url,
                rate_limit_msec=self.rate_limiter.interval_msec,
                records=len(chunk)
            )
            return self._record(DeliveryResult(outcome=DeliveryOutcome.GATED))

        return self.request_builder.build(chunk)

    def _classify(self, response: httpx.Response) -> DeliveryResult:
        if response.is_success:
            logger.info(
                "Chunk delivered",
                endpoint_url=self.endpoint_url,
                status_code=response.status_code
            )
            return self._record(DeliveryResult(
                outcome=DeliveryOutcome.ACCEPTED,
                status_code=response.status_code
            ))

        logger.warning(
            "Endpoint rejected chunk",
            endpoint_url=self.endpoint_url,
            status_code=response.status_code,
            response=response.text[:MAX_LOGGED_BODY]
        )
        return self._record(DeliveryResult(
            outcome=DeliveryOutcome.REJECTED,
            status_code=response.status_code
        ))

    def _transport_failed(self, error: TransportError) -> DeliveryResult:
        self._stats[DeliveryOutcome.FAILED] += 1

        if self.config.error_policy.raise_on_error:
            logger.error(
                "Chunk delivery failed",
                endpoint_url=self.endpoint_url,
                error=str(error)
            )
            raise error

        logger.warning(
            "Chunk delivery failed, discarding",
            endpoint_url=self.endpoint_url,
            error=str(error)
        )
        return DeliveryResult(outcome=DeliveryOutcome.FAILED, error=str(error))

    def _record(self, result: DeliveryResult) -> DeliveryResult:
        self._stats[result.outcome] += 1
        return result


class AsyncDeliveryEngine(DeliveryEngine):
    """DeliveryEngine whose network call suspends only the calling task."""

    transport_class = AsyncTransportClient

    async def deliver(self, chunk: Chunk) -> DeliveryResult:
        """
        Attempt delivery of one chunk.

        Same outcomes and exceptions as DeliveryEngine.deliver().
        """
        request = self._prepare(chunk)
        if isinstance(request, DeliveryResult):
            return request

        try:
            response = await self.transport.send(request)
        except TransportError as e:
            return self._transport_failed(e)

        return self._classify(response)
