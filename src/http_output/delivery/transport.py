"""
Module: transport.py
Description: HTTP transport for chunk delivery.

Performs the network call over plain HTTP or TLS with short
connect/read timeouts. Any completed exchange returns the response,
whatever its status code; only failures below the HTTP layer raise
TransportError. A client is opened per call and closed when it ends.

Key Components:
- TransportClient: blocking transport for synchronous hosts
- AsyncTransportClient: the same contract for cooperative hosts

Dependencies: httpx, ssl
"""

import ssl
from typing import Any, Dict, Union

import httpx

from http_output.errors import TransportError
from http_output.models.config import TimeoutConfig, TLSConfig, VerifyMode
from http_output.utils.logger import get_logger

logger = get_logger(__name__)


class _BaseTransport:

    def __init__(self, tls: TLSConfig, timeouts: TimeoutConfig):
        self.tls = tls
        self.timeout = httpx.Timeout(timeouts.read, connect=timeouts.connect)

    def connection_options(self, url: Union[str, httpx.URL]) -> Dict[str, Any]:
        """
        Describe how a connection to ``url`` would be set up.

        Returns:
            Dict with use_ssl, verify_mode, ca_file and the timeouts
        """
        use_ssl = httpx.URL(url).scheme == "https"
        return {
            "use_ssl": use_ssl,
            "verify_mode": self.tls.verify_mode if use_ssl else None,
            "ca_file": self.tls.ca_file,
            "connect_timeout": self.timeout.connect,
            "read_timeout": self.timeout.read,
        }

    def _verify(self, url: httpx.URL) -> Union[bool, ssl.SSLContext]:
        """
        Peer verification setting for httpx.

        Raises:
            TransportError: If the CA bundle cannot be loaded
        """
        if url.scheme != "https":
            return True
        if self.tls.verify_mode is VerifyMode.NONE:
            return False
        if not self.tls.ca_file:
            return True

        try:
            return ssl.create_default_context(cafile=self.tls.ca_file)
        except OSError as e:
            raise TransportError(
                f"Unable to load CA file {self.tls.ca_file}: {e}", url=str(url)
            ) from e

    @staticmethod
    def _transport_error(request: httpx.Request, error: httpx.TransportError) -> TransportError:
        logger.debug(
            "Transport failure",
            url=str(request.url),
            error=str(error),
            error_type=type(error).__name__
        )
        return TransportError(
            f"{type(error).__name__} sending to {request.url}: {error}",
            url=str(request.url)
        )


class TransportClient(_BaseTransport):
    """Blocking HTTP(S) transport."""

    def send(self, request: httpx.Request) -> httpx.Response:
        """
        Send a request and read the full response.

        Args:
            request: Prepared request

        Returns:
            Response for any completed exchange, 2xx or not

        Raises:
            TransportError: On connect, DNS, TLS or timeout failures
        """
        verify = self._verify(request.url)

        with httpx.Client(timeout=self.timeout, verify=verify) as client:
            try:
                return client.send(request)
            except httpx.TransportError as e:
                raise self._transport_error(request, e) from e


class AsyncTransportClient(_BaseTransport):
    """Non-blocking HTTP(S) transport; suspends only the calling task."""

    async def send(self, request: httpx.Request) -> httpx.Response:
        """
        Send a request and read the full response.

        Raises:
            TransportError: On connect, DNS, TLS or timeout failures
        """
        verify = self._verify(request.url)

        async with httpx.AsyncClient(timeout=self.timeout, verify=verify) as client:
            try:
                return await client.send(request)
            except httpx.TransportError as e:
                raise self._transport_error(request, e) from e
