"""
Module: errors.py
Description: Exception hierarchy for the HTTP output engine.

Key Components:
- ConfigError: invalid configuration, raised at construction
- SerializationError: a chunk cannot be turned into a request body
- TransportError: failure below the HTTP layer (connect, DNS, TLS, timeout)

A non-2xx response is not an exception; it is reported as the
REJECTED delivery outcome.
"""

from typing import Optional


class OutputError(Exception):
    """Base class for all HTTP output errors."""


class ConfigError(OutputError):
    """Configuration is invalid. Fatal, never retried."""


class SerializationError(OutputError):
    """A chunk could not be serialized for the configured format."""


class TransportError(OutputError):
    """
    The request never completed an HTTP exchange.

    Attributes:
        url: Target URL of the failed attempt
    """

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url
