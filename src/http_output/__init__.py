"""
Package: http_output
Description: HTTP delivery engine for a log/event shipping connector.

Receives chunks of records from a host pipeline, serializes them and
delivers them to a configured HTTP(S) endpoint, subject to
authentication, rate limiting and an error-propagation policy.
"""

from http_output.config.settings import OutputSettings, load_settings
from http_output.delivery.engine import AsyncDeliveryEngine, DeliveryEngine
from http_output.errors import (
    ConfigError,
    OutputError,
    SerializationError,
    TransportError,
)
from http_output.models.result import DeliveryOutcome, DeliveryResult

__version__ = "0.3.0"

__all__ = [
    "AsyncDeliveryEngine",
    "ConfigError",
    "DeliveryEngine",
    "DeliveryOutcome",
    "DeliveryResult",
    "OutputError",
    "OutputSettings",
    "SerializationError",
    "TransportError",
    "load_settings",
]
