"""
Module: request.py
Description: Builds the outbound HTTP request for a chunk.

Combines endpoint, serializer output, authentication and custom
headers into an httpx.Request. Building only fails when serialization
fails.
"""

import base64

import httpx

from http_output.delivery.serializers import get_serializer
from http_output.models.config import AuthMethod, OutputConfig
from http_output.models.record import Chunk


def basic_auth_header(username: str, password: str) -> str:
    """Return the Authorization value for HTTP Basic credentials."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class RequestBuilder:
    """
    Composes method, URL, headers and body for each delivery.

    Args:
        config: Engine configuration; the serializer is resolved once here
    """

    def __init__(self, config: OutputConfig):
        self.endpoint = config.endpoint
        self.serializer = get_serializer(config.serializer)
        self.headers = httpx.Headers(config.custom_headers)

        if config.auth.method is AuthMethod.BASIC:
            self.headers["Authorization"] = basic_auth_header(
                config.auth.username, config.auth.password
            )

    def build(self, chunk: Chunk) -> httpx.Request:
        """
        Build the request for a chunk.

        Raises:
            SerializationError: If the chunk cannot be serialized
        """
        content_type, body = self.serializer.serialize(chunk)

        headers = self.headers.copy()
        headers["Content-Type"] = content_type

        return httpx.Request(
            self.endpoint.method.value,
            self.endpoint.url,
            headers=headers,
            content=body
        )
