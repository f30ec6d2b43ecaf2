"""
Module: test_request.py
Description: Unit tests for outbound request construction.
"""

import pytest

from http_output.delivery.request import RequestBuilder, basic_auth_header
from http_output.errors import SerializationError
from http_output.models.config import (
    AuthConfig,
    AuthMethod,
    EndpointConfig,
    HttpMethod,
    OutputConfig,
    SerializerKind,
)

from tests.conftest import ALICE_AUTHORIZATION, ENDPOINT_URL


def build_config(**overrides) -> OutputConfig:
    method = overrides.pop("method", HttpMethod.POST)
    return OutputConfig(endpoint=EndpointConfig.from_url(ENDPOINT_URL, method=method), **overrides)


class TestRequestBuilder:
    """Test cases for RequestBuilder.build."""

    def test_default_post_form(self):
        request = RequestBuilder(build_config()).build([{"field1": 50}])

        assert request.method == "POST"
        assert str(request.url) == ENDPOINT_URL
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert request.content == b"field1=50"
        assert "authorization" not in request.headers

    def test_put_method(self):
        request = RequestBuilder(build_config(method=HttpMethod.PUT)).build([{"field1": 50}])
        assert request.method == "PUT"

    def test_content_type_follows_serializer(self):
        config = build_config(serializer=SerializerKind.JSON)
        request = RequestBuilder(config).build([{"field1": 50}])

        assert request.headers["content-type"] == "application/json"
        assert request.content == b'{"field1": 50}'

    def test_basic_auth_header(self):
        config = build_config(
            auth=AuthConfig(method=AuthMethod.BASIC, username="alice", password="secret!")
        )
        request = RequestBuilder(config).build([{"field1": 50}])

        assert request.headers["authorization"] == ALICE_AUTHORIZATION

    def test_custom_headers_added(self):
        config = build_config(custom_headers={"X-Source": "collector-1"})
        request = RequestBuilder(config).build([{"field1": 50}])

        assert request.headers["x-source"] == "collector-1"

    def test_engine_headers_override_custom_headers(self):
        config = build_config(
            custom_headers={"Content-Type": "application/xml", "Authorization": "Bearer x"},
            auth=AuthConfig(method=AuthMethod.BASIC, username="alice", password="secret!")
        )
        request = RequestBuilder(config).build([{"field1": 50}])

        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert request.headers["authorization"] == ALICE_AUTHORIZATION

    def test_lowercase_custom_headers_are_replaced(self):
        config = build_config(
            custom_headers={"content-type": "application/xml", "authorization": "Bearer x"},
            auth=AuthConfig(method=AuthMethod.BASIC, username="alice", password="secret!")
        )
        request = RequestBuilder(config).build([{"field1": 50}])

        assert request.headers.get_list("content-type") == ["application/x-www-form-urlencoded"]
        assert request.headers.get_list("authorization") == [ALICE_AUTHORIZATION]

    def test_serialization_failure_propagates(self):
        builder = RequestBuilder(build_config(serializer=SerializerKind.TEXT))
        with pytest.raises(SerializationError):
            builder.build([{"field1": 50}])


def test_basic_auth_header_encoding():
    assert basic_auth_header("alice", "secret!") == ALICE_AUTHORIZATION
    assert basic_auth_header("user", "") == "Basic dXNlcjo="
