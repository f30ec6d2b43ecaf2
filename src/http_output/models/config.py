"""
Module: config.py
Description: Immutable configuration entities for the delivery engine.

Every model here is frozen: the engine receives them at construction
and they never change for its lifetime.

Key Components:
- EndpointConfig: target URL pieces and HTTP method
- SerializerKind: closed set of body formats
- AuthConfig: no auth or HTTP Basic credentials
- TLSConfig: peer verification mode and CA bundle path
- RateLimitConfig: minimum spacing between attempts
- ErrorPolicy: whether transport failures propagate
- OutputConfig: the bundle handed to DeliveryEngine

Dependencies: pydantic, enum, urllib
"""

from enum import Enum
from typing import Dict, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_PORTS = {"http": 80, "https": 443}


class HttpMethod(str, Enum):
    POST = "POST"
    PUT = "PUT"


class SerializerKind(str, Enum):
    FORM = "form"
    JSON = "json"
    TEXT = "text"


class AuthMethod(str, Enum):
    NONE = "none"
    BASIC = "basic"


class VerifyMode(str, Enum):
    PEER = "peer"
    NONE = "none"


class EndpointConfig(BaseModel):
    """
    Delivery target.

    Attributes:
        scheme: 'http' or 'https'; selects plain or TLS transport
        host: Target host name or address
        port: Target port (scheme default when absent from the URL)
        path: Request path, including any query string
        method: HTTP method used for every request
    """

    model_config = ConfigDict(frozen=True)

    scheme: str = Field(..., pattern=r"^https?$")
    host: str = Field(..., min_length=1)
    port: int = Field(..., ge=1, le=65535)
    path: str = Field(default="/")
    method: HttpMethod = Field(default=HttpMethod.POST)

    @classmethod
    def from_url(cls, url: str, method: HttpMethod = HttpMethod.POST) -> "EndpointConfig":
        """
        Split an endpoint URL into its parts.

        Raises:
            ValueError: If the URL is not an absolute http(s) URL
        """
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https"):
            raise ValueError("endpoint_url must use the http or https scheme")
        if not parts.hostname:
            raise ValueError("endpoint_url must include a host")

        port = parts.port or DEFAULT_PORTS[parts.scheme]
        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"

        return cls(
            scheme=parts.scheme,
            host=parts.hostname,
            port=port,
            path=path,
            method=method,
        )

    @property
    def url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        if self.port != DEFAULT_PORTS[self.scheme]:
            host = f"{host}:{self.port}"
        return f"{self.scheme}://{host}{self.path}"

    @property
    def use_tls(self) -> bool:
        return self.scheme == "https"


class AuthConfig(BaseModel):
    """Request authentication. Credentials are only set for basic auth."""

    model_config = ConfigDict(frozen=True)

    method: AuthMethod = Field(default=AuthMethod.NONE)
    username: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None, repr=False)

    @model_validator(mode="after")
    def check_credentials(self) -> "AuthConfig":
        if self.method is AuthMethod.BASIC:
            if not self.username:
                raise ValueError("basic authentication requires a username")
            if self.password is None:
                raise ValueError("basic authentication requires a password")
        return self


class TLSConfig(BaseModel):
    """TLS settings, used only when the endpoint scheme is https."""

    model_config = ConfigDict(frozen=True)

    verify_mode: VerifyMode = Field(default=VerifyMode.PEER)
    ca_file: Optional[str] = Field(default=None)


class RateLimitConfig(BaseModel):
    """Minimum interval between attempts in milliseconds; None means unlimited."""

    model_config = ConfigDict(frozen=True)

    interval_msec: Optional[int] = Field(default=None, ge=0)


class ErrorPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    raise_on_error: bool = Field(default=True)


class TimeoutConfig(BaseModel):
    """Connect and read timeouts for the transport call, in seconds."""

    model_config = ConfigDict(frozen=True)

    connect: float = Field(default=5.0, gt=0)
    read: float = Field(default=5.0, gt=0)


class OutputConfig(BaseModel):
    """Full engine configuration, fixed for the engine's lifetime."""

    model_config = ConfigDict(frozen=True)

    endpoint: EndpointConfig
    serializer: SerializerKind = Field(default=SerializerKind.FORM)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    tls: TLSConfig = Field(default_factory=TLSConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    error_policy: ErrorPolicy = Field(default_factory=ErrorPolicy)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    custom_headers: Dict[str, str] = Field(default_factory=dict)
