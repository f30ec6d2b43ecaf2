"""
Module: settings.py
Description: Output configuration using pydantic-settings.

Reads the connector options from keyword arguments, environment
variables (prefixed HTTP_OUTPUT_) or a .env file, validates them and
turns them into the immutable OutputConfig the engine runs on.
"""

from typing import Dict, Optional

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from http_output.errors import ConfigError
from http_output.models.config import (
    AuthConfig,
    AuthMethod,
    EndpointConfig,
    ErrorPolicy,
    HttpMethod,
    OutputConfig,
    RateLimitConfig,
    SerializerKind,
    TimeoutConfig,
    TLSConfig,
    VerifyMode,
)


class OutputSettings(BaseSettings):
    """Connector options loaded from arguments or the environment."""

    model_config = SettingsConfigDict(
        env_prefix="HTTP_OUTPUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Endpoint settings
    endpoint_url: str = Field(..., description="Target URL; scheme selects plain or TLS transport")
    http_method: str = Field(default="post", description="HTTP method: post or put")
    serializer: SerializerKind = Field(default=SerializerKind.FORM, description="Body format")

    # Authentication settings
    authentication: AuthMethod = Field(default=AuthMethod.NONE, description="none or basic")
    username: Optional[str] = Field(default=None, description="Basic auth username")
    password: Optional[str] = Field(default=None, description="Basic auth password")

    # TLS settings
    ssl_no_verify: bool = Field(default=False, description="Skip TLS peer verification")
    cacert_file: Optional[str] = Field(default=None, description="CA bundle used for TLS trust")

    # Delivery settings
    rate_limit_msec: Optional[int] = Field(
        default=None,
        ge=0,
        description="Minimum milliseconds between delivery attempts"
    )
    raise_on_error: bool = Field(default=True, description="Propagate transport failures to the host")
    open_timeout: float = Field(default=5.0, gt=0, description="Connect timeout in seconds")
    read_timeout: float = Field(default=5.0, gt=0, description="Read timeout in seconds")
    custom_headers: Dict[str, str] = Field(default_factory=dict, description="Extra request headers")

    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('endpoint_url')
    @classmethod
    def validate_endpoint_url(cls, v: str) -> str:
        """Validate the endpoint is an absolute http(s) URL."""
        EndpointConfig.from_url(v)
        return v

    @field_validator('http_method')
    @classmethod
    def validate_http_method(cls, v: str) -> str:
        """Validate the method is POST or PUT."""
        valid_methods = [m.value for m in HttpMethod]
        if v.upper() not in valid_methods:
            raise ValueError(f"http_method must be one of: {', '.join(m.lower() for m in valid_methods)}")
        return v.lower()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @model_validator(mode='after')
    def validate_credentials(self) -> "OutputSettings":
        """Basic authentication needs both username and password."""
        if self.authentication is AuthMethod.BASIC:
            if not self.username:
                raise ValueError("username is required for basic authentication")
            if self.password is None:
                raise ValueError("password is required for basic authentication")
        return self

    def to_config(self) -> OutputConfig:
        """Build the immutable engine configuration."""
        if self.authentication is AuthMethod.BASIC:
            auth = AuthConfig(
                method=AuthMethod.BASIC,
                username=self.username,
                password=self.password
            )
        else:
            auth = AuthConfig()

        return OutputConfig(
            endpoint=EndpointConfig.from_url(
                self.endpoint_url, method=HttpMethod(self.http_method.upper())
            ),
            serializer=self.serializer,
            auth=auth,
            tls=TLSConfig(
                verify_mode=VerifyMode.NONE if self.ssl_no_verify else VerifyMode.PEER,
                ca_file=self.cacert_file
            ),
            rate_limit=RateLimitConfig(interval_msec=self.rate_limit_msec or None),
            error_policy=ErrorPolicy(raise_on_error=self.raise_on_error),
            timeouts=TimeoutConfig(connect=self.open_timeout, read=self.read_timeout),
            custom_headers=dict(self.custom_headers)
        )


def load_settings(**options) -> OutputSettings:
    """
    Load and validate connector options.

    Args:
        **options: Option values; anything omitted falls back to the
            environment and then to the defaults

    Returns:
        Validated OutputSettings

    Raises:
        ConfigError: If any option is missing or invalid
    """
    try:
        return OutputSettings(**options)
    except ValidationError as e:
        raise ConfigError(f"Invalid output configuration: {e}") from e
