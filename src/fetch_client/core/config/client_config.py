from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ConfigDict, Field, ValidationError, field_validator

from fetch_client.core.common.exceptions import ConfigurationError
from fetch_client.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

ENV_BASE_URL = "FETCH_CLIENT_BASE_URL"
ENV_TIMEOUT = "FETCH_CLIENT_TIMEOUT"
ENV_FOLLOW_REDIRECTS = "FETCH_CLIENT_FOLLOW_REDIRECTS"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def validate_base_url(base_url: str) -> str:
    """Return ``base_url`` unchanged if it parses as an absolute URL.

    Raises:
        ConfigurationError: If the value is empty, unparseable, has no scheme,
            or is an http(s) URL without a host
    """
    if not isinstance(base_url, str) or not base_url:
        raise ConfigurationError(
            "Invalid base URL", details={"base_url": base_url}
        )
    try:
        parsed = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigurationError(
            "Invalid base URL", details={"base_url": base_url}
        ) from e
    if not parsed.scheme:
        raise ConfigurationError("Invalid base URL", details={"base_url": base_url})
    if parsed.scheme in ("http", "https") and not parsed.host:
        raise ConfigurationError("Invalid base URL", details={"base_url": base_url})
    return base_url


def _env_to_bool(name: str, default: bool, env: Mapping[str, str]) -> bool:
    """Return an environment variable parsed as a boolean flag."""
    value = env.get(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Invalid boolean value for {name}", details={name: value}
    )


def _env_to_float(name: str, default: float, env: Mapping[str, str]) -> float:
    """Return an environment variable parsed as a float."""
    value = env.get(name)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid numeric value for {name}", details={name: value}
        ) from e


class ClientConfig(DomainModel):
    """Settings shared by every request a client issues."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(description="Prefix prepended verbatim to every request path.")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Transport timeout in seconds.",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow redirects before the status is classified.",
    )
    default_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent with every request; per-request headers win.",
    )

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        try:
            return validate_base_url(value)
        except ConfigurationError as e:
            raise ValueError(e.message) from e

    @classmethod
    def create(cls, **values: Any) -> ClientConfig:
        """Build a config, reporting invalid values as ConfigurationError."""
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid client configuration",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Create a ClientConfig from environment variables."""
        env: Mapping[str, str] = os.environ if environ is None else environ

        base_url = env.get(ENV_BASE_URL)
        if not base_url:
            raise ConfigurationError(f"{ENV_BASE_URL} is not set")

        config = cls.create(
            base_url=base_url,
            timeout=_env_to_float(ENV_TIMEOUT, DEFAULT_TIMEOUT, env),
            follow_redirects=_env_to_bool(ENV_FOLLOW_REDIRECTS, True, env),
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Loaded client configuration from environment: base_url=%s timeout=%s",
                config.base_url,
                config.timeout,
            )
        return config
