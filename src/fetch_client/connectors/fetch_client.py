from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel

from fetch_client.core.common.exceptions import TransportError
from fetch_client.core.common.logging_utils import redact_headers
from fetch_client.core.config.client_config import (
    DEFAULT_TIMEOUT,
    ClientConfig,
    validate_base_url,
)
from fetch_client.core.domain.configuration.request_options import RequestOptions
from fetch_client.core.domain.responses import ClientResponse
from fetch_client.core.interfaces.fetch_client_interface import IFetchClient, Options
from fetch_client.core.services.content_type_classifier import classify
from fetch_client.core.services.response_deserializer import deserialize
from fetch_client.core.services.status_classifier import check_status

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def encode_json(data: Any) -> str:
    """Serialize a request payload the way ``JSON.stringify`` does."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


class FetchClient(IFetchClient):
    """Asynchronous HTTP client bound to a fixed base URL.

    Every verb returns a :class:`ClientResponse` once the status line and
    headers are in. Unsuccessful statuses raise before the body is touched;
    the body itself is only read when the caller awaits ``response.data()``.

    An injected ``httpx.AsyncClient`` keeps its own timeout and redirect
    policy unless ``timeout`` or ``follow_redirects`` is passed explicitly.

    Example:
        >>> async with FetchClient("https://api.example.com") as client:
        ...     response = await client.get("/users/1")
        ...     user = await response.data()
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float | None = None,
        follow_redirects: bool | None = None,
        default_headers: Mapping[str, str] | None = None,
    ) -> None:
        validate_base_url(base_url)
        self._config = ClientConfig.create(
            base_url=base_url,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            follow_redirects=True if follow_redirects is None else follow_redirects,
            default_headers=dict(default_headers or {}),
        )
        # Only explicit overrides are applied per request; an injected client
        # otherwise keeps its own timeout and redirect policy
        self._request_timeout = timeout
        self._request_follow_redirects = follow_redirects
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self._config.timeout,
            follow_redirects=self._config.follow_redirects,
        )

    @classmethod
    def from_config(
        cls, config: ClientConfig, client: httpx.AsyncClient | None = None
    ) -> FetchClient:
        return cls(
            config.base_url,
            client,
            timeout=config.timeout,
            follow_redirects=config.follow_redirects,
            default_headers=config.default_headers,
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> FetchClient:
        return cls.from_config(ClientConfig.from_env(environ), client)

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def config(self) -> ClientConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def get(self, url: str, options: Options = None) -> ClientResponse[Any]:
        return await self._request("GET", url, options=options)

    async def post(
        self, url: str, data: Any, options: Options = None
    ) -> ClientResponse[Any]:
        return await self._request("POST", url, content=encode_json(data), options=options)

    async def put(
        self, url: str, data: Any, options: Options = None
    ) -> ClientResponse[Any]:
        return await self._request("PUT", url, content=encode_json(data), options=options)

    async def delete(self, url: str, options: Options = None) -> ClientResponse[Any]:
        return await self._request("DELETE", url, options=options)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> FetchClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _build_headers(
        self, options: RequestOptions, has_body: bool
    ) -> httpx.Headers:
        headers = httpx.Headers(self._config.default_headers)
        if options.headers:
            headers.update(options.headers)
        if has_body and "content-type" not in headers:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return headers

    async def _request(
        self,
        method: str,
        url: str,
        *,
        content: str | None = None,
        options: Options = None,
    ) -> ClientResponse[Any]:
        request_options = RequestOptions.coerce(options)
        fetch_url = self._config.base_url + url
        headers = self._build_headers(request_options, content is not None)

        build_kwargs: dict[str, Any] = {}
        if self._request_timeout is not None:
            build_kwargs["timeout"] = self._request_timeout
        send_kwargs: dict[str, Any] = {}
        if self._request_follow_redirects is not None:
            send_kwargs["follow_redirects"] = self._request_follow_redirects

        try:
            request = self._client.build_request(
                method, fetch_url, headers=headers, content=content, **build_kwargs
            )
        except httpx.InvalidURL as e:
            raise TransportError(
                message=f"Invalid request URL {fetch_url} ({e})",
                details={"method": method, "url": fetch_url},
            ) from e
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Sending %s %s headers=%s", method, fetch_url, redact_headers(headers)
            )

        try:
            response = await self._client.send(request, stream=True, **send_kwargs)
        except httpx.RequestError as e:
            logger.warning("Request %s %s failed: %s", method, fetch_url, e)
            raise TransportError(
                message=f"Could not complete {method} {fetch_url} ({e})",
                details={"method": method, "url": fetch_url},
            ) from e

        if not response.is_success:
            await response.aclose()
            check_status(response.status_code, response.reason_phrase)

        content_kind = classify(response.headers)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Received %s %s for %s %s (%s)",
                response.status_code,
                response.reason_phrase,
                method,
                fetch_url,
                content_kind.value,
            )
        return ClientResponse(
            status=response.status_code,
            status_text=response.reason_phrase,
            data=deserialize(response),
            content_kind=content_kind,
            headers=httpx.Headers(response.headers),
        )
