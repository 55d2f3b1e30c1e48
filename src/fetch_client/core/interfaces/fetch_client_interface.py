from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from fetch_client.core.domain.configuration.request_options import RequestOptions
from fetch_client.core.domain.responses import ClientResponse

Options = RequestOptions | Mapping[str, Any] | None


class IFetchClient(ABC):
    """Interface for clients issuing requests against a fixed base URL."""

    @abstractmethod
    async def get(self, url: str, options: Options = None) -> ClientResponse[Any]:
        """Send a GET request to ``base_url + url``."""

    @abstractmethod
    async def post(
        self, url: str, data: Any, options: Options = None
    ) -> ClientResponse[Any]:
        """Send ``data`` as a JSON POST body to ``base_url + url``."""

    @abstractmethod
    async def put(
        self, url: str, data: Any, options: Options = None
    ) -> ClientResponse[Any]:
        """Send ``data`` as a JSON PUT body to ``base_url + url``."""

    @abstractmethod
    async def delete(self, url: str, options: Options = None) -> ClientResponse[Any]:
        """Send a DELETE request to ``base_url + url``."""
