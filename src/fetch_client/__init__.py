"""Asynchronous HTTP client with content-type aware, deferred body decoding."""

from fetch_client.connectors.fetch_client import FetchClient
from fetch_client.core.common.exceptions import (
    BodyAlreadyConsumedError,
    ClientError,
    ConfigurationError,
    DecodeError,
    FetchClientError,
    ServerError,
    StatusError,
    TransportError,
    UnknownError,
)
from fetch_client.core.config.client_config import ClientConfig
from fetch_client.core.domain.configuration.request_options import RequestOptions
from fetch_client.core.domain.content_kind import ContentKind
from fetch_client.core.domain.responses import (
    Blob,
    ClientResponse,
    DeferredBody,
    FormData,
    FormFile,
)

__version__ = "0.1.0"

__all__ = [
    "Blob",
    "BodyAlreadyConsumedError",
    "ClientConfig",
    "ClientError",
    "ClientResponse",
    "ConfigurationError",
    "ContentKind",
    "DecodeError",
    "DeferredBody",
    "FetchClient",
    "FetchClientError",
    "FormData",
    "FormFile",
    "RequestOptions",
    "ServerError",
    "StatusError",
    "TransportError",
    "UnknownError",
]
