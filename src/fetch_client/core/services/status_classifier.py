"""
Status classification.

Maps an unsuccessful HTTP status code onto one of the typed status errors.
The transport only consults this module when the response is not in the
2xx range.
"""

from __future__ import annotations

from typing import NoReturn

from fetch_client.core.common.exceptions import (
    ClientError,
    ServerError,
    StatusError,
    UnknownError,
)
from fetch_client.core.common.logging_utils import get_logger

logger = get_logger(__name__)


def error_for_status(status_code: int, status_text: str | None) -> StatusError:
    """Build the error matching ``status_code`` without raising it.

    Args:
        status_code: The HTTP status code of the failed response
        status_text: The reason phrase; ``None`` renders as ``Unknown``

    Returns:
        ClientError for 4xx, ServerError for 5xx, UnknownError otherwise
    """
    if 400 <= status_code <= 499:
        return ClientError(status_code, status_text)
    if 500 <= status_code <= 599:
        return ServerError(status_code, status_text)
    return UnknownError(status_code, status_text)


def check_status(status_code: int, status_text: str | None) -> NoReturn:
    """Raise the error matching an unsuccessful status code."""
    error = error_for_status(status_code, status_text)
    logger.warning(
        "Request failed",
        status_code=status_code,
        status_text=status_text,
        category=type(error).__name__,
    )
    raise error
