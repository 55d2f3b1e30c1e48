"""
Common exception classes for the fetch client.

This module defines the error hierarchy raised by the client so callers can
branch on the failure category instead of matching message strings.
"""

from __future__ import annotations


class FetchClientError(Exception):
    """Base exception class for all fetch client errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        *,
        status_code: int | None = None,
        **kwargs,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
            status_code: Optional HTTP status code of the failed response
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)

    def to_dict(self) -> dict:
        error_dict = {
            "message": self.message,
            "type": self.__class__.__name__,
            "details": self.details,
        }

        # Include any additional attributes that were set via kwargs
        for attr_name in dir(self):
            if (
                not attr_name.startswith("_")
                and attr_name not in ["message", "details", "args"]
                and not callable(getattr(self, attr_name))
            ):
                error_dict[attr_name] = getattr(self, attr_name)

        return {"error": error_dict}


class StatusError(FetchClientError):
    """Raised when a response carries an unsuccessful status code."""

    category = "Unknown"

    def __init__(
        self,
        status_code: int,
        status_text: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        self.status_text = status_text
        rendered = "Unknown" if status_text is None else status_text
        message = f"{self.category} error: [{status_code}] ({rendered})"
        super().__init__(message, details, status_code=status_code, **kwargs)


class ClientError(StatusError):
    """Raised for 4xx responses."""

    category = "Client"


class ServerError(StatusError):
    """Raised for 5xx responses."""

    category = "Server"


class UnknownError(StatusError):
    """Raised for unsuccessful responses outside the 4xx and 5xx ranges."""

    category = "Unknown"


class DecodeError(FetchClientError):
    """Raised when a response body cannot be read or decoded."""

    def __init__(
        self,
        message: str = "Failed to decode response body",
        content_kind: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)
        self.content_kind = content_kind


class ConfigurationError(FetchClientError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class BodyAlreadyConsumedError(FetchClientError):
    """Raised when a deferred response body is read a second time."""

    def __init__(
        self,
        message: str = "Response body has already been consumed",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class TransportError(FetchClientError):
    """Raised when the request could not be completed at the network level."""

    def __init__(
        self,
        message: str = "Transport error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)
