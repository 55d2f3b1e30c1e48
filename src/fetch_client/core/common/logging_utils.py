"""
Logging utilities for the fetch client.

This module provides utilities for logging, including:
- Structured loggers routed through the standard logging module
- Redaction of sensitive header values
- Test/production environment tagging
"""

import logging
import os
import sys
from collections.abc import Mapping
from typing import Literal

import structlog


# Environment detection
def _is_running_under_pytest() -> bool:
    """Detect if we're running under pytest.

    Returns:
        True if running under pytest, False otherwise
    """
    return "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST") is not None


def _get_environment_tag() -> str:
    """Get the environment tag for logging.

    Returns:
        'test' if running under pytest, 'prod' otherwise
    """
    return "test" if _is_running_under_pytest() else "prod"


class EnvironmentTaggingFilter(logging.Filter):
    """Logging filter that adds environment tags to log records."""

    def __init__(self) -> None:
        super().__init__()
        self._env_tag = _get_environment_tag()

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.env_tag = self._env_tag
        return True


class EnvironmentTaggingFormatter(logging.Formatter):
    """Logging formatter that includes environment tags."""

    def __init__(
        self, fmt: str | None = None, datefmt: str | None = None, style: Literal["%", "{", "$"] = "%"
    ) -> None:
        if fmt is None:
            fmt = "%(asctime)s [%(levelname)-8s] [%(env_tag)s] %(name)s:%(lineno)d %(message)s"
        super().__init__(fmt, datefmt, style=style)

    def format(self, record: logging.LogRecord) -> str:
        # Records emitted before the filter is installed have no tag yet
        if not hasattr(record, "env_tag"):
            record.env_tag = _get_environment_tag()
        return super().format(record)


# Header names whose values never reach the logs
DEFAULT_REDACTED_HEADERS = {
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "api-key",
}

# Level, time and logger name come from the stdlib formatter
_STRUCTLOG_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.processors.format_exc_info,
    structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
]

_logger_factory = structlog.stdlib.LoggerFactory(ignore_frame_names=[__name__])


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger backed by the standard logging module.

    The logger is wrapped explicitly instead of relying on the global
    structlog configuration, so importing the library never changes how the
    host application renders its own structlog events. The stdlib logger
    comes from structlog's ``LoggerFactory`` so that ``%(lineno)d`` and
    ``%(funcName)s`` point at the calling code rather than at structlog.

    Args:
        name: Optional logger name, defaults to the calling module

    Returns:
        A structured logger
    """
    return structlog.wrap_logger(  # type: ignore[return-value]
        _logger_factory(name) if name else _logger_factory(),
        processors=_STRUCTLOG_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def redact(value: str, mask: str = "***") -> str:
    """Redact a sensitive value.

    Args:
        value: The value to redact
        mask: The mask to use

    Returns:
        The redacted value
    """
    if not value:
        return value

    # Keep the first and last two characters
    if len(value) > 6:
        return f"{value[0:2]}{mask}{value[-2:]}"
    else:
        return mask


def redact_headers(
    headers: Mapping[str, str] | None,
    redacted_headers: set[str] | None = None,
    mask: str = "***",
) -> dict[str, str]:
    """Return a copy of ``headers`` with sensitive values masked.

    Header names are matched case-insensitively.
    """
    if not headers:
        return {}
    if redacted_headers is None:
        redacted_headers = DEFAULT_REDACTED_HEADERS

    result: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in redacted_headers:
            result[key] = redact(value, mask)
        else:
            result[key] = value
    return result


def install_environment_tagging() -> None:
    """Install environment tagging filter on the root logger and its handlers."""
    root = logging.getLogger()
    filter_instance = EnvironmentTaggingFilter()

    root.addFilter(filter_instance)

    for handler in list(root.handlers):
        handler.addFilter(filter_instance)
        if isinstance(handler.formatter, logging.Formatter) and not isinstance(
            handler.formatter, EnvironmentTaggingFormatter
        ):
            handler.setFormatter(
                EnvironmentTaggingFormatter(
                    fmt=handler.formatter._fmt, datefmt=handler.formatter.datefmt
                )
            )


def configure_logging_with_environment_tagging(
    level: int = logging.INFO,
    log_format: str | None = None,
    log_file: str | None = None,
) -> None:
    """Configure logging with environment tagging.

    The library itself never calls this; applications and the test suite do.

    Args:
        level: Logging level
        log_format: Optional log format string
        log_file: Optional log file path
    """
    if log_format is None:
        log_format = "%(asctime)s [%(levelname)-8s] [%(env_tag)s] %(name)s:%(lineno)d %(message)s"

    formatter = EnvironmentTaggingFormatter(fmt=log_format)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )

    install_environment_tagging()
