from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ConfigDict, Field

from fetch_client.core.interfaces.model_bases import DomainModel


class RequestOptions(DomainModel):
    """Per-request options accepted by the verb methods."""

    model_config = ConfigDict(frozen=True)

    headers: dict[str, str] | None = Field(
        default=None,
        description="Headers merged verbatim into the outgoing request. Names are case-insensitive.",
    )

    @classmethod
    def coerce(
        cls, options: RequestOptions | Mapping[str, Any] | None
    ) -> RequestOptions:
        """Accept an options object, a plain mapping or ``None``."""
        if options is None:
            return cls()
        if isinstance(options, RequestOptions):
            return options
        return cls.model_validate(dict(options))
