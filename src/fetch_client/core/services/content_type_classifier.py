"""
Content-Type classification.

Maps the declared media type of a response onto a :class:`ContentKind`.
The table is closed: only exact, case-sensitive ``application/*`` matches
select a non-text kind, everything else (including a missing header) is
read as text.
"""

from __future__ import annotations

from collections.abc import Mapping

from fetch_client.core.domain.content_kind import ContentKind

CONTENT_TYPE_HEADER = "Content-Type"


def _header_value(headers: Mapping[str, str] | None, name: str) -> str | None:
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case-sensitive, httpx.Headers already is not
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def media_type(headers: Mapping[str, str] | None) -> str | None:
    """Return the declared media type with its parameters stripped."""
    value = _header_value(headers, CONTENT_TYPE_HEADER)
    if value is None:
        return None
    return value.split(";", 1)[0]


def classify(headers: Mapping[str, str] | None) -> ContentKind:
    """Classify a response by its ``Content-Type`` header.

    Args:
        headers: Response headers; any mapping, looked up case-insensitively

    Returns:
        The content kind used to pick a decoding strategy. Never raises.
    """
    declared = media_type(headers)
    if declared is None:
        return ContentKind.TEXT

    type_, _, subtype = declared.partition("/")
    if not type_ and not subtype:
        return ContentKind.TEXT

    if type_ == "application" and subtype == "json":
        return ContentKind.JSON
    if type_ == "application" and subtype == "bytes":
        return ContentKind.BYTES
    if type_ == "application" and subtype == "form-data":
        return ContentKind.FORM_DATA
    if type_ == "application" and subtype == "arraybuffer":
        return ContentKind.ARRAY_BUFFER
    if type_ == "application" and subtype == "blob":
        return ContentKind.BLOB
    return ContentKind.TEXT
