from __future__ import annotations

from enum import Enum


class ContentKind(str, Enum):
    """Semantic kinds a response body can be decoded as."""

    JSON = "json"
    TEXT = "text"
    BLOB = "blob"
    ARRAY_BUFFER = "arrayBuffer"
    BYTES = "bytes"
    FORM_DATA = "formData"
    # Never produced by the classifier; decoded as text when requested
    XML = "xml"
    HTML = "html"
