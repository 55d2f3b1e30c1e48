"""
Response deserialization.

Binds a response to a :class:`DeferredBody` whose single invocation reads the
body once and decodes it with the strategy selected by the content-type
classifier. Nothing is read until the caller awaits the handle.
"""

from __future__ import annotations

from email.message import Message
from email.parser import BytesParser
from email.policy import HTTP
from email.utils import collapse_rfc2231_value
from typing import Any
from urllib.parse import parse_qsl

import httpx

from fetch_client.core.common.exceptions import DecodeError
from fetch_client.core.common.logging_utils import get_logger
from fetch_client.core.domain.content_kind import ContentKind
from fetch_client.core.domain.responses import Blob, DeferredBody, FormData, FormFile
from fetch_client.core.services.content_type_classifier import (
    CONTENT_TYPE_HEADER,
    classify,
    media_type,
)

logger = get_logger(__name__)


def _parse_multipart(content: bytes, boundary: str) -> FormData:
    header = f'Content-Type: multipart/form-data; boundary="{boundary}"\r\n\r\n'
    message = BytesParser(policy=HTTP).parsebytes(header.encode("latin-1") + content)
    if not message.is_multipart() or any(part.defects for part in message.walk()):
        raise ValueError("Malformed multipart body")

    form = FormData()
    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        if name is None:
            raise ValueError("Multipart field without a name")
        name = collapse_rfc2231_value(name)
        payload = part.get_payload(decode=True) or b""
        filename = part.get_filename()
        if filename is not None:
            content_type = (
                part.get_content_type() if "content-type" in part else None
            )
            form.append(name, FormFile(filename, payload, content_type))
        else:
            form.append(name, payload.decode(part.get_content_charset() or "utf-8"))
    return form


def parse_form_data(content: bytes, content_type: str | None) -> FormData:
    """Parse a form body.

    A ``boundary`` parameter on the content type selects multipart parsing;
    otherwise the body is read as ``application/x-www-form-urlencoded``.
    """
    boundary = None
    if content_type:
        header = Message()
        header[CONTENT_TYPE_HEADER] = content_type
        boundary = header.get_param("boundary")
    if boundary:
        return _parse_multipart(content, collapse_rfc2231_value(boundary))

    pairs = parse_qsl(content.decode("utf-8"), keep_blank_values=True)
    return FormData(list(pairs))


def _decode(kind: ContentKind, response: httpx.Response) -> Any:
    if kind == ContentKind.JSON:
        return response.json()
    if kind == ContentKind.TEXT:
        return response.text
    if kind == ContentKind.BLOB:
        return Blob(response.content, media_type(response.headers) or "")
    if kind == ContentKind.ARRAY_BUFFER:
        return memoryview(response.content)
    if kind == ContentKind.BYTES:
        return response.content
    if kind == ContentKind.FORM_DATA:
        return parse_form_data(
            response.content, response.headers.get(CONTENT_TYPE_HEADER)
        )
    if kind in (ContentKind.XML, ContentKind.HTML):
        return response.text
    return response.text


def deserialize(response: httpx.Response) -> DeferredBody[Any]:
    """Bind a deferred, single-use body reader to ``response``.

    Args:
        response: A response whose body has not been read yet

    Returns:
        A handle that reads and decodes the body when awaited. Read or
        decode failures surface from the handle as :class:`DecodeError`.
    """
    kind = classify(response.headers)

    async def read() -> Any:
        try:
            await response.aread()
        except (httpx.HTTPError, httpx.StreamError) as e:
            logger.warning("Failed to read response body", content_kind=kind.value)
            raise DecodeError(
                f"Failed to read response body: {e}", content_kind=kind.value
            ) from e
        finally:
            await response.aclose()

        try:
            return _decode(kind, response)
        except (ValueError, LookupError) as e:
            logger.warning("Failed to decode response body", content_kind=kind.value)
            raise DecodeError(
                f"Failed to decode response body as {kind.value}: {e}",
                content_kind=kind.value,
            ) from e

    return DeferredBody(read, response.aclose)
