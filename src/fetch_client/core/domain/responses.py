from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from fetch_client.core.common.exceptions import BodyAlreadyConsumedError
from fetch_client.core.domain.content_kind import ContentKind
from fetch_client.core.interfaces.model_bases import InternalDTO

T = TypeVar("T")


@dataclass(frozen=True)
class Blob(InternalDTO):
    """Opaque binary payload that keeps its declared media type."""

    data: bytes
    media_type: str = ""

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class FormFile(InternalDTO):
    """A multipart form field that was sent with a filename."""

    filename: str
    data: bytes
    content_type: str | None = None


class FormData:
    """Ordered, multi-valued collection of form fields."""

    def __init__(self, fields: list[tuple[str, str | FormFile]] | None = None) -> None:
        self._fields: list[tuple[str, str | FormFile]] = list(fields or [])

    def append(self, name: str, value: str | FormFile) -> None:
        self._fields.append((name, value))

    def get(self, name: str, default: Any = None) -> str | FormFile | Any:
        """Return the first value for ``name``, or ``default``."""
        for key, value in self._fields:
            if key == name:
                return value
        return default

    def getall(self, name: str) -> list[str | FormFile]:
        return [value for key, value in self._fields if key == name]

    def keys(self) -> list[str]:
        seen: dict[str, None] = {}
        for key, _ in self._fields:
            seen.setdefault(key, None)
        return list(seen)

    def items(self) -> list[tuple[str, str | FormFile]]:
        return list(self._fields)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self._fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormData):
            return NotImplemented
        return self._fields == other._fields

    def __repr__(self) -> str:
        return f"FormData({self._fields!r})"


class DeferredBody(Generic[T]):
    """Single-use handle to a response body that has not been read yet.

    Awaiting the handle (``await body()``) reads and decodes the body and
    moves the handle to the consumed state. Any later invocation raises
    :class:`BodyAlreadyConsumedError`; the decoded value is not cached.
    """

    def __init__(
        self,
        reader: Callable[[], Awaitable[T]],
        closer: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self._reader = reader
        self._closer = closer
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    async def __call__(self) -> T:
        if self._consumed:
            raise BodyAlreadyConsumedError()
        # Flip the state before suspending so a concurrent caller fails fast
        self._consumed = True
        return await self._reader()

    async def aclose(self) -> None:
        """Release the body without reading it. No-op once consumed."""
        if self._consumed:
            return
        self._consumed = True
        if self._closer is not None:
            await self._closer()


@dataclass(frozen=True)
class ClientResponse(InternalDTO, Generic[T]):
    """Status metadata plus a deferred body for one successful request."""

    status: int
    status_text: str
    data: DeferredBody[T]
    content_kind: ContentKind = ContentKind.TEXT
    headers: Mapping[str, str] = field(default_factory=dict)

    async def aclose(self) -> None:
        await self.data.aclose()

    async def __aenter__(self) -> ClientResponse[T]:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
