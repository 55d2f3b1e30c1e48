"""
Tests for the response domain objects.
"""

import pytest
from fetch_client.core.common.exceptions import BodyAlreadyConsumedError
from fetch_client.core.domain.content_kind import ContentKind
from fetch_client.core.domain.responses import (
    ClientResponse,
    DeferredBody,
    FormData,
    FormFile,
)


class _Reader:
    def __init__(self, value: object) -> None:
        self.value = value
        self.reads = 0
        self.closes = 0

    async def read(self) -> object:
        self.reads += 1
        return self.value

    async def close(self) -> None:
        self.closes += 1


class TestDeferredBody:
    @pytest.mark.asyncio
    async def test_reads_once(self) -> None:
        reader = _Reader({"ok": True})
        body = DeferredBody(reader.read, reader.close)

        assert await body() == {"ok": True}
        with pytest.raises(BodyAlreadyConsumedError):
            await body()
        assert reader.reads == 1

    @pytest.mark.asyncio
    async def test_aclose_skips_reader(self) -> None:
        reader = _Reader("unused")
        body = DeferredBody(reader.read, reader.close)

        await body.aclose()
        await body.aclose()

        assert reader.reads == 0
        assert reader.closes == 1

    @pytest.mark.asyncio
    async def test_aclose_after_read_is_noop(self) -> None:
        reader = _Reader("text")
        body = DeferredBody(reader.read, reader.close)

        await body()
        await body.aclose()

        assert reader.closes == 0


class TestClientResponse:
    @pytest.mark.asyncio
    async def test_context_manager_releases_unread_body(self) -> None:
        reader = _Reader("unused")
        response = ClientResponse(
            status=200,
            status_text="OK",
            data=DeferredBody(reader.read, reader.close),
            content_kind=ContentKind.TEXT,
        )

        async with response as entered:
            assert entered is response
            assert entered.status == 200
            assert entered.status_text == "OK"

        assert response.data.consumed is True
        assert reader.closes == 1

    def test_is_immutable(self) -> None:
        reader = _Reader(None)
        response = ClientResponse(200, "OK", DeferredBody(reader.read))

        with pytest.raises(AttributeError):
            response.status = 500  # type: ignore[misc]


class TestFormData:
    def test_multi_valued_access(self) -> None:
        upload = FormFile("a.bin", b"\x00", "application/octet-stream")
        form = FormData([("tag", "x"), ("file", upload), ("tag", "y")])

        assert form.get("tag") == "x"
        assert form.getall("tag") == ["x", "y"]
        assert form.get("file") is upload
        assert form.get("missing", "fallback") == "fallback"
        assert list(form) == ["tag", "file"]
        assert form.items() == [("tag", "x"), ("file", upload), ("tag", "y")]

    def test_equality(self) -> None:
        assert FormData([("a", "1")]) == FormData([("a", "1")])
        assert FormData([("a", "1")]) != FormData([("a", "2")])
