"""Unit tests for the Pinterest engine (HTTP mocked with httpx.MockTransport)."""

import json

import httpx
import pytest
from conftest import image_message

from revsearch.errors import GenericEngineError
from revsearch.models import ImageRecord
from revsearch.web.pinterest import API_URL, search_pinterest
from revsearch.web.search_engine import SearchRequest

ITEMS = [
    {"id": "111", "image_large_url": "https://i.pinimg.com/a.jpg", "description": "first"},
    {"id": "222", "image_large_url": "https://i.pinimg.com/b.jpg", "description": "second"},
    {"id": "333", "image_large_url": "https://i.pinimg.com/c.jpg", "description": None},
]


def _request() -> SearchRequest:
    image = ImageRecord.from_message(image_message(b"jpeg-bytes", filename="cat.jpg",
                                                   mime_type="image/jpeg"))
    return SearchRequest(image=image, search={"assetType": "image"}, storage_ids=("t1", "i1"))


def _client(status: int, body, captured: list | None = None) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        content = body if isinstance(body, bytes) else json.dumps(body).encode()
        return httpx.Response(status, content=content)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_results_keep_provider_order():
    async with _client(200, {"status": "success", "data": ITEMS}) as client:
        results = await search_pinterest(_request(), client=client)

    assert len(results) == len(ITEMS)
    assert [r.page_url for r in results] == [
        "https://pinterest.com/pin/111/",
        "https://pinterest.com/pin/222/",
        "https://pinterest.com/pin/333/",
    ]
    assert results[0].image_url == "https://i.pinimg.com/a.jpg"
    assert results[1].text == "second"
    assert results[2].text is None


@pytest.mark.asyncio
async def test_request_shape():
    captured: list = []
    async with _client(200, {"status": "success", "data": ITEMS[:1]}, captured) as client:
        await search_pinterest(_request(), client=client)

    request = captured[0]
    assert request.method == "PUT"
    assert str(request.url) == API_URL
    assert "referer" not in request.headers
    assert request.headers["content-type"].startswith("multipart/form-data")
    body = request.read()
    assert b'name="image"; filename="cat.jpg"' in body
    assert b"jpeg-bytes" in body
    for field, value in (("x", b"0"), ("y", b"0"), ("w", b"1"), ("h", b"1"), ("base_scheme", b"https")):
        assert f'name="{field}"'.encode() in body
        assert value in body


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,body",
    [
        (500, {"status": "success", "data": ITEMS}),
        (200, {"status": "failure", "data": ITEMS}),
        (200, {"status": "success", "data": []}),
        (200, {"status": "success"}),
        (200, b"<html>not json</html>"),
        (200, ["unexpected"]),
    ],
)
async def test_failure_conditions_raise_generic_error(status, body):
    async with _client(status, body) as client:
        with pytest.raises(GenericEngineError) as exc:
            await search_pinterest(_request(), client=client)
    assert str(exc.value) == "search failed"
