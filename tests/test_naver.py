"""Naver Shopping client tests using httpx's mock transport."""

import httpx
import pytest

from flowersearch.naver import NaverShoppingClient


def make_client(test_settings, handler):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return NaverShoppingClient(test_settings, http_client=http_client)


@pytest.mark.asyncio
async def test_fetch_page_sends_credentials_and_paging_params(test_settings):
    """Credentials go in headers, paging and sort in the query string."""

    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"items": [{"title": "Red rose bouquet"}]})

    items = await make_client(test_settings, handler).fetch_page("장미", start=101, display=100)

    assert items == [{"title": "Red rose bouquet"}]
    request = seen[0]
    assert request.url.host == "provider.test"
    assert request.url.params["query"] == "장미"
    assert request.url.params["start"] == "101"
    assert request.url.params["display"] == "100"
    assert request.url.params["sort"] == "sim"
    assert request.headers["X-Naver-Client-Id"] == "test-id"
    assert request.headers["X-Naver-Client-Secret"] == "test-secret"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"items": None}, {"items": []}])
async def test_missing_items_reads_as_empty_page(test_settings, payload):
    """An absent or null items list is an empty page."""

    client = make_client(test_settings, lambda request: httpx.Response(200, json=payload))

    assert await client.fetch_page("rose", start=1, display=100) == []


@pytest.mark.asyncio
async def test_error_status_raises(test_settings):
    """Non-2xx responses raise instead of yielding items."""

    client = make_client(test_settings, lambda request: httpx.Response(401, json={"errorMessage": "auth"}))

    with pytest.raises(httpx.HTTPStatusError):
        await client.fetch_page("rose", start=1, display=100)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"items": "oops"}),
    ],
)
async def test_malformed_payload_raises_value_error(test_settings, response):
    """Bodies that are not an object with an items list are rejected."""

    client = make_client(test_settings, lambda request: response)

    with pytest.raises(ValueError):
        await client.fetch_page("rose", start=1, display=100)
