from __future__ import annotations

import asyncio
from typing import Callable, List

import httpx
import pytest

from paged_selection.records import FetchError, HttpPageFetcher, Page
from paged_selection.session import SelectionSession

BASE_URL = "https://api.example.test/api/v1/artworks"


def make_payload(page: int, ids: List[int], *, total: int = 100, limit: int = 12) -> dict:
    return {
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": (page - 1) * limit,
            "current_page": page,
        },
        "data": [
            {"id": record_id, "title": f"Artwork {record_id}", "date_start": None}
            for record_id in ids
        ],
    }


def fetch(handler: Callable[[httpx.Request], httpx.Response], page: int) -> Page:
    async def run() -> Page:
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport) as client:
            fetcher = HttpPageFetcher(BASE_URL, page_size=12, client=client)
            return await fetcher.fetch_page(page)

    return asyncio.run(run())


def test_fetch_page_parses_records_and_pagination() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=make_payload(2, [201, 202, 203]))

    page = fetch(handler, 2)

    assert page.number == 2
    assert page.size == 12
    assert page.total_count == 100
    assert page.ids == (201, 202, 203)
    assert page.records[0].get("title") == "Artwork 201"
    assert seen[0].url.params["page"] == "2"
    assert seen[0].url.params["limit"] == "12"
    assert "title" in seen[0].url.params["fields"]


def test_fetch_page_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError) as excinfo:
        fetch(handler, 1)

    assert excinfo.value.page_number == 1


def test_fetch_page_rejects_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    with pytest.raises(FetchError, match="HTTP 503"):
        fetch(handler, 4)


@pytest.mark.parametrize(
    "payload",
    [
        {"data": "nope", "pagination": {}},
        {"pagination": {"total": 10}},
        {"data": [{"title": "no id"}], "pagination": {"total": 1}},
        {"data": [{"id": "12"}], "pagination": {"total": 1}},
        {"data": [{"id": -3}], "pagination": {"total": 1}},
    ],
)
def test_fetch_page_rejects_malformed_payloads(payload: dict) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    with pytest.raises(FetchError):
        fetch(handler, 1)


def test_fetch_page_rejects_mismatched_page_number() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=make_payload(1, [101]))

    with pytest.raises(FetchError, match="instead"):
        fetch(handler, 3)


def test_owned_client_is_closed() -> None:
    async def run() -> bool:
        fetcher = HttpPageFetcher(BASE_URL)
        client = fetcher._get_client()
        await fetcher.aclose()
        return client.is_closed

    assert asyncio.run(run()) is True


def test_fetch_page_wraps_invalid_base_url() -> None:
    async def run() -> None:
        fetcher = HttpPageFetcher("http://[::1")
        try:
            await fetcher.fetch_page(1)
        finally:
            await fetcher.aclose()

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(run())

    assert excinfo.value.page_number == 1
    assert "InvalidURL" in excinfo.value.reason


def test_invalid_base_url_fails_the_load_instead_of_leaving_it_running() -> None:
    async def run() -> SelectionSession:
        fetcher = HttpPageFetcher("http://[::1")
        session = SelectionSession(fetcher)
        try:
            await session.start()
        finally:
            await fetcher.aclose()
        return session

    session = asyncio.run(run())

    assert session.loading is False
    assert isinstance(session.loader.last_error, FetchError)
