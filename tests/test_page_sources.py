from __future__ import annotations

import asyncio

import httpx
import pytest

from rankbot.rank import Failed, RankFinder, url_contains
from rankbot.search.base import ProviderError, Query, parse_total
from rankbot.search.google_cse import GoogleCSEPageSource
from rankbot.search.serpapi import SerpAPIPageSource

QUERY = Query(text="coffee grinder", site_scope="cx-123")


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _fetch(source, offset=1):
    async def run():
        async with source:
            return await source.fetch_page(QUERY, offset)

    return asyncio.run(run())


def test_google_cse_maps_items_and_total():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(
            200,
            json={
                "searchInformation": {"totalResults": "1340"},
                "items": [
                    {"link": "https://a.example/", "title": "A", "snippet": "first"},
                    {"link": "https://b.example/", "title": "B"},
                ],
            },
        )

    page = _fetch(GoogleCSEPageSource("k", "ua", client=_client(handler)), offset=11)
    assert seen["cx"] == "cx-123"
    assert seen["q"] == "coffee grinder"
    assert seen["start"] == "11"
    assert seen["key"] == "k"
    assert page.start_offset == 11
    assert page.total_reported == 1340
    assert [i.url for i in page.items] == ["https://a.example/", "https://b.example/"]
    assert page.items[1].snippet == ""


def test_google_cse_without_items_is_empty_page():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"searchInformation": {"totalResults": "0"}})

    page = _fetch(GoogleCSEPageSource("k", "ua", client=_client(handler)))
    assert page.items == ()
    assert page.total_reported == 0


def test_google_cse_quota_error_becomes_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": {"code": 429, "message": "Quota exceeded for quota metric"}})

    with pytest.raises(ProviderError) as exc:
        _fetch(GoogleCSEPageSource("k", "ua", client=_client(handler)))
    assert "Quota exceeded" in exc.value.message


def test_google_cse_unparseable_total_is_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"searchInformation": {"totalResults": "about 10"}})

    with pytest.raises(ProviderError):
        _fetch(GoogleCSEPageSource("k", "ua", client=_client(handler)))


def test_google_cse_transport_error_is_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network down", request=request)

    with pytest.raises(ProviderError) as exc:
        _fetch(GoogleCSEPageSource("k", "ua", client=_client(handler)))
    assert "network down" in exc.value.message


def test_google_cse_non_json_body_is_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(ProviderError):
        _fetch(GoogleCSEPageSource("k", "ua", client=_client(handler)))


def test_serpapi_uses_zero_based_start_and_site_restriction():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(
            200,
            json={
                "search_information": {"total_results": 87},
                "organic_results": [{"link": "https://c.example/", "title": "C", "snippet": "s", "position": 1}],
            },
        )

    source = SerpAPIPageSource("k", "ua", client=_client(handler))
    page = asyncio.run(source.fetch_page(Query(text="coffee", site_scope="example.com"), 21))
    assert seen["start"] == "20"
    assert seen["q"] == "coffee site:example.com"
    assert seen["engine"] == "google"
    assert page.total_reported == 87
    assert page.items[0].title == "C"


def test_serpapi_no_results_error_is_empty_page():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "Google hasn't returned any results for this query."})

    page = _fetch(SerpAPIPageSource("k", "ua", client=_client(handler)))
    assert page.items == ()
    assert page.total_reported == 0


def test_serpapi_account_error_is_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "Invalid API key."})

    with pytest.raises(ProviderError) as exc:
        _fetch(SerpAPIPageSource("k", "ua", client=_client(handler)))
    assert "Invalid API key" in exc.value.message


@pytest.mark.parametrize("raw,expected", [(None, 0), ("0", 0), ("42", 42), (17, 17), (" 5 ", 5)])
def test_parse_total_accepts_ints_and_digit_strings(raw, expected):
    assert parse_total(raw) == expected


@pytest.mark.parametrize("raw", ["1,000", "n/a", -1, True, 3.5])
def test_parse_total_rejects_malformed_counts(raw):
    with pytest.raises(ProviderError):
        parse_total(raw)


@pytest.mark.parametrize(
    "body",
    [
        {"searchInformation": {"totalResults": "5"}, "items": ["bad"]},
        {"searchInformation": "x"},
        {"searchInformation": {"totalResults": "5"}, "items": 5},
    ],
)
def test_google_cse_malformed_shapes_fail_the_search(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    source = GoogleCSEPageSource("k", "ua", client=_client(handler))
    out = asyncio.run(RankFinder(source).find(QUERY, url_contains("target.example"), 100))
    assert isinstance(out, Failed)
    assert "malformed" in out.reason.lower()


@pytest.mark.parametrize(
    "body",
    [
        {"search_information": {"total_results": 5}, "organic_results": ["bad"]},
        {"search_information": [1, 2]},
        {"search_information": {"total_results": 5}, "organic_results": {"link": "x"}},
    ],
)
def test_serpapi_malformed_shapes_fail_the_search(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    source = SerpAPIPageSource("k", "ua", client=_client(handler))
    out = asyncio.run(RankFinder(source).find(QUERY, url_contains("target.example"), 100))
    assert isinstance(out, Failed)
    assert "malformed" in out.reason.lower()


def test_google_cse_missing_total_is_failure_not_not_found():
    links = [{"link": f"https://other.example/{i}", "title": "t", "snippet": "s"} for i in range(10)]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"items": links})

    source = GoogleCSEPageSource("k", "ua", client=_client(handler))
    out = asyncio.run(RankFinder(source).find(QUERY, url_contains("target.example"), 100))
    assert isinstance(out, Failed)


def test_serpapi_missing_total_is_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"organic_results": [{"link": "https://c.example/"}]})

    with pytest.raises(ProviderError):
        _fetch(SerpAPIPageSource("k", "ua", client=_client(handler)))


def test_parse_total_required_rejects_missing_count():
    with pytest.raises(ProviderError):
        parse_total(None, required=True)
