from __future__ import annotations

from typing import Optional

import httpx

from .base import Page, ProviderError, Query, parse_items, parse_total, section

_NO_RESULTS = "hasn't returned any results"


class SerpAPIPageSource:
    """SerpAPI client for Google Web results.

    Docs: https://serpapi.com/search-api
    SerpAPI's ``start`` is 0-based; a non-empty site scope is applied as a
    ``site:`` restriction.
    """

    BASE_URL = "https://serpapi.com/search.json"

    def __init__(
        self,
        api_key: str,
        user_agent: str,
        request_timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(
            timeout=request_timeout,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "SerpAPIPageSource":  # type: ignore[override]
        return self

    async def __aexit__(self, exc_type, exc, tb) -> Optional[bool]:  # type: ignore[override]
        await self.aclose()
        return None

    async def fetch_page(self, query: Query, start_offset: int) -> Page:
        q = query.text
        if query.site_scope:
            q = f"{q} site:{query.site_scope}"
        params = {
            "engine": "google",
            "q": q,
            "num": 10,
            "start": start_offset - 1,
            "api_key": self._api_key,
        }
        try:
            resp = await self._client.get(self.BASE_URL, params=params)
        except httpx.HTTPError as e:
            raise ProviderError(f"SerpAPI request failed: {e}") from e
        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            raise ProviderError(f"SerpAPI error {resp.status_code}: non-JSON response")

        error = data.get("error")
        if error:
            if _NO_RESULTS in str(error):
                return Page(items=(), start_offset=start_offset, total_reported=0)
            raise ProviderError(f"SerpAPI error {resp.status_code}: {error}")
        if resp.status_code >= 400:
            raise ProviderError(f"SerpAPI error {resp.status_code}: {resp.reason_phrase}")

        info = section(data, "search_information", "SerpAPI")
        total = parse_total(info.get("total_results"), required=True)
        items = parse_items(data.get("organic_results"), "SerpAPI")
        return Page(items=items, start_offset=start_offset, total_reported=total)
