from __future__ import annotations

from typing import Optional

import httpx

from .base import Page, ProviderError, Query, parse_items, parse_total, section


class GoogleCSEPageSource:
    """Google Programmable Search (Custom Search JSON API) page source.

    Docs: https://developers.google.com/custom-search/v1/reference/rest/v1/cse/list
    The query's site scope is the ``cx`` search engine id. The API serves at
    most 10 results per call and stops at start=91.
    """

    BASE_URL = "https://www.googleapis.com/customsearch/v1"

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

    async def __aenter__(self) -> "GoogleCSEPageSource":  # type: ignore[override]
        return self

    async def __aexit__(self, exc_type, exc, tb) -> Optional[bool]:  # type: ignore[override]
        await self.aclose()
        return None

    async def fetch_page(self, query: Query, start_offset: int) -> Page:
        params = {
            "key": self._api_key,
            "cx": query.site_scope,
            "q": query.text,
            "start": start_offset,
            "num": 10,
        }
        try:
            resp = await self._client.get(self.BASE_URL, params=params)
        except httpx.HTTPError as e:
            raise ProviderError(f"Google CSE request failed: {e}") from e
        try:
            data = resp.json()
        except ValueError:
            data = None
        if resp.status_code >= 400:
            raise ProviderError(_error_message(data, resp))
        if not isinstance(data, dict):
            raise ProviderError("Google CSE returned a non-JSON response")

        info = section(data, "searchInformation", "Google CSE")
        total = parse_total(info.get("totalResults"), required=True)
        items = parse_items(data.get("items"), "Google CSE")
        return Page(items=items, start_offset=start_offset, total_reported=total)


def _error_message(data: object, resp: httpx.Response) -> str:
    # {"error": {"code": 429, "message": "Quota exceeded ...", ...}}
    if isinstance(data, dict):
        err = data.get("error") or {}
        if isinstance(err, dict) and err.get("message"):
            return f"Google CSE error {resp.status_code}: {err['message']}"
    return f"Google CSE error {resp.status_code}: {resp.reason_phrase}"
