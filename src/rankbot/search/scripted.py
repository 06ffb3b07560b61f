from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Union

from .base import Page, ProviderError, Query, ResultItem


class ScriptedPageSource:
    """Deterministic page source for tests and dry runs.

    ``pages`` maps a 1-based start offset to the page (or error) to return for
    it; offsets not in the script get an empty page with ``default_total``.
    Every requested offset is recorded in ``requested``.
    """

    def __init__(
        self,
        pages: Optional[Dict[int, Union[Page, Exception]]] = None,
        default_total: int = 0,
    ):
        self._pages = dict(pages or {})
        self._default_total = default_total
        self.requested: List[int] = []

    @property
    def fetch_count(self) -> int:
        return len(self.requested)

    async def aclose(self) -> None:
        return None

    async def __aenter__(self) -> "ScriptedPageSource":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> Optional[bool]:
        return None

    async def fetch_page(self, query: Query, start_offset: int) -> Page:
        self.requested.append(start_offset)
        scripted = self._pages.get(start_offset)
        if isinstance(scripted, Exception):
            raise scripted
        if scripted is None:
            return Page(items=(), start_offset=start_offset, total_reported=self._default_total)
        return scripted


def make_items(urls: Sequence[str]) -> tuple:
    return tuple(ResultItem(url=u, title=f"Title {u}", snippet=f"Snippet {u}") for u in urls)


def uniform_pages(
    total: int,
    url_for_rank=lambda rank: f"https://example.org/{rank}",
    page_size: int = 10,
    failing_offset: Optional[int] = None,
) -> ScriptedPageSource:
    """Script a provider holding ``total`` results, every page reporting ``total``."""
    pages: Dict[int, Union[Page, Exception]] = {}
    start = 1
    while start <= total:
        stop = min(start + page_size, total + 1)
        items = make_items([url_for_rank(r) for r in range(start, stop)])
        pages[start] = Page(items=items, start_offset=start, total_reported=total)
        start += page_size
    if failing_offset is not None:
        pages[failing_offset] = ProviderError("scripted provider failure")
    return ScriptedPageSource(pages, default_total=total)
