from __future__ import annotations

from typing import Callable

from ..search.base import ProviderError, Query, ResultItem, SearchPageSource
from .outcome import Failed, Found, LimitExhausted, MatchRecord, NotFound, Outcome

Predicate = Callable[[ResultItem], bool]

PAGE_SIZE = 10


def url_contains(substring: str) -> Predicate:
    """Case-sensitive containment test on the literal result URL."""

    def predicate(item: ResultItem) -> bool:
        return substring in item.url

    return predicate


class RankFinder:
    """Walks provider pages in ascending offset order until the first match.

    Exactly one Outcome is returned per ``find`` call. Provider failures are
    returned as ``Failed``; nothing is retried and nothing is logged here.
    """

    def __init__(self, source: SearchPageSource, page_size: int = PAGE_SIZE):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self._source = source
        self._page_size = page_size

    async def find(self, query: Query, predicate: Predicate, page_budget: int) -> Outcome:
        if page_budget <= 0:
            raise ValueError("page_budget must be positive")

        offset = 1
        while offset <= page_budget:
            try:
                page = await self._source.fetch_page(query, offset)
            except ProviderError as e:
                return Failed(reason=e.message)

            for index, item in enumerate(page.items):
                rank = offset + index
                if rank > page_budget:
                    break
                if predicate(item):
                    return Found(MatchRecord(rank=rank, item=item))

            next_offset = offset + self._page_size
            # Provider says everything it has was already seen.
            if page.total_reported < min(next_offset, page_budget):
                return NotFound()
            offset = next_offset

        return LimitExhausted(page_budget=page_budget)
