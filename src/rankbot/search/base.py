from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Tuple


@dataclass(frozen=True)
class Query:
    text: str
    site_scope: str


@dataclass(frozen=True)
class ResultItem:
    url: str
    title: str
    snippet: str


@dataclass(frozen=True)
class Page:
    """One window of provider results starting at 1-based ``start_offset``."""

    items: Tuple[ResultItem, ...] = field(default_factory=tuple)
    start_offset: int = 1
    total_reported: int = 0


class ProviderError(Exception):
    """Any failure of a provider call: transport, auth, quota or a malformed response."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SearchPageSource(Protocol):
    async def fetch_page(self, query: Query, start_offset: int) -> Page:
        ...


def parse_total(raw: object, required: bool = False) -> int:
    """Providers report totals as ints or decimal strings; anything else is malformed."""
    if raw is None:
        if required:
            raise ProviderError("Malformed response: total result count missing")
        return 0
    if isinstance(raw, bool):
        raise ProviderError(f"Malformed total result count: {raw!r}")
    if isinstance(raw, int):
        total = raw
    else:
        try:
            total = int(str(raw).strip())
        except ValueError:
            raise ProviderError(f"Malformed total result count: {raw!r}") from None
    if total < 0:
        raise ProviderError(f"Malformed total result count: {raw!r}")
    return total


def section(data: Dict[str, Any], key: str, provider: str) -> Dict[str, Any]:
    """Nested object ``data[key]``; missing is empty, any non-object is malformed."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ProviderError(f"{provider} returned a malformed response: {key!r} is not an object")
    return value


def parse_items(raw: object, provider: str) -> Tuple[ResultItem, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ProviderError(f"{provider} returned a malformed response: result list is {type(raw).__name__}")
    items: List[ResultItem] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ProviderError(f"{provider} returned a malformed response: result entry is {type(item).__name__}")
        items.append(
            ResultItem(
                url=str(item.get("link") or ""),
                title=str(item.get("title") or ""),
                snippet=str(item.get("snippet") or ""),
            )
        )
    return tuple(items)
