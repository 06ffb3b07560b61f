from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Union

from ..search.base import ResultItem


@dataclass(frozen=True)
class MatchRecord:
    rank: int
    item: ResultItem


@dataclass(frozen=True)
class Found:
    match: MatchRecord
    kind: ClassVar[str] = "found"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.kind,
            "rank": self.match.rank,
            "url": self.match.item.url,
            "title": self.match.item.title,
            "snippet": self.match.item.snippet,
        }


@dataclass(frozen=True)
class NotFound:
    """The provider declared the end of its results without a match."""

    kind: ClassVar[str] = "not_found"

    def to_dict(self) -> Dict[str, Any]:
        return {"outcome": self.kind}


@dataclass(frozen=True)
class LimitExhausted:
    """The page budget ran out before the provider declared the end of its results."""

    page_budget: int
    kind: ClassVar[str] = "limit_exhausted"

    def to_dict(self) -> Dict[str, Any]:
        return {"outcome": self.kind, "page_budget": self.page_budget}


@dataclass(frozen=True)
class Failed:
    reason: str
    kind: ClassVar[str] = "failed"

    def to_dict(self) -> Dict[str, Any]:
        return {"outcome": self.kind, "reason": self.reason}


Outcome = Union[Found, NotFound, LimitExhausted, Failed]
