from .finder import PAGE_SIZE, Predicate, RankFinder, url_contains
from .outcome import Failed, Found, LimitExhausted, MatchRecord, NotFound, Outcome

__all__ = [
    "PAGE_SIZE",
    "Predicate",
    "RankFinder",
    "url_contains",
    "Failed",
    "Found",
    "LimitExhausted",
    "MatchRecord",
    "NotFound",
    "Outcome",
]
