from .base import Page, ProviderError, Query, ResultItem, SearchPageSource
from .clients import get_page_source, resolve_site_scope
from .google_cse import GoogleCSEPageSource
from .serpapi import SerpAPIPageSource

__all__ = [
    "Page",
    "ProviderError",
    "Query",
    "ResultItem",
    "SearchPageSource",
    "GoogleCSEPageSource",
    "SerpAPIPageSource",
    "get_page_source",
    "resolve_site_scope",
]
