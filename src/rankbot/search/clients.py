from __future__ import annotations

from typing import Union

from ..settings import Settings
from .google_cse import GoogleCSEPageSource
from .serpapi import SerpAPIPageSource
from ..api_config import ApiConfig, load_api_config


def get_page_source(
    settings: Settings, api_config: ApiConfig | None = None
) -> Union[GoogleCSEPageSource, SerpAPIPageSource]:
    cfg = api_config or load_api_config(settings.api_config_path)
    if settings.search_provider == "google":
        api_key = settings.google_api_key or (cfg.google.api_key if cfg else None)
        if not api_key:
            raise RuntimeError(
                "Google API key missing. Set GOOGLE_API_KEY or put it in apis.yaml."
            )
        return GoogleCSEPageSource(
            api_key=api_key,
            user_agent=settings.user_agent,
            request_timeout=settings.request_timeout,
        )
    if settings.search_provider == "serpapi":
        api_key = settings.serpapi_api_key or (cfg.serpapi.api_key if cfg else None)
        if not api_key:
            raise RuntimeError(
                "SerpAPI key missing. Set SERPAPI_API_KEY or put it in apis.yaml."
            )
        return SerpAPIPageSource(
            api_key=api_key,
            user_agent=settings.user_agent,
            request_timeout=settings.request_timeout,
        )
    raise ValueError(f"Unsupported search provider: {settings.search_provider}")


def resolve_site_scope(settings: Settings, api_config: ApiConfig | None = None) -> str:
    cfg = api_config or load_api_config(settings.api_config_path)
    return settings.search_engine_id or cfg.google.search_engine_id or ""
