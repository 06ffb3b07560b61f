from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import os
import yaml


@dataclass
class GoogleApiConfig:
    api_key: Optional[str] = None
    search_engine_id: Optional[str] = None


@dataclass
class SerpApiConfig:
    api_key: Optional[str] = None


@dataclass
class TelegramConfig:
    bot_token: Optional[str] = None
    chat_id: Optional[int] = None


@dataclass
class ApiConfig:
    google: GoogleApiConfig = field(default_factory=GoogleApiConfig)
    serpapi: SerpApiConfig = field(default_factory=SerpApiConfig)
    telegram: TelegramConfig = field(default_factory=TelegramConfig)


def _read_yaml(p: Path) -> dict:
    with p.open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def load_api_config(path: Optional[str | Path]) -> ApiConfig:
    """Load API config from YAML, merging with environment fallbacks.

    Precedence for keys:
      1) YAML file values (if provided)
      2) Environment variables (GOOGLE_API_KEY, SEARCH_ENGINE_ID,
         SERPAPI_API_KEY, BOT_TOKEN, CHAT_ID)
    """

    cfg = ApiConfig()
    data: dict = {}
    if path:
        p = Path(path)
        if p.is_file():
            data = _read_yaml(p)
    else:
        for candidate in ("apis.yaml", "apis.yml", "config/apis.yaml"):
            pc = Path(candidate)
            if pc.is_file():
                data = _read_yaml(pc)
                break

    goog = data.get("google") or {}
    serp = data.get("serpapi") or {}
    tg = data.get("telegram") or {}

    cfg.google.api_key = goog.get("api_key")
    cfg.google.search_engine_id = goog.get("search_engine_id")
    cfg.serpapi.api_key = serp.get("api_key")
    cfg.telegram.bot_token = tg.get("bot_token")
    if tg.get("chat_id") not in (None, ""):
        cfg.telegram.chat_id = int(tg["chat_id"])

    # Env fallbacks
    cfg.google.api_key = cfg.google.api_key or os.environ.get("GOOGLE_API_KEY")
    cfg.google.search_engine_id = cfg.google.search_engine_id or os.environ.get("SEARCH_ENGINE_ID")
    cfg.serpapi.api_key = cfg.serpapi.api_key or os.environ.get("SERPAPI_API_KEY")
    cfg.telegram.bot_token = cfg.telegram.bot_token or os.environ.get("BOT_TOKEN")
    if cfg.telegram.chat_id is None and os.environ.get("CHAT_ID"):
        cfg.telegram.chat_id = int(os.environ["CHAT_ID"])

    return cfg
