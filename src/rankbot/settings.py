from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables.

    Environment variables:
    - SEARCH_PROVIDER: one of ["google", "serpapi"] (default: "google")
    - GOOGLE_API_KEY: API key for the Custom Search JSON API
    - SEARCH_ENGINE_ID: Programmable Search Engine id (cx) used as site scope
    - SERPAPI_API_KEY: API key for SerpAPI
    - API_CONFIG_PATH: optional path to YAML file with API keys
    - BOT_TOKEN: Telegram bot token
    - CHAT_ID: Telegram operator channel id
    - TARGET_SUBSTRING: substring a result URL must contain to count as a match
    - PAGE_BUDGET: max result positions scanned per query (default: 100)
    - MAX_QUERY_LENGTH: longest accepted inbound query (default: 256)
    - POLL_TIMEOUT: Telegram long-poll timeout in seconds (default: 60)
    - USER_AGENT: HTTP user agent (default: "rankbot/0.1")
    - REQUEST_TIMEOUT: request timeout in seconds (default: 15.0)
    - LOG_LEVEL: logging level (default: "INFO")
    """

    search_provider: Literal["google", "serpapi"] = "google"
    google_api_key: Optional[str] = None
    search_engine_id: Optional[str] = None
    serpapi_api_key: Optional[str] = None
    api_config_path: Optional[str] = None

    bot_token: Optional[str] = None
    chat_id: Optional[int] = None

    target_substring: str = ""
    page_budget: int = Field(100, gt=0)
    max_query_length: int = Field(256, gt=0)
    poll_timeout: int = Field(60, ge=0)

    user_agent: str = "rankbot/0.1"
    request_timeout: float = 15.0
    log_level: str = "INFO"

    @field_validator("chat_id", mode="before")
    @classmethod
    def _blank_chat_id(cls, v):
        # CHAT_ID= in .env means no operator channel
        if isinstance(v, str) and not v.strip():
            return None
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
