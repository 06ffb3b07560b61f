from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from ..logger import get_logger
from ..rank.outcome import Outcome
from .format import format_for_operator, format_outcome, format_pending

log = get_logger(__name__)


class TelegramError(Exception):
    pass


class TelegramClient:
    """Minimal Telegram Bot API client (long polling + sendMessage).

    Docs: https://core.telegram.org/bots/api
    """

    BASE_URL = "https://api.telegram.org"

    def __init__(
        self,
        token: str,
        request_timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not token:
            raise RuntimeError("Telegram bot token missing. Set BOT_TOKEN or put it in apis.yaml.")
        self._base = f"{self.BASE_URL}/bot{token}"
        self._timeout = request_timeout
        self._client = client or httpx.AsyncClient(timeout=request_timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "TelegramClient":  # type: ignore[override]
        return self

    async def __aexit__(self, exc_type, exc, tb) -> Optional[bool]:  # type: ignore[override]
        await self.aclose()
        return None

    async def _call(self, method: str, payload: Dict[str, Any], timeout: Optional[float] = None) -> Any:
        try:
            resp = await self._client.post(
                f"{self._base}/{method}",
                json=payload,
                timeout=timeout or self._timeout,
            )
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TelegramError(f"{method} failed: {e}") from e
        if not isinstance(data, dict) or not data.get("ok"):
            desc = data.get("description") if isinstance(data, dict) else None
            raise TelegramError(f"{method} failed: {desc or resp.status_code}")
        return data.get("result")

    async def get_me(self) -> Dict[str, Any]:
        return await self._call("getMe", {})

    async def get_updates(self, offset: Optional[int] = None, timeout: int = 60) -> List[Dict[str, Any]]:
        payload: Dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message"]}
        if offset is not None:
            payload["offset"] = offset
        # The HTTP timeout has to outlive the long poll.
        return await self._call("getUpdates", payload, timeout=timeout + self._timeout) or []

    async def send_message(self, chat_id: int, text: str) -> Dict[str, Any]:
        return await self._call("sendMessage", {"chat_id": chat_id, "text": text})


class TelegramNotifier:
    """Delivers outcomes to the requesting chat and to the operator channel."""

    def __init__(self, client: TelegramClient, operator_chat_id: Optional[int]):
        self._client = client
        self._operator_chat_id = operator_chat_id

    async def send_text(self, chat_id: int, text: str) -> None:
        try:
            await self._client.send_message(chat_id, text)
        except TelegramError as e:
            log.warning("Could not deliver message to %s: %s", chat_id, e)

    async def _to_operator(self, text: str) -> None:
        if self._operator_chat_id is None:
            return
        await self.send_text(self._operator_chat_id, text)

    async def notify_pending(self, chat_id: int, user_label: str) -> None:
        await self.send_text(chat_id, format_pending())
        await self._to_operator(format_pending(user_label))

    async def notify_user(self, chat_id: int, outcome: Outcome) -> None:
        await self.send_text(chat_id, format_outcome(outcome))

    async def notify_operator_channel(self, outcome: Outcome, user_label: str) -> None:
        await self._to_operator(format_for_operator(outcome, user_label))
