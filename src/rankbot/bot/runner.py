from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from ..logger import get_logger
from ..notify.telegram import TelegramClient, TelegramError
from .handler import RequestHandler

log = get_logger(__name__)


def user_label(message: Dict[str, Any]) -> str:
    sender = message.get("from") or {}
    if sender.get("username"):
        return f"@{sender['username']}"
    name = " ".join(p for p in (sender.get("first_name"), sender.get("last_name")) if p)
    return name or str(sender.get("id") or "unknown")


class BotRunner:
    """Long-polls Telegram and hands text messages to the handler one at a time."""

    def __init__(
        self,
        client: TelegramClient,
        handler: RequestHandler,
        poll_timeout: int = 60,
        retry_delay: float = 5.0,
    ):
        self._client = client
        self._handler = handler
        self._poll_timeout = poll_timeout
        self._retry_delay = retry_delay
        self._offset: Optional[int] = None

    @property
    def offset(self) -> Optional[int]:
        return self._offset

    async def run_once(self) -> int:
        """Fetch and process one batch of updates; returns how many were handled."""
        updates = await self._client.get_updates(offset=self._offset, timeout=self._poll_timeout)
        handled = 0
        for update in updates:
            self._offset = int(update["update_id"]) + 1
            message = update.get("message") or {}
            text = message.get("text")
            chat = message.get("chat") or {}
            if text is None or "id" not in chat:
                continue
            try:
                await self._handler.handle(text, int(chat["id"]), user_label(message))
            except Exception:
                # Offset is already past this update, so it is not replayed.
                log.exception("Failed to handle update %s", update["update_id"])
                continue
            handled += 1
        return handled

    async def run_forever(self) -> None:
        while True:
            try:
                await self.run_once()
            except TelegramError as e:
                log.warning("Polling failed: %s; retrying in %.0fs", e, self._retry_delay)
                await asyncio.sleep(self._retry_delay)
