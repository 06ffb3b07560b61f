from __future__ import annotations

from typing import Protocol

from ..rank.outcome import Outcome


class Notifier(Protocol):
    async def notify_pending(self, chat_id: int, user_label: str) -> None:
        ...

    async def notify_user(self, chat_id: int, outcome: Outcome) -> None:
        ...

    async def notify_operator_channel(self, outcome: Outcome, user_label: str) -> None:
        ...

    async def send_text(self, chat_id: int, text: str) -> None:
        ...
