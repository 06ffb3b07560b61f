from __future__ import annotations

from typing import Optional

from ..logger import get_logger
from ..notify.base import Notifier
from ..notify.format import USAGE_MESSAGE
from ..rank.finder import Predicate, RankFinder
from ..rank.outcome import Outcome
from ..search.base import Query

log = get_logger(__name__)


class RequestHandler:
    """Turns one inbound chat message into one rank search and its notifications."""

    def __init__(
        self,
        finder: RankFinder,
        notifier: Notifier,
        site_scope: str,
        predicate: Predicate,
        page_budget: int = 100,
        max_query_length: int = 256,
    ):
        self._finder = finder
        self._notifier = notifier
        self._site_scope = site_scope
        self._predicate = predicate
        self._page_budget = page_budget
        self._max_query_length = max_query_length

    async def handle(self, text: str, chat_id: int, user_label: str) -> Optional[Outcome]:
        query_text = (text or "").strip()
        if not query_text or query_text.startswith("/") or len(query_text) > self._max_query_length:
            await self._notifier.send_text(chat_id, USAGE_MESSAGE)
            return None

        log.info("[%s] %s", user_label, query_text)
        await self._notifier.notify_pending(chat_id, user_label)

        query = Query(text=query_text, site_scope=self._site_scope)
        outcome = await self._finder.find(query, self._predicate, self._page_budget)
        log.info("[%s] outcome: %s", user_label, outcome.to_dict())

        await self._notifier.notify_user(chat_id, outcome)
        await self._notifier.notify_operator_channel(outcome, user_label)
        return outcome
