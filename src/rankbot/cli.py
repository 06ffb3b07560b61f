from __future__ import annotations

import argparse
import asyncio
import json
import sys

from .api_config import load_api_config
from .bot import BotRunner, RequestHandler
from .logger import get_logger, set_level
from .notify import TelegramClient, TelegramError, TelegramNotifier
from .rank import Failed, RankFinder, url_contains
from .search import Query, get_page_source, resolve_site_scope
from .settings import get_settings

log = get_logger(__name__)


def _apply_overrides(settings, args: argparse.Namespace):
    # Inject overrides without rebuilding Settings model entirely
    if getattr(args, "provider", None):
        settings.search_provider = args.provider  # type: ignore[attr-defined]
    if getattr(args, "api_config", None):
        settings.api_config_path = args.api_config  # type: ignore[attr-defined]
    if getattr(args, "target", None) is not None:
        settings.target_substring = args.target  # type: ignore[attr-defined]
    if getattr(args, "page_budget", None):
        settings.page_budget = args.page_budget  # type: ignore[attr-defined]
    if getattr(args, "log_level", None):
        settings.log_level = args.log_level  # type: ignore[attr-defined]
    set_level(settings.log_level)
    return settings


async def cmd_search(args: argparse.Namespace) -> int:
    settings = _apply_overrides(get_settings(), args)
    api_cfg = load_api_config(settings.api_config_path)
    try:
        source = get_page_source(settings, api_cfg)
    except (RuntimeError, ValueError) as e:
        print(str(e), file=sys.stderr)
        return 2
    site_scope = args.site_scope or resolve_site_scope(settings, api_cfg)
    if settings.search_provider == "google" and not site_scope:
        print("Search engine id missing. Set SEARCH_ENGINE_ID or pass --site-scope.", file=sys.stderr)
        await source.aclose()
        return 2

    async with source:
        finder = RankFinder(source)
        outcome = await finder.find(
            Query(text=args.query, site_scope=site_scope),
            url_contains(settings.target_substring),
            settings.page_budget,
        )
    print(json.dumps(outcome.to_dict(), ensure_ascii=False))
    return 1 if isinstance(outcome, Failed) else 0


async def cmd_bot(args: argparse.Namespace) -> int:
    settings = _apply_overrides(get_settings(), args)
    api_cfg = load_api_config(settings.api_config_path)
    token = settings.bot_token or api_cfg.telegram.bot_token
    chat_id = settings.chat_id if settings.chat_id is not None else api_cfg.telegram.chat_id
    site_scope = resolve_site_scope(settings, api_cfg)
    try:
        telegram = TelegramClient(token or "", request_timeout=settings.request_timeout)
    except RuntimeError as e:
        print(str(e), file=sys.stderr)
        return 2
    try:
        source = get_page_source(settings, api_cfg)
    except (RuntimeError, ValueError) as e:
        print(str(e), file=sys.stderr)
        await telegram.aclose()
        return 2

    async with source, telegram:
        try:
            me = await telegram.get_me()
        except TelegramError as e:
            print(str(e), file=sys.stderr)
            return 2
        log.info("Authorized on account %s", me.get("username"))
        if chat_id is None:
            log.warning("CHAT_ID not set; operator channel notifications are disabled")
        handler = RequestHandler(
            RankFinder(source),
            TelegramNotifier(telegram, chat_id),
            site_scope=site_scope,
            predicate=url_contains(settings.target_substring),
            page_budget=settings.page_budget,
            max_query_length=settings.max_query_length,
        )
        runner = BotRunner(telegram, handler, poll_timeout=settings.poll_timeout)
        log.info("Bot running")
        try:
            await runner.run_forever()
        except (KeyboardInterrupt, asyncio.CancelledError):
            print(json.dumps({"status": "stopped"}))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rankbot", description="Search rank checker bot")
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Find the rank of the target site for one query and print it as JSON")
    p_search.add_argument("--query", required=True, help="Search query string")
    p_search.add_argument("--target", help="Substring a result URL must contain (overrides TARGET_SUBSTRING)")
    p_search.add_argument("--site-scope", help="Search engine id (cx) or site restriction")
    p_search.add_argument("--page-budget", type=int, help="Max result positions to scan (default 100)")
    p_search.add_argument("--provider", choices=["google", "serpapi"], help="Search provider override")
    p_search.add_argument("--api-config", help="Path to apis.yaml config file")
    p_search.add_argument("--log-level", help="Logging level, e.g. DEBUG")
    p_search.set_defaults(func=cmd_search)

    p_bot = sub.add_parser("bot", help="Run the Telegram bot until interrupted")
    p_bot.add_argument("--provider", choices=["google", "serpapi"], help="Search provider override")
    p_bot.add_argument("--api-config", help="Path to apis.yaml config file")
    p_bot.add_argument("--log-level", help="Logging level, e.g. DEBUG")
    p_bot.set_defaults(func=cmd_bot)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "search" and args.page_budget is not None and args.page_budget <= 0:
        parser.error("--page-budget must be positive")
    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
