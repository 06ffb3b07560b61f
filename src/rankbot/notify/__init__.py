from .base import Notifier
from .format import format_for_operator, format_outcome, format_pending
from .telegram import TelegramClient, TelegramError, TelegramNotifier

__all__ = [
    "Notifier",
    "TelegramClient",
    "TelegramError",
    "TelegramNotifier",
    "format_for_operator",
    "format_outcome",
    "format_pending",
]
