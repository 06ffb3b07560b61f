from .handler import RequestHandler
from .runner import BotRunner, user_label

__all__ = ["RequestHandler", "BotRunner", "user_label"]
