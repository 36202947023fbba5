"""Presentation collaborators: render view, command layer, Telegram bot."""

from .commands import QuoteCommands
from .telegram_bot import TelegramBotInterface
from .view import QuoteView, build_view

__all__ = ["QuoteCommands", "QuoteView", "TelegramBotInterface", "build_view"]
