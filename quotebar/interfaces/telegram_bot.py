from __future__ import annotations

import asyncio
import logging
from typing import Callable, Sequence

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, ContextTypes

from quotebar.interfaces.commands import QuoteCommands

LOGGER = logging.getLogger(__name__)

CommandFn = Callable[[Sequence[str]], str]


class TelegramBotInterface:
    """Telegram layer exposing the quote commands to one operator chat.

    Every command is answered by :class:`QuoteCommands`, which goes through
    the controller, so edits made here are persisted and picked up by the
    scheduler exactly like local ones. Commands run in a worker thread since
    the controller blocks on its lock and on file I/O.
    """

    def __init__(
        self,
        *,
        token: str,
        chat_id: int,
        commands: QuoteCommands,
        logger: logging.Logger | None = None,
        application: Application | None = None,
    ) -> None:
        self._application = application or Application.builder().token(token).build()
        self._chat_id = chat_id
        self._commands = commands
        self._logger = logger or LOGGER
        self._register_handlers()

    @property
    def command_names(self) -> tuple[str, ...]:
        return tuple(self._command_map())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def run(self) -> None:
        """Poll Telegram until interrupted (SIGINT/SIGTERM)."""

        self._logger.info("Telegram bot polling started")
        self._application.run_polling(drop_pending_updates=True)
        self._logger.info("Telegram bot polling stopped")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _command_map(self) -> dict[str, CommandFn]:
        return {
            "quote": self._commands.cmd_quote,
            "next": self._commands.cmd_next,
            "list": self._commands.cmd_list,
            "add": self._commands.cmd_add,
            "edit": self._commands.cmd_edit,
            "remove": self._commands.cmd_remove,
            "interval": self._commands.cmd_interval,
            "style": self._commands.cmd_style,
            "status": self._commands.cmd_status,
        }

    def _register_handlers(self) -> None:
        for name, handler in self._command_map().items():
            self._application.add_handler(CommandHandler(name, self._wrap(handler)))

    def _wrap(self, handler: CommandFn):
        async def wrapped(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
            if not self._authorize(update):
                return
            try:
                text = await asyncio.to_thread(handler, list(context.args or ()))
            except Exception as exc:
                self._logger.exception("Telegram handler failed", exc_info=exc)
                text = "Command failed – check logs"
            await self._reply(update, text)

        return wrapped

    def _authorize(self, update: Update) -> bool:
        chat = update.effective_chat
        if chat is None or chat.id != self._chat_id:
            self._logger.warning("Unauthorized Telegram chat", extra={"chat_id": getattr(chat, "id", None)})
            return False
        return True

    async def _reply(self, update: Update, text: str) -> None:
        if not update.effective_chat or not text:
            return
        try:
            await update.effective_chat.send_message(text)
        except TelegramError as exc:  # pragma: no cover - depends on Telegram availability
            self._logger.warning("Failed to reply in chat", exc_info=exc)


__all__ = ["TelegramBotInterface"]
