# src/kill_task_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..core.tracker import TASKS_COMMAND
from ..tasks.task_models import ChannelKind

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, str], str]
CommandHandler3 = Callable[[AppState, str, CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by connectors (/help, /tasks, /tell, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string (possibly empty) or None if not a command.

        The argument text after the command name is passed through verbatim,
        since chat lines are matched exactly.
        """
        if not line.startswith("/"):
            return None

        name, _, arg_text = line[1:].partition(" ")
        if not name:
            return "Empty command. Use /help to list available commands."

        name = name.lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, arg_text, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, arg_text)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, arg_text: str) -> str:
    return registry.build_help()


def cmd_tasks(state: AppState, arg_text: str) -> str:
    """Rows go out through the tracker's log sink; nothing extra to print."""
    if arg_text.strip():
        return "Usage: /tasks"
    state.tracker.handle_command(TASKS_COMMAND)
    if not state.tracker.list_active_tasks():
        return "No active tasks."
    return ""


def cmd_login(state: AppState, arg_text: str, emit: CommandEmitter | None = None) -> str:
    """
    /login <character>  -> signal that the session is ready and restore
                           that character's saved progress
    """
    character = arg_text.strip()
    if not character:
        return "Usage: /login <character name>"
    if emit:
        emit(f"Loading progress for {character}...")
    state.tracker.session_ready(character)
    return ""


def _feed(state: AppState, channel: ChannelKind, text: str) -> str:
    if not text:
        return f"Usage: /{channel.value} <text>"
    logger.debug("Feeding %s line: %r", channel, text)
    state.tracker.handle_chat_line(channel, text)
    return ""


def cmd_tell(state: AppState, arg_text: str) -> str:
    return _feed(state, ChannelKind.TELL, arg_text)


def cmd_broadcast(state: AppState, arg_text: str) -> str:
    return _feed(state, ChannelKind.BROADCAST, arg_text)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("tasks", cmd_tasks, help_text="List active tasks and their kill counts.")
registry.register("login", cmd_login, help_text="Start a session: /login <character name>.")
registry.register("tell", cmd_tell, help_text="Feed a private tell: /tell <text>.")
registry.register(
    "broadcast",
    cmd_broadcast,
    help_text="Feed a broadcast line: /broadcast <text>.",
    aliases=["bc"],
)
