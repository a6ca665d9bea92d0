# src/kill_task_tracker/connectors/console_connector.py

"""
Console connector: stands in for the game client.

Input lines are one of:
- slash commands (/tasks, /login <name>, /tell <text>, /broadcast <text>, ...)
- raw host chat lines "<color>|<text>", where color is the host chat color
  code (3 = private tell, 0 = broadcast)
- /exit or /quit
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_models import ChannelKind

logger = logging.getLogger(__name__)

COLOR_LINE_REGEX = re.compile(r"^(-?[0-9]+)\|(.*)$", re.DOTALL)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def print_line(text: str) -> None:
    """Log sink for the tracker: one timestamped console line."""
    print(f"[{_ts_local()}] {text}", flush=True)


def parse_color_line(line: str) -> tuple[ChannelKind, str] | None:
    m = COLOR_LINE_REGEX.match(line)
    if not m:
        return None
    return ChannelKind.from_color(int(m.group(1))), m.group(2)


def handle_console_line(state: AppState, line: str) -> str | None:
    """
    Route one console line. Returns a reply to print, or None when there is
    nothing to say.
    """
    parsed = parse_color_line(line)
    if parsed is not None:
        channel, text = parsed
        with state.lock:
            state.tracker.handle_chat_line(channel, text)
        return None

    try:
        with state.lock:
            cmd_response = command_registry.handle(state, line, emit=print_line)
    except Exception:
        logger.exception("Command handler crashed.")
        cmd_response = "Internal error while handling a command."

    if cmd_response is None:
        return "Not a command. Use /help, or feed chat as <color>|<text>."
    return cmd_response or None


def run_console_loop(state: AppState, read_line: Callable[[str], str] = input) -> None:
    logger.info("Console connector started.")
    print_line("[CONSOLE] Feed chat lines or commands. Use /help for commands. Use /exit to quit.")

    while True:
        try:
            # Chat text is matched exactly, so only the line ending is dropped.
            line = read_line("> ").rstrip("\r\n")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line.strip():
            continue

        if line.strip().lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_console_line(state, line)
        if reply:
            print_line(reply)

    logger.info("Console connector finished.")
