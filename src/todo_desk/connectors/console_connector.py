# src/todo_desk/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..cli.commands import render_list
from ..core.state import AppState

logger = logging.getLogger(__name__)

# 24-bit ANSI colors: dark is white on rgb(30,30,30), light is black on white.
_DARK = "\033[38;2;255;255;255;48;2;30;30;30m"
_LIGHT = "\033[38;2;0;0;0;48;2;255;255;255m"
_RESET = "\033[0m"


def _use_color(state: AppState) -> bool:
    if not getattr(state.settings, "color", True):
        return False
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


def themed(state: AppState, text: str, *, color: bool | None = None) -> str:
    """Wrap every line of `text` in the current theme's colors (no-op without color)."""
    if color is None:
        color = _use_color(state)
    if not color:
        return text
    start = _DARK if state.view.dark_mode else _LIGHT
    return "\n".join(f"{start}{line}{_RESET}" for line in text.split("\n"))


def run_console_loop(state: AppState, read_line: Callable[[str], str] = input) -> None:
    """
    Interactive front end. Returns on /exit, /quit, EOF or Ctrl+C.

    Saving is the caller's job (see cli.bootstrap.shutdown), so every exit path
    here ends up in the same single save.
    """
    app_name = str(getattr(state.settings, "app_name", "todo"))
    logger.info("Console started (%d tasks).", len(state.store))

    def out(text: str) -> None:
        print(themed(state, text), flush=True)

    out(f"📝 {app_name}")
    out("Type /help for commands. Use /exit to quit.\n")
    out(render_list(state))

    while True:
        try:
            line = read_line("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except UnicodeDecodeError:
            logger.warning("Console input is not valid text; line ignored.", exc_info=True)
            out("Could not read that line (invalid characters). Try again.")
            continue
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not line.startswith("/"):
            out("Commands start with '/'. Try /help.")
            continue

        try:
            reply = command_registry.handle(state, line)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            out(reply)

    logger.info("Console finished.")
