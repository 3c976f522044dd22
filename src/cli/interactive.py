"""Read-a-line-then-analyze loop used by `hf-sentiment chat`."""

from __future__ import annotations

import logging
from typing import Callable

from rich.console import Console

from cli.ui_components import say

log = logging.getLogger(__name__)

PROMPT = "\n🗣️ Enter a sentence to analyze sentiment (or 'quit' to exit): "
EXIT_COMMANDS = frozenset({"quit", "exit"})


def run_interactive(
    *,
    read_line: Callable[[str], str],
    analyze: Callable[[str], object],
    console: Console,
) -> int:
    """Prompt until quit/exit (any case), EOF or Ctrl-C. Returns the number of analyses run.

    Blank input reprompts without calling `analyze`.
    """

    analyzed = 0
    while True:
        try:
            raw = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            log.debug("Input closed; leaving interactive loop")
            say(console, "\n👋 Goodbye!")
            return analyzed

        text = raw.strip()
        if text.lower() in EXIT_COMMANDS:
            say(console, "👋 Goodbye!")
            return analyzed

        if not text:
            say(console, "⚠️ Please enter a valid sentence.", style="yellow")
            continue

        analyze(text)
        analyzed += 1
