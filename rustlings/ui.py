"""Coloured status lines for warnings and successes."""

from __future__ import annotations

import os
import sys

from rich.console import Console
from rich.text import Text


def _no_emoji() -> bool:
    return "NO_EMOJI" in os.environ


def _emit(symbol: str, fallback: str, message: str, colour: str) -> None:
    prefix = fallback if _no_emoji() else symbol
    console = Console(file=sys.stdout, highlight=False, emoji=False, soft_wrap=True)
    console.print(Text.assemble((prefix, colour), " ", (message, colour)))


def warn(message: object) -> None:
    """Print a red warning line."""
    _emit("⚠️ ", "!", str(message), "red")


def success(message: object) -> None:
    """Print a green success line."""
    _emit("✅", "✓", str(message), "green")