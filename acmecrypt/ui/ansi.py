#!/usr/bin/env python3
# acmecrypt/ui/ansi.py
from __future__ import annotations

import os
import re
from typing import IO, Any

# ---- Core SGR map -----------------------------------------------------------

ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",

    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "magenta": "\x1b[35m",
    "bright_black": "\x1b[90m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


# ---- Utilities --------------------------------------------------------------

def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def supports_ansi(stream: IO[Any] | None) -> bool:
    """
    True if escape sequences will render on `stream`.

    acme runs commands with TERM=dumb and shows their output in a +Errors
    window, which prints escapes literally.
    """
    if stream is None or os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM", "dumb") == "dumb":
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more SGR styles from ANSI (e.g. 'red', 'bold').
    Always auto-resets at the end.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text
