#!/usr/bin/env python3
# acmecrypt/ui/console.py
from __future__ import annotations

import sys

from .ansi import colorize, strip_ansi, supports_ansi


def print_line(text: str = "", *, file=None, style: str | None = None, flush: bool = True) -> None:
    """
    Write one line, colored with `style` when the stream is a terminal.

    Defaults to stderr: stdout of acme commands is reserved for data.
    """
    stream = file if file is not None else sys.stderr
    if style and supports_ansi(stream):
        text = colorize(text, style)
    else:
        text = strip_ansi(text)
    stream.write(f"{text}\n")
    if flush:
        stream.flush()
