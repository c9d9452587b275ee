#!/usr/bin/env python3
# acmecrypt/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import ANSI, strip_ansi, supports_ansi, colorize
from .console import print_line
from .logging import init_logger, ColorizingStreamHandler, PlainFormatter

__all__ = [
    "ANSI",
    "strip_ansi",
    "supports_ansi",
    "colorize",
    "print_line",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
