#!/usr/bin/env python3
# acmecrypt/acme/__init__.py
from __future__ import annotations

"""
Package for talking to the acme editor.

Provides:
- Transports to acme's file system (`MountTransport`, `NinePTransport`, `connect`).
- A handle on one window (`Window`).
- The window operations used by the entry flows (`create_window`, `read_current_window`).
"""

from .fsys import Transport, MountTransport, NinePTransport, connect
from .window import Window
from .adapter import (
    TAG_MARKER,
    WINID_ENV,
    create_window,
    current_window_id,
    read_current_window,
)

__all__ = [
    "Transport",
    "MountTransport",
    "NinePTransport",
    "connect",
    "Window",
    "TAG_MARKER",
    "WINID_ENV",
    "create_window",
    "current_window_id",
    "read_current_window",
]
