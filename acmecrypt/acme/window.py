#!/usr/bin/env python3
# acmecrypt/acme/window.py
from __future__ import annotations

"""
Handle on one acme window.

A Window is only an id plus the transport used to reach its files; the
window itself belongs to the acme process. Files opened through the
handle stay open until `close_files` (or the end of a `with` block).
"""

import logging
import os

from acmecrypt.errors import CryptIOError
from .fsys import Transport

log = logging.getLogger(__name__)


class Window:
    def __init__(self, win_id: int, transport: Transport) -> None:
        self.id = win_id
        self._transport = transport

    @classmethod
    def new(cls, transport: Transport) -> "Window":
        """Create a new, empty window."""
        try:
            win_id = transport.new_window()
        except CryptIOError as exc:
            raise CryptIOError(f"failed to create acme window: {exc}") from exc
        log.debug("created acme window %d", win_id)
        return cls(win_id, transport)

    @classmethod
    def open(cls, win_id: int, transport: Transport) -> "Window":
        """Open an existing window by id; fails if acme has no such window."""
        try:
            transport.attach(win_id)
        except CryptIOError as exc:
            transport.release(win_id)
            raise CryptIOError(f"failed to open acme window {win_id}: {exc}") from exc
        return cls(win_id, transport)

    # ---- file access --------------------------------------------------------

    def read_all(self, file: str) -> bytes:
        return self._transport.read(self.id, file)

    def write(self, file: str, data: bytes | str) -> int:
        if isinstance(data, str):
            # surrogateescape round-trip for names taken from argv or the tag
            data = os.fsencode(data)
        self._transport.write(self.id, file, data)
        return len(data)

    def ctl(self, fmt: str, *args: object) -> None:
        """Write one control message (`name /x`, `clean`, `delete`, ...)."""
        msg = fmt % args if args else fmt
        self.write("ctl", msg if msg.endswith("\n") else msg + "\n")

    def name(self, name: str) -> None:
        self.ctl("name %s", name)

    def delete(self, sure: bool = True) -> None:
        """Close the window; `sure` discards unsaved changes."""
        self.ctl("delete" if sure else "del")

    def close_files(self) -> None:
        self._transport.release(self.id)

    def __enter__(self) -> "Window":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close_files()

    def __repr__(self) -> str:
        return f"Window(id={self.id})"
