#!/usr/bin/env python3
# acmecrypt/acme/adapter.py
from __future__ import annotations

"""
The two window operations the entry flows need.

- create_window(name, content): new window showing decrypted content,
  tagged with the CryptPut marker so a middle-click saves it back.
- read_current_window(): content and file name of the window a command
  was run from (acme exports its id as $winid).
"""

import logging
import os
from typing import Mapping, Optional, Tuple

from acmecrypt.errors import CryptIOError, NotInEditorError
from acmecrypt.paths import absolute_path
from .fsys import Transport, connect
from .window import Window

log = logging.getLogger(__name__)

# Appended to the tag of every window we create
TAG_MARKER = " CryptPut"

# Set by acme for commands run from a window
WINID_ENV = "winid"


def create_window(name: str, content: bytes, *, transport: Optional[Transport] = None) -> int:
    """
    Create a window named `name` holding `content`; return its id.

    If any step after creation fails, the window is deleted before the
    error propagates.
    """
    transport = transport or connect()
    win = Window.new(transport)
    with win:
        steps = (
            ("set window name", lambda: win.name(name)),
            ("append CryptPut to tag", lambda: win.write("tag", TAG_MARKER)),
            ("write to acme window body", lambda: win.write("body", content)),
        )
        for label, step in steps:
            try:
                step()
            except Exception as exc:
                _discard(win)
                raise CryptIOError(f"failed to {label}: {exc}") from exc
    log.debug("window %d shows %s", win.id, name)
    return win.id


def _discard(win: Window) -> None:
    try:
        win.delete(sure=True)
    except CryptIOError as exc:
        log.warning("could not delete acme window %d: %s", win.id, exc)


def current_window_id(environ: Optional[Mapping[str, str]] = None) -> int:
    env = os.environ if environ is None else environ
    raw = env.get(WINID_ENV, "")
    if not raw:
        raise NotInEditorError("not running in acme window (winid not set)")
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise NotInEditorError(f"invalid winid: {raw!r}") from exc


def read_current_window(
    *,
    transport: Optional[Transport] = None,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
) -> Tuple[bytes, str]:
    """
    Return (body, file name) of the window named by $winid.

    The name is the first word of the tag, made absolute against the
    working directory. The window's files are closed before returning.
    """
    win_id = current_window_id(environ)
    transport = transport or connect()
    with Window.open(win_id, transport) as win:
        try:
            tag = win.read_all("tag")
        except CryptIOError as exc:
            raise CryptIOError(f"failed to read acme window tag: {exc}") from exc
        fields = os.fsdecode(tag).split()
        if not fields:
            raise CryptIOError(f"acme window {win_id} has an empty tag")
        name = absolute_path(fields[0], cwd)

        try:
            content = win.read_all("body")
        except CryptIOError as exc:
            raise CryptIOError(f"failed to read acme window body: {exc}") from exc
    return content, name
