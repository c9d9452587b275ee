#!/usr/bin/env python3
# acmecrypt/acme/fsys.py
from __future__ import annotations

"""
Transports to acme's window file system.

acme serves one directory per window (`<id>/ctl`, `<id>/tag`, `<id>/body`, ...)
plus `new/ctl`, whose first read creates a window and returns its ctl line.

- MountTransport: the file system is mounted (Plan 9 /mnt/acme, 9pfuse).
  Files are opened once per window and kept until `release`.
- NinePTransport: plan9port's `9p` command (`9p read acme/5/tag`). Every
  call is one short-lived process; nothing stays open.

Every failure surfaces as CryptIOError naming the file.
"""

import logging
import os
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Protocol, Tuple

from acmecrypt.errors import CryptIOError
from acmecrypt.helpers import Kernel

log = logging.getLogger(__name__)

# Default mount point on Plan 9
DEFAULT_MOUNT = "/mnt/acme"


def _parse_ctl_id(ctl_line: bytes) -> int:
    """Window id is the first field of a ctl line."""
    fields = ctl_line.split()
    try:
        return int(fields[0])
    except (IndexError, ValueError) as exc:
        raise CryptIOError(f"unexpected acme ctl line: {ctl_line[:80]!r}") from exc


class Transport(Protocol):
    """What Window needs from an acme file system."""

    def new_window(self) -> int:  # pragma: no cover - signature only
        ...

    def attach(self, win_id: int) -> None:  # pragma: no cover - signature only
        ...

    def read(self, win_id: int, file: str) -> bytes:  # pragma: no cover - signature only
        ...

    def write(self, win_id: int, file: str, data: bytes) -> None:  # pragma: no cover - signature only
        ...

    def release(self, win_id: int) -> None:  # pragma: no cover - signature only
        ...


class MountTransport:
    """acme file system reached through a mounted directory."""

    def __init__(self, root: str | os.PathLike[str] = DEFAULT_MOUNT) -> None:
        self.root = Path(root)
        # (win_id, file, mode) -> open handle
        self._handles: Dict[Tuple[int, str, str], BinaryIO] = {}

    def _path(self, win_id: int | str, file: str) -> Path:
        return self.root / str(win_id) / file

    def _handle(self, win_id: int, file: str, mode: str) -> BinaryIO:
        key = (win_id, file, mode)
        fh = self._handles.get(key)
        if fh is None:
            path = self._path(win_id, file)
            # No O_TRUNC/O_APPEND: acme appends tag and body writes itself
            flags = os.O_RDONLY if mode == "r" else os.O_WRONLY
            try:
                fd = os.open(path, flags)
            except OSError as exc:
                raise CryptIOError(f"cannot open {path}: {exc}") from exc
            fh = os.fdopen(fd, "rb" if mode == "r" else "wb", buffering=0)
            self._handles[key] = fh
        return fh

    def new_window(self) -> int:
        path = self.root / "new" / "ctl"
        try:
            fd = os.open(path, os.O_RDWR)
        except OSError as exc:
            raise CryptIOError(f"cannot open {path}: {exc}") from exc
        fh = os.fdopen(fd, "r+b", buffering=0)
        try:
            win_id = _parse_ctl_id(fh.read(256))
        except (OSError, CryptIOError):
            fh.close()
            raise
        # This fid is now the new window's ctl file
        self._handles[(win_id, "ctl", "w")] = fh
        return win_id

    def attach(self, win_id: int) -> None:
        self._handle(win_id, "ctl", "w")

    def read(self, win_id: int, file: str) -> bytes:
        fh = self._handle(win_id, file, "r")
        try:
            if fh.seekable():
                fh.seek(0)
            chunks = []
            while True:
                chunk = fh.read(8192)
                if not chunk:
                    break
                chunks.append(chunk)
        except OSError as exc:
            raise CryptIOError(f"cannot read {self._path(win_id, file)}: {exc}") from exc
        return b"".join(chunks)

    def write(self, win_id: int, file: str, data: bytes) -> None:
        fh = self._handle(win_id, file, "w")
        try:
            view = memoryview(data)
            while view:
                n = fh.write(view)
                if not n:
                    raise OSError("short write")
                view = view[n:]
        except OSError as exc:
            raise CryptIOError(f"cannot write {self._path(win_id, file)}: {exc}") from exc

    def release(self, win_id: int) -> None:
        for key in [k for k in self._handles if k[0] == win_id]:
            fh = self._handles.pop(key)
            try:
                fh.close()
            except OSError as exc:
                log.warning("closing %s: %s", self._path(win_id, key[1]), exc)


class NinePTransport:
    """acme file system reached through plan9port's `9p` command."""

    def __init__(self, program: str = "9p", *, kernel: Optional[Kernel] = None) -> None:
        self.program = program
        self._kernel = kernel or Kernel()

    def _run(self, verb: str, target: str, data: Optional[bytes] = None) -> bytes:
        res = self._kernel.run([self.program, verb, target], input=data)
        if not res.ok:
            detail = res.stderr.strip() or f"exit status {res.returncode}"
            raise CryptIOError(f"{self.program} {verb} {target}: {detail}")
        return res.stdout

    def new_window(self) -> int:
        return _parse_ctl_id(self._run("read", "acme/new/ctl"))

    def attach(self, win_id: int) -> None:
        self._run("read", f"acme/{win_id}/ctl")

    def read(self, win_id: int, file: str) -> bytes:
        return self._run("read", f"acme/{win_id}/{file}")

    def write(self, win_id: int, file: str, data: bytes) -> None:
        self._run("write", f"acme/{win_id}/{file}", data)

    def release(self, win_id: int) -> None:
        # Each 9p invocation closed its own fid
        return None


def connect(config=None) -> Transport:
    """MountTransport when ACME_CRYPT_FSYS is configured, else NinePTransport."""
    fsys = getattr(config, "acme_fsys", None)
    if fsys is not None:
        return MountTransport(fsys)
    return NinePTransport(getattr(config, "ninep_program", None) or "9p")
