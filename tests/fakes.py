from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Sequence

from acmecrypt.errors import CryptIOError
from acmecrypt.helpers import ProcessResult


class FakeKernel:
    """Records spawned commands and replays planned results."""

    def __init__(self, results: Optional[List[ProcessResult]] = None, on_run=None) -> None:
        self.calls: List[Dict[str, Any]] = []
        self._results = list(results or [])
        self._on_run = on_run

    def run(self, args: Sequence[str], *, input=None, env=None, cwd=None) -> ProcessResult:
        self.calls.append({"args": list(args), "input": input, "env": dict(env or {})})
        if self._on_run is not None:
            out = self._on_run(list(args), input)
            if out is not None:
                return out
        if self._results:
            return self._results.pop(0)
        return ProcessResult(stdout=b"", stderr="", returncode=0, duration_sec=0.0)


class FakeTransport:
    """In-memory acme: windows are dicts of file name → bytes."""

    def __init__(self, next_id: int = 1) -> None:
        self.windows: Dict[int, Dict[str, Any]] = {}
        self.deleted: List[int] = []
        self.released: List[int] = []
        self.fail_on: set[str] = set()
        self._next_id = next_id

    def add_window(self, win_id: int, *, tag: bytes = b"", body: bytes = b"") -> None:
        self.windows[win_id] = {"tag": tag, "body": body, "ctl": []}

    def new_window(self) -> int:
        if "new" in self.fail_on:
            raise CryptIOError("acme/new/ctl: no acme")
        win_id = self._next_id
        self._next_id += 1
        self.add_window(win_id)
        return win_id

    def attach(self, win_id: int) -> None:
        if win_id not in self.windows:
            raise CryptIOError(f"acme/{win_id}/ctl: file does not exist")

    def read(self, win_id: int, file: str) -> bytes:
        if file in self.fail_on:
            raise CryptIOError(f"acme/{win_id}/{file}: read failed")
        return self.windows[win_id][file]

    def write(self, win_id: int, file: str, data: bytes) -> None:
        if file in self.fail_on:
            raise CryptIOError(f"acme/{win_id}/{file}: write failed")
        win = self.windows[win_id]
        if file == "ctl":
            msg = os.fsdecode(data)
            # fail_on may also hold a ctl verb such as "name"
            if msg.split(" ", 1)[0].strip() in self.fail_on:
                raise CryptIOError(f"acme/{win_id}/ctl: bad ctl message")
            win["ctl"].append(msg)
            if msg.strip() in ("delete", "del"):
                self.deleted.append(win_id)
                del self.windows[win_id]
            return
        win[file] += data

    def release(self, win_id: int) -> None:
        self.released.append(win_id)


class FakeCrypter:
    def __init__(self, plaintext: bytes = b"", error: Exception | None = None) -> None:
        self.plaintext = plaintext
        self.error = error
        self.decrypted: List[str] = []
        self.encrypted: List[tuple[bytes, str]] = []

    def decrypt(self, file_path: str) -> bytes:
        self.decrypted.append(file_path)
        if self.error:
            raise self.error
        return self.plaintext

    def encrypt(self, data: bytes, output_path: str) -> None:
        if self.error:
            raise self.error
        self.encrypted.append((data, output_path))
