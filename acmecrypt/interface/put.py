#!/usr/bin/env python3
# acmecrypt/interface/put.py
from __future__ import annotations
"""
CryptPut [output-path]

With an argument: encrypt standard input to <output-path>.gpg.
Without: encrypt the body of the current acme window ($winid) to the
window's file name plus .gpg.
"""

import sys
from typing import BinaryIO, Optional, Sequence

from acmecrypt.acme import Transport, connect, read_current_window
from acmecrypt.backends import REGISTRY, BackendRegistry
from acmecrypt.config import AppConfig
from acmecrypt.errors import CryptIOError
from acmecrypt.paths import add_encrypted_suffix
from acmecrypt.ui import print_line
from .loader import load_backends
from .runner import build_parser, run_entry, step

PROG = "CryptPut"


def _read_stdin(stream: BinaryIO) -> bytes:
    try:
        return stream.read()
    except OSError as exc:
        raise CryptIOError(str(exc)) from exc


def crypt_put(
    argv: Sequence[str],
    config: AppConfig,
    *,
    registry: Optional[BackendRegistry] = None,
    transport: Optional[Transport] = None,
    stdin: Optional[BinaryIO] = None,
) -> str:
    """Encrypt stdin or the current window; return the path written."""
    parser = build_parser(PROG, "Save stdin or the current acme window encrypted.")
    parser.add_argument("output", nargs="?", help="output path (.gpg is appended); reads stdin")
    args = parser.parse_args(argv)
    registry = registry or REGISTRY

    if args.output is not None:
        stream = stdin if stdin is not None else sys.stdin.buffer
        content = step("read from stdin", lambda: _read_stdin(stream))
        output_path = add_encrypted_suffix(args.output)
    else:
        content, window_name = step(
            "get acme window content",
            lambda: read_current_window(transport=transport or connect(config)),
        )
        output_path = add_encrypted_suffix(window_name)

    def _resolve():
        load_backends(extra=config.plugins, registry=registry)
        return registry.resolve(config.backend, config)

    crypter = step("initialize crypter", _resolve)
    step("encrypt and save file", lambda: crypter.encrypt(content, output_path))

    print_line(f"Encrypted and saved to: {output_path}", style="green")
    return output_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_entry(PROG, crypt_put, argv)


if __name__ == "__main__":
    sys.exit(main())
