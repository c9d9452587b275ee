#!/usr/bin/env python3
# acmecrypt/interface/get.py
from __future__ import annotations
"""
CryptGet <encrypted-file>

Decrypt a file and show the plaintext in a new acme window named after
the file without its .gpg/.asc/.pgp suffix. Run `CryptPut` in that window
to save it back.
"""

import os
import sys
from typing import Optional, Sequence

from acmecrypt.acme import Transport, connect, create_window
from acmecrypt.backends import REGISTRY, BackendRegistry
from acmecrypt.config import AppConfig
from acmecrypt.errors import NotFoundError
from acmecrypt.paths import absolute_path, strip_encrypted_suffix
from .loader import load_backends
from .runner import build_parser, run_entry, step

PROG = "CryptGet"


def crypt_get(
    argv: Sequence[str],
    config: AppConfig,
    *,
    registry: Optional[BackendRegistry] = None,
    transport: Optional[Transport] = None,
) -> int:
    """Decrypt argv[0] into a new acme window; return the window id."""
    parser = build_parser(PROG, "Open an encrypted file in a new acme window.")
    parser.add_argument("file", help="encrypted file (.gpg, .asc or .pgp)")
    args = parser.parse_args(argv)
    registry = registry or REGISTRY

    encrypted_file = absolute_path(args.file)
    if not os.path.exists(encrypted_file):
        raise NotFoundError(f"File does not exist: {encrypted_file}", operation="open file")

    def _resolve():
        load_backends(extra=config.plugins, registry=registry)
        return registry.resolve(config.backend, config)

    crypter = step("initialize crypter", _resolve)
    content = step("decrypt file", lambda: crypter.decrypt(encrypted_file))

    window_name = strip_encrypted_suffix(encrypted_file)
    return step(
        "create acme window",
        lambda: create_window(window_name, content, transport=transport or connect(config)),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_entry(PROG, crypt_get, argv)


if __name__ == "__main__":
    sys.exit(main())
