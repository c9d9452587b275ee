#!/usr/bin/env python3
# acmecrypt/plugins/gpg/entrypoint.py
from __future__ import annotations

from acmecrypt.backends import backend
from acmecrypt.config import AppConfig
from .gpg import GPGCrypter


@backend(
    name="gpg",
    description="GnuPG command-line tool (ASCII-armored, one recipient).",
    aliases=["gnupg"],
)
def gpg_backend(config: AppConfig) -> GPGCrypter:
    return GPGCrypter.from_config(config)
