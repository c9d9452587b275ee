#!/usr/bin/env python3
# acmecrypt/plugins/gpg/gpg.py
"""
GnuPG backend.

Runs the gpg executable non-interactively:
- decrypt: plaintext from stdout, diagnostics from stderr.
- encrypt: ASCII-armored output for one recipient, plaintext on stdin.

DISPLAY is always passed to the child (empty if unset) so a graphical
pinentry can ask for the passphrase.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from acmecrypt.config import AppConfig
from acmecrypt.errors import ConfigError, CryptIOError, DecryptError, EncryptError
from acmecrypt.helpers import Kernel

log = logging.getLogger(__name__)

# Flags shared by both directions: never prompt on the terminal
_BATCH_FLAGS = ["--batch", "--no-tty"]


class GPGCrypter:
    """Crypter backed by the `gpg` command."""

    def __init__(
        self,
        recipient: str,
        *,
        program: str = "gpg",
        display: Optional[str] = None,
        kernel: Optional[Kernel] = None,
    ) -> None:
        if not recipient:
            raise ConfigError("ACME_CRYPT_RCPT environment variable not set")
        self.recipient = recipient
        self.program = program
        self._display = display
        self._kernel = kernel or Kernel()

    @classmethod
    def from_config(cls, config: AppConfig, *, kernel: Optional[Kernel] = None) -> "GPGCrypter":
        return cls(
            config.recipient or "",
            program=config.gpg_program,
            display=config.display,
            kernel=kernel,
        )

    def _env(self) -> dict[str, str]:
        display = self._display if self._display is not None else os.environ.get("DISPLAY", "")
        return {"DISPLAY": display}

    def decrypt(self, file_path: str) -> bytes:
        args = [self.program, "--decrypt", "--quiet", *_BATCH_FLAGS, file_path]
        res = self._kernel.run(args, env=self._env())
        if not res.ok:
            raise DecryptError(
                f"gpg decrypt failed: exit status {res.returncode}",
                returncode=res.returncode,
                stderr=res.stderr,
            )
        log.debug("decrypted %s (%d bytes)", file_path, len(res.stdout))
        return res.stdout

    def encrypt(self, data: bytes, output_path: str) -> None:
        # gpg refuses to overwrite in batch mode; the old file goes first.
        # Not atomic: a failure below leaves neither old nor new content.
        if os.path.lexists(output_path):
            try:
                os.remove(output_path)
            except OSError as exc:
                raise CryptIOError(
                    f"failed to remove existing file {output_path}: {exc}") from exc

        args = [
            self.program,
            "--encrypt",
            "--armor",
            "--recipient",
            self.recipient,
            *_BATCH_FLAGS,
            "--output",
            output_path,
        ]
        res = self._kernel.run(args, input=data, env=self._env())
        if not res.ok:
            raise EncryptError(
                f"gpg encrypt failed: exit status {res.returncode}",
                returncode=res.returncode,
                stderr=res.stderr,
            )
        log.debug("encrypted %d bytes to %s", len(data), output_path)
