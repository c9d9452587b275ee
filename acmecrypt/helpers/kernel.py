#!/usr/bin/env python3
# acmecrypt/helpers/kernel.py
"""
Process interface.

This module provides a small, well-typed facade for running external
programs (gpg, plan9port's 9p) with:
- data piped to standard input,
- standard output captured as bytes and standard error as text,
- an explicit environment built from the parent's plus overrides.

There is no timeout: a hung child hangs the invocation.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

log = logging.getLogger(__name__)

# ---- Public result type -----------------------------------------------------


@dataclass(slots=True)
class ProcessResult:
    """Normalized result for process execution."""
    stdout: bytes
    stderr: str
    returncode: int
    duration_sec: float

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# ---- Kernel -----------------------------------------------------------------


class Kernel:
    """
    Thin interface to spawn a program and wait for it.

    Notes:
        - Avoids shell injection by passing argument lists to subprocess.
        - Never inherits os.environ implicitly: the child environment is
          always an explicit mapping (parent copy + overrides).
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def run(
        self,
        args: Sequence[str],
        *,
        input: Optional[bytes] = None,
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
    ) -> ProcessResult:
        """
        Run `args` and return a normalized result.

        Args:
            args: Program and arguments.
            input: Bytes written to standard input; None attaches /dev/null.
            env: Environment overrides applied on top of os.environ.
            cwd: Working directory.
        """
        child_env = self.build_env(env)
        log.debug("exec %s", " ".join(args))
        start = time.perf_counter()
        try:
            completed = subprocess.run(
                list(args),
                input=input,
                stdin=None if input is not None else subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=child_env,
                cwd=cwd,
                check=False,
            )
        except OSError as exc:
            # Missing executable, permission denied, ...
            duration = time.perf_counter() - start
            return ProcessResult(
                stdout=b"",
                stderr=str(exc),
                returncode=127 if isinstance(exc, FileNotFoundError) else 126,
                duration_sec=duration,
            )

        duration = time.perf_counter() - start
        log.debug("exit %d after %.3fs: %s", completed.returncode, duration, args[0])
        return ProcessResult(
            stdout=completed.stdout,
            stderr=completed.stderr.decode(self._encoding, errors="replace"),
            returncode=completed.returncode,
            duration_sec=duration,
        )

    @staticmethod
    def build_env(overrides: Optional[Mapping[str, str]] = None) -> dict[str, str]:
        """Return a copy of the parent environment with `overrides` applied."""
        env = dict(os.environ)
        env.update(overrides or {})
        return env
