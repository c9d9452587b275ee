#!/usr/bin/env python3
# acmecrypt/interface/runner.py
from __future__ import annotations
"""
Shared plumbing for the CryptGet / CryptPut entry points.

- build_parser: argparse parser whose errors become UsageError (exit 1).
- step: run one labelled step, tagging failures with the operation.
- run_entry: configure logging, run a flow, map AcmeCryptError → exit 1.
"""

import argparse
import logging
import sys
from typing import Any, Callable, NoReturn, Optional, Sequence

from acmecrypt.config import AppConfig, load_config
from acmecrypt.errors import AcmeCryptError, ConfigError, UsageError
from acmecrypt.ui import init_logger

log = logging.getLogger("acmecrypt")

EXIT_OK = 0
EXIT_FAILURE = 1


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(f"{message}\n{self.format_usage().strip()}", operation="parse arguments")


def build_parser(prog: str, description: str) -> argparse.ArgumentParser:
    return _Parser(prog=prog, description=description)


def step(label: str, fn: Callable[[], Any]) -> Any:
    """Run a flow step; failures carry `label` as their operation."""
    try:
        out = fn()
    except AcmeCryptError as exc:
        if exc.operation is None:
            exc.operation = label
        raise
    log.debug("ok: %s", label)
    return out


def run_entry(
    prog: str,
    flow: Callable[[Sequence[str], AppConfig], Any],
    argv: Optional[Sequence[str]] = None,
) -> int:
    """Run `flow(argv, config)`; report any AcmeCryptError once on stderr."""
    args = list(sys.argv[1:] if argv is None else argv)
    init_logger("acmecrypt")
    try:
        config = step("load configuration", load_config)
        try:
            init_logger(
                "acmecrypt",
                level=config.log_level or logging.WARNING,
                logfile=str(config.log_file_path) if config.log_file_path else None,
            )
        except OSError as exc:
            raise ConfigError(f"cannot open log file: {exc}", operation="initialize logging") from exc
        flow(args, config)
    except AcmeCryptError as exc:
        if isinstance(exc, UsageError):
            log.error("%s: %s", prog, exc)
        else:
            log.error("Failed to %s: %s", exc.operation or prog, exc)
        return EXIT_FAILURE
    return EXIT_OK
