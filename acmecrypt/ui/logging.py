#!/usr/bin/env python3
# acmecrypt/ui/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from .ansi import ANSI, strip_ansi, supports_ansi


class ColorizingStreamHandler(logging.StreamHandler):
    """
    StreamHandler with ANSI → plain fallback.
    """
    _LEVEL_COLORS = {
        logging.DEBUG: ANSI["bright_black"],
        logging.INFO: "",
        logging.WARNING: ANSI["yellow"],
        logging.ERROR: ANSI["red"],
        logging.CRITICAL: ANSI["magenta"],
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream)
        self._use_ansi = supports_ansi(self.stream)

    def rebind(self, stream) -> None:
        """Point at `stream` without flushing the old one (it may be closed)."""
        self.stream = stream
        self._use_ansi = supports_ansi(stream)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)

            if self._use_ansi:
                ansi = self._LEVEL_COLORS.get(record.levelno, "")
                if ansi:
                    message = f"{ansi}{message}{ANSI['reset']}"
            else:
                message = strip_ansi(message)

            self.stream.write(message + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter that strips ANSI (good for log files)."""

    def format(self, record: logging.LogRecord) -> str:
        record.msg = strip_ansi(str(record.msg))
        return super().format(record)


def init_logger(
    name: str = "acmecrypt",
    level: int | str = logging.WARNING,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """
    Initialize a color-safe logger.

    Console (stderr): ANSI when it is a terminal, else plain.
    File (optional): rotating, plain text, UTF-8.

    Safe to call again: the level of existing handlers is updated and a
    file handler is added the first time `logfile` is given.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(name)
    logger.setLevel(min(level, logging.DEBUG) if logfile else level)
    logger.propagate = False

    console_handler = next(
        (h for h in logger.handlers if isinstance(h, ColorizingStreamHandler)), None)
    if console_handler is None:
        console_handler = ColorizingStreamHandler(stream=sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(console_handler)
    elif console_handler.stream is not sys.stderr:
        console_handler.rebind(sys.stderr)
    console_handler.setLevel(level)

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        file_handler = RotatingFileHandler(
            logfile, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            PlainFormatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger
