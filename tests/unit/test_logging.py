from __future__ import annotations

import io
import logging

from acmecrypt.ui import ColorizingStreamHandler, init_logger, print_line


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_plain_output_when_not_a_terminal():
    stream = io.StringIO()
    handler = ColorizingStreamHandler(stream)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    handler.emit(logging.LogRecord("t", logging.ERROR, __file__, 1, "boom", None, None))
    assert stream.getvalue() == "[ERROR] boom\n"


def test_colors_on_terminal(monkeypatch):
    monkeypatch.setenv("TERM", "xterm-256color")
    monkeypatch.delenv("NO_COLOR", raising=False)
    stream = _Tty()
    handler = ColorizingStreamHandler(stream)
    handler.emit(logging.LogRecord("t", logging.WARNING, __file__, 1, "careful", None, None))
    assert stream.getvalue().startswith("\x1b[33m")


def test_acme_dumb_terminal_is_plain(monkeypatch):
    monkeypatch.setenv("TERM", "dumb")
    stream = _Tty()
    print_line("saved", file=stream, style="green")
    assert stream.getvalue() == "saved\n"


def test_init_logger_is_reentrant_and_writes_file(tmp_path):
    logfile = tmp_path / "acmecrypt.log"
    logger = init_logger("acmecrypt-test")
    init_logger("acmecrypt-test", level="debug", logfile=str(logfile))
    init_logger("acmecrypt-test", level="debug", logfile=str(logfile))

    assert sum(isinstance(h, ColorizingStreamHandler) for h in logger.handlers) == 1
    logger.debug("\x1b[31mhello\x1b[0m")
    for h in logger.handlers:
        h.flush()
    text = logfile.read_text(encoding="utf-8")
    assert "[DEBUG] acmecrypt-test: hello" in text
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)
