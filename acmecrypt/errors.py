#!/usr/bin/env python3
# acmecrypt/errors.py
from __future__ import annotations

"""
Exception hierarchy shared by the backends, the acme adapter and the entry flows.

Every error is terminal for an invocation. The entry runner tags an error
with the step that raised it (`operation`) and reports it once.
"""


class AcmeCryptError(Exception):
    """Base class for all acme-crypt failures."""

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        return self.message


class UsageError(AcmeCryptError):
    """Wrong number or shape of command-line arguments."""


class NotFoundError(AcmeCryptError):
    """An input file does not exist."""


class ConfigError(AcmeCryptError):
    """Missing or invalid configuration value."""


class UnsupportedBackendError(ConfigError):
    """The requested backend name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unsupported backend: {name}")
        self.name = name


class NotInEditorError(AcmeCryptError):
    """Window mode was used outside an acme window (winid missing or bad)."""


class CryptIOError(AcmeCryptError):
    """Filesystem or acme window read/write failure."""


class BackendExecError(AcmeCryptError):
    """The external encryption tool exited non-zero."""

    def __init__(self, message: str, *, returncode: int = 1, stderr: str = "") -> None:
        text = f"{message}\nstderr: {stderr}" if stderr else message
        super().__init__(text)
        self.returncode = returncode
        self.stderr = stderr


class DecryptError(BackendExecError):
    pass


class EncryptError(BackendExecError):
    pass


__all__ = [
    "AcmeCryptError",
    "UsageError",
    "NotFoundError",
    "ConfigError",
    "UnsupportedBackendError",
    "NotInEditorError",
    "CryptIOError",
    "BackendExecError",
    "DecryptError",
    "EncryptError",
]
