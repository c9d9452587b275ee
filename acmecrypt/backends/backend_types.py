#!/usr/bin/env python3
# acmecrypt/backends/backend_types.py
from __future__ import annotations

"""
Backend data structures and protocols.

This module defines:
- Crypter: the capability every backend hands out (decrypt / encrypt).
- BackendFactory: callable building a Crypter from the loaded configuration.
- Backend: a registered backend with metadata and its factory.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from acmecrypt.config import AppConfig


@runtime_checkable
class Crypter(Protocol):
    """Encrypt/decrypt capability. Built per invocation, used once."""

    def decrypt(self, file_path: str) -> bytes:  # pragma: no cover - signature only
        ...

    def encrypt(self, data: bytes, output_path: str) -> None:  # pragma: no cover - signature only
        ...


class BackendFactory(Protocol):
    """Protocol for any backend constructor."""

    def __call__(self, config: "AppConfig") -> Crypter:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class Backend:
    """
    A registered backend.

    Important fields:
        name: Primary unique backend name (matched case-insensitively).
        description: Short, user-facing description.
        factory: Function building the Crypter.
        module: Python module path where the backend is defined.
        aliases: Extra names resolving to the same backend.
    """

    name: str
    description: str
    factory: BackendFactory
    module: str = field(default="", repr=False)
    aliases: list[str] = field(default_factory=list)  # type: ignore

    def create(self, config: "AppConfig") -> Crypter:
        """Build a Crypter for this invocation."""
        return self.factory(config)
