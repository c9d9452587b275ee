#!/usr/bin/env python3
# acmecrypt/backends/__init__.py
from __future__ import annotations

"""
Package for backend management and registration.

Provides:
- Data structures and protocols (`Crypter`, `Backend`, `BackendFactory`).
- In-memory registry and decorators (`REGISTRY`, `backend`, `register_backend`).
- Resolution of the configured backend (`get_crypter`).

Backend implementations live in `acmecrypt.plugins` and are imported by
`acmecrypt.interface.loader.load_backends`.
"""


# Re-export from submodules
from .backend_types import Crypter, Backend, BackendFactory
from .backends import (
    REGISTRY,
    DEFAULT_BACKEND,
    BackendRegistry,
    backend,
    register_backend,
    get_crypter,
)

__all__ = [
    "Crypter",
    "Backend",
    "BackendFactory",
    "REGISTRY",
    "DEFAULT_BACKEND",
    "BackendRegistry",
    "backend",
    "register_backend",
    "get_crypter",
]
