#!/usr/bin/env python3
# acmecrypt/interface/__init__.py
from __future__ import annotations

"""
Package for the command-line entry points.

Provides:
- Dynamic backend loader for the plugins package (`load_backends`).
- Shared runner: argument parsing, step labelling, exit codes.
- The CryptGet / CryptPut flows.
"""

from .loader import load_backends
from .runner import run_entry, step, EXIT_OK, EXIT_FAILURE
from .get import crypt_get
from .put import crypt_put

__all__ = [
    "load_backends",
    "run_entry",
    "step",
    "EXIT_OK",
    "EXIT_FAILURE",
    "crypt_get",
    "crypt_put",
]
