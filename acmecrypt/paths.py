#!/usr/bin/env python3
# acmecrypt/paths.py
from __future__ import annotations

"""
File-name conventions for encrypted files.

- strip_encrypted_suffix: drop one recognized suffix (.gpg/.asc/.pgp).
- add_encrypted_suffix: append .gpg unless already present.
- absolute_path: resolve a relative path against the working directory.
"""

import os

# Recognized encrypted-file suffixes (matched case-insensitively)
ENCRYPTED_SUFFIXES: tuple[str, ...] = (".gpg", ".asc", ".pgp")

# Suffix appended when saving
DEFAULT_SUFFIX = ".gpg"


def strip_encrypted_suffix(path: str) -> str:
    """Remove exactly one recognized encrypted suffix, if present."""
    lowered = path.lower()
    for suffix in ENCRYPTED_SUFFIXES:
        if lowered.endswith(suffix):
            return path[: -len(suffix)]
    return path


def add_encrypted_suffix(path: str) -> str:
    """Append `.gpg` unless the path already ends with it (any case)."""
    if path.lower().endswith(DEFAULT_SUFFIX):
        return path
    return path + DEFAULT_SUFFIX


def absolute_path(path: str, cwd: str | None = None) -> str:
    """Return `path` unchanged if absolute, else joined to `cwd` (default: os.getcwd())."""
    if os.path.isabs(path):
        return path
    base = cwd if cwd is not None else os.getcwd()
    return os.path.normpath(os.path.join(base, path))
