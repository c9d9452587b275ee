#!/usr/bin/env python3
# acmecrypt/__init__.py
from __future__ import annotations
"""
acme-crypt: open encrypted files in acme windows and save them back encrypted.

Subpackages:
- backends:  Crypter protocol and the backend registry.
- plugins:   built-in backend implementations (gpg).
- acme:      acme file-system transports, Window handle and adapter.
- interface: backend loader and the CryptGet / CryptPut entry flows.
- helpers:   process kernel (subprocess runner).
- ui:        ANSI helpers and logging setup.
"""

__version__ = "0.3.0"
