#!/usr/bin/env python3
# acmecrypt/helpers/__init__.py
from __future__ import annotations
"""
Helpers package.

Provides:
- Kernel: synchronous subprocess runner with explicit environment handling.
- ProcessResult: normalized exit status / output container.
"""

from .kernel import Kernel, ProcessResult

__all__ = ["Kernel", "ProcessResult"]
