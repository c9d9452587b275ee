#!/usr/bin/env python3
# acmecrypt/plugins/__init__.py
"""
Built-in encryption backends.

Each subpackage registers its backends from an `entrypoint.py` module,
either with the `@backend` decorator or by exporting BACKEND/BACKENDS.
"""
