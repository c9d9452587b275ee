#!/usr/bin/env python3
# acmecrypt/plugins/gpg/__init__.py
"""GnuPG command-line backend."""
