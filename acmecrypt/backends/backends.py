#!/usr/bin/env python3
# acmecrypt/backends/backends.py
from __future__ import annotations

"""
Backend registry and decorator utilities.

This module provides:
- BackendRegistry: in-memory registry of backends and aliases.
- backend: decorator to register a factory function as a backend.
- register_backend: explicit API to register pre-built Backend objects.
- get_crypter: resolve the configured backend into a Crypter.
"""

import logging
from typing import Dict, Optional, Callable, Any

from acmecrypt.errors import UnsupportedBackendError
from .backend_types import Backend, BackendFactory, Crypter

log = logging.getLogger(__name__)

# Used when ACME_CRYPT_BACKEND is unset
DEFAULT_BACKEND = "gpg"


class BackendRegistry:
    """Holds all backend definitions and provides lookup utilities."""

    def __init__(self) -> None:
        # Primary name -> Backend
        self._backends_by_name: Dict[str, Backend] = {}
        # Alias name -> primary name
        self._alias_to_primary: Dict[str, str] = {}

    # ---------------- Registration ----------------

    def register(self, backend_obj: Backend, *, replace: bool = False) -> None:
        """Register a backend and its aliases, ensuring no collisions."""
        primary_key = backend_obj.name.lower()

        existing = self._backends_by_name.get(primary_key)
        if existing is backend_obj:
            return
        if not replace and (existing is not None or primary_key in self._alias_to_primary):
            raise ValueError(
                f"Backend '{backend_obj.name}' already registered.")
        if existing is not None:
            self._drop_aliases(primary_key)
        self._alias_to_primary.pop(primary_key, None)

        for alias in backend_obj.aliases:
            alias_key = alias.lower()
            owner = self._alias_to_primary.get(alias_key)
            if alias_key in self._backends_by_name or (owner and owner != primary_key):
                raise ValueError(
                    f"Alias '{alias}' for '{backend_obj.name}' collides with an existing name."
                )

        self._backends_by_name[primary_key] = backend_obj
        for alias in backend_obj.aliases:
            self._alias_to_primary[alias.lower()] = primary_key

    def _drop_aliases(self, primary_key: str) -> None:
        for alias_key in [a for a, p in self._alias_to_primary.items() if p == primary_key]:
            del self._alias_to_primary[alias_key]

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[Backend]:
        """Return the backend by primary name or alias, or None if not found."""
        key = name.strip().lower()
        if key in self._backends_by_name:
            return self._backends_by_name[key]
        if key in self._alias_to_primary:
            return self._backends_by_name[self._alias_to_primary[key]]
        return None

    def all(self) -> list[Backend]:
        """Return only primary backends."""
        return list(self._backends_by_name.values())

    def names(self) -> list[str]:
        """Return a list of all primary names and aliases."""
        return [*self._backends_by_name.keys(), *self._alias_to_primary.keys()]

    # ---------------- Resolution ----------------

    def resolve(self, name: str | None, config: Any) -> Crypter:
        """
        Build the Crypter for `name` (DEFAULT_BACKEND when empty).

        Raises UnsupportedBackendError before any factory runs if the name
        is unknown.
        """
        wanted = (name or "").strip() or DEFAULT_BACKEND
        backend_obj = self.get(wanted)
        if backend_obj is None:
            raise UnsupportedBackendError(wanted)
        log.debug("using backend %s (%s)", backend_obj.name, backend_obj.module)
        return backend_obj.create(config)


# Global registry used across the app
REGISTRY = BackendRegistry()


def backend(
    *,
    name: str | None = None,
    description: str | None = None,
    aliases: list[str] | None = None,
    replace: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to register a factory function as a backend.

    The function name (snake_case → kebab-case) is the backend name if
    `name` is not provided; the docstring is the default description.
    """

    def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        backend_obj = Backend(
            name=(name or func.__name__).replace("_", "-"),
            description=(description or (func.__doc__ or "")).strip(),
            factory=func,
            aliases=aliases or [],
        )
        backend_obj.module = func.__module__
        REGISTRY.register(backend_obj, replace=replace)
        return func

    return wrapper


def register_backend(
    name_or_obj: str | Backend,
    factory: BackendFactory | None = None,
    *,
    description: str = "",
    replace: bool = False,
) -> Backend:
    """
    Explicit API for modules that register backends without the decorator.

        register_backend("age", make_age_crypter)
        register_backend(Backend(name="age", description="", factory=make_age_crypter))
    """
    if isinstance(name_or_obj, Backend):
        backend_obj = name_or_obj
    else:
        if factory is None:
            raise TypeError("register_backend() needs a factory when given a name")
        backend_obj = Backend(
            name=name_or_obj,
            description=description,
            factory=factory,
            module=getattr(factory, "__module__", ""),
        )
    REGISTRY.register(backend_obj, replace=replace)
    return backend_obj


def get_crypter(config: Any = None, registry: BackendRegistry | None = None) -> Crypter:
    """Resolve the configured backend (ACME_CRYPT_BACKEND, default gpg)."""
    if config is None:
        from acmecrypt.config import load_config
        config = load_config()
    return (registry or REGISTRY).resolve(getattr(config, "backend", None), config)
