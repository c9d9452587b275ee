#!/usr/bin/env python3
# acmecrypt/interface/loader.py
from __future__ import annotations

"""
Dynamic backend loader.

Features:
- Imports all modules under a given package (default: 'acmecrypt.plugins').
- Supports 'entrypoint.py' inside a subpackage registering BACKEND/BACKENDS.
- Imports extra plugin modules named in ACME_CRYPT_PLUGINS.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType
from typing import Iterable

from acmecrypt.backends import REGISTRY, Backend, BackendRegistry
from acmecrypt.errors import ConfigError

log = logging.getLogger(__name__)

BUILTIN_PACKAGE = "acmecrypt.plugins"


def _register_from_entry_module(module: ModuleType, registry: BackendRegistry) -> int:
    """Register BACKEND/BACKENDS exported by an entry module, if present."""
    registered_count = 0
    if registry is not REGISTRY:
        # @backend always registers globally; mirror this module's entries
        for decorated in REGISTRY.all():
            if decorated.module == module.__name__ and registry.get(decorated.name) is None:
                registry.register(decorated)
                registered_count += 1
    obj = getattr(module, "BACKEND", None)
    if isinstance(obj, Backend):
        registry.register(obj)
        registered_count += 1
    objs = getattr(module, "BACKENDS", None)
    if isinstance(objs, Iterable):
        for item in objs:
            if isinstance(item, Backend):
                registry.register(item)
                registered_count += 1
    return registered_count


def _import(module_name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except Exception as exc:
        raise ConfigError(f"cannot import backend plugin {module_name!r}: {exc}") from exc


def load_backends(
    package: str = BUILTIN_PACKAGE,
    extra: Iterable[str] = (),
    *,
    registry: BackendRegistry | None = None,
) -> int:
    """
    Import all backend modules under `package`, then each module in `extra`.

    Supported layouts:
      1) Plain modules: plugins/foo.py -> import plugins.foo
      2) Packages with an entrypoint: plugins/bar/entrypoint.py
         -> import plugins.bar.entrypoint
            and register BACKEND/BACKENDS if present.

    Decorated factories register themselves at import time. Safe to call
    more than once. Returns the number of modules loaded.
    """
    registry = registry or REGISTRY
    pkg = _import(package)
    package_paths = [str(p) for p in getattr(pkg, "__path__", [])]

    if not package_paths:
        raise ConfigError(f"'{package}' must be a package (folder) with modules.")

    loaded_count = 0
    for base_path in package_paths:
        for modinfo in pkgutil.iter_modules([base_path]):
            module_name = modinfo.name
            if module_name.startswith("_"):
                # Ignore private modules
                continue

            if modinfo.ispkg and (Path(base_path) / module_name / "entrypoint.py").exists():
                module = _import(f"{package}.{module_name}.entrypoint")
            else:
                module = _import(f"{package}.{module_name}")
            _register_from_entry_module(module, registry)
            loaded_count += 1

    for module_name in extra:
        module = _import(module_name)
        _register_from_entry_module(module, registry)
        loaded_count += 1

    log.debug("loaded %d backend modules: %s", loaded_count, ", ".join(registry.names()))
    return loaded_count
