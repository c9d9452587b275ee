from __future__ import annotations

import pytest

from acmecrypt.backends import Backend, BackendRegistry, REGISTRY, get_crypter
from acmecrypt.config import AppConfig
from acmecrypt.errors import ConfigError, UnsupportedBackendError
from acmecrypt.interface import load_backends
from acmecrypt.plugins.gpg.gpg import GPGCrypter
from tests.fakes import FakeCrypter


def _counting_backend(name: str, calls: list) -> Backend:
    def factory(config):
        calls.append(config)
        return FakeCrypter()

    return Backend(name=name, description="test", factory=factory)


def test_default_name_resolves_default_backend():
    calls: list = []
    registry = BackendRegistry()
    registry.register(_counting_backend("gpg", calls))

    crypter = registry.resolve(None, AppConfig())
    assert isinstance(crypter, FakeCrypter)
    assert len(calls) == 1
    assert registry.resolve("", AppConfig()) is not crypter  # new object per call


def test_unknown_backend_raises_without_constructing():
    calls: list = []
    registry = BackendRegistry()
    registry.register(_counting_backend("gpg", calls))

    with pytest.raises(UnsupportedBackendError) as ei:
        registry.resolve("rot13", AppConfig(backend="rot13"))
    assert isinstance(ei.value, ConfigError)
    assert "rot13" in str(ei.value)
    assert calls == []


def test_names_are_case_insensitive_and_aliases_resolve():
    registry = BackendRegistry()
    b = _counting_backend("Age", [])
    b.aliases = ["rage"]
    registry.register(b)
    assert registry.get("AGE") is b
    assert registry.get("rage") is b
    assert sorted(registry.names()) == ["age", "rage"]


def test_duplicate_registration_rejected_unless_replace():
    registry = BackendRegistry()
    first = _counting_backend("gpg", [])
    registry.register(first)
    registry.register(first)  # same object: no-op

    second = _counting_backend("gpg", [])
    with pytest.raises(ValueError):
        registry.register(second)
    registry.register(second, replace=True)
    assert registry.get("gpg") is second


def test_builtin_gpg_backend_is_default():
    load_backends()
    crypter = get_crypter(AppConfig(recipient="alice@example.org"))
    assert isinstance(crypter, GPGCrypter)
    assert crypter.recipient == "alice@example.org"
    assert REGISTRY.get("gnupg") is REGISTRY.get("gpg")


def test_gpg_requires_recipient():
    load_backends()
    with pytest.raises(ConfigError, match="ACME_CRYPT_RCPT"):
        get_crypter(AppConfig(recipient=None))


def test_get_crypter_loads_config_from_environment(monkeypatch):
    load_backends()
    monkeypatch.setenv("ACME_CRYPT_RCPT", "bob@example.org")
    crypter = get_crypter()
    assert isinstance(crypter, GPGCrypter)
    assert crypter.recipient == "bob@example.org"
