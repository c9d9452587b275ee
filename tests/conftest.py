import os
import sys

import pytest


def pytest_configure():
    # Ensure the repository root is importable for `acmecrypt.*` imports
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    if root not in sys.path:
        sys.path.insert(0, root)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    # No user config files or ACME_CRYPT_* settings leak into tests
    for key in list(os.environ):
        if key.startswith("ACME_CRYPT_") or key == "winid":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ACME_CRYPT_CONFIG_DIR", str(tmp_path / "no-config"))
