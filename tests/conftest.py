import os

import pytest

from exercism_api import config


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep EXERCISM_* variables from the real environment out of tests."""
    for name in list(os.environ):
        if name.startswith("EXERCISM_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "_settings", None)
    yield
