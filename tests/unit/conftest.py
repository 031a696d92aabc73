"""
Fixtures shared by the unit tests.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def clear_validation_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep VALIDATION_* variables of the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("VALIDATION_"):
            monkeypatch.delenv(key)
