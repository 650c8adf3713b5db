"""
HMMM SDK - Test Configuration
=============================

Shared pytest fixtures for the HMMM SDK test suite.
"""

import pytest

from hmmm_sdk.config import set_default_config


# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURATION ISOLATION
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture(autouse=True)
def reset_default_config(monkeypatch):
    """
    Fixture: Start every test from the built-in configuration.

    Clears HMMM_* variables from the environment and drops any cached
    default config so each test reads the environment afresh.
    """
    for name in (
        "HMMM_SOURCE_SUFFIX",
        "HMMM_BINARY_SUFFIX",
        "HMMM_MEMORY_SIZE",
        "HMMM_PREVIEW_LINES",
    ):
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def write_file(tmp_path):
    """Fixture: Write text to a file under tmp_path and return its path."""
    def _write(name: str, text: str):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
