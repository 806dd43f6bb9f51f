"""Shared pytest fixtures."""

import os

import pytest
import structlog


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate configuration from the host environment."""
    for key in list(os.environ):
        if key.startswith("NTU_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("CONFIG_PATH", "")
    monkeypatch.chdir(tmp_path)
    yield monkeypatch
    structlog.reset_defaults()
