"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove PITCH_REPORT__ env vars so settings come from defaults and test YAML only."""
    for key in list(os.environ):
        if key.startswith("PITCH_REPORT__"):
            monkeypatch.delenv(key)
