"""Pytest configuration: ensures the project root is importable."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def _default_allow_list(monkeypatch):
    """Ignore any allow-list configured in the developer's environment or .env file."""
    monkeypatch.delenv("HEADING_CASE_ALLOW_LIST", raising=False)
    yield
