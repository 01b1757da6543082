"""Shared pytest fixtures for typed-endpoint test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Provide an API test client for the demo application."""
    from typed_endpoint.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def _clear_runtime_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without an ambient runtime environment indicator."""
    monkeypatch.delenv("APP_ENV", raising=False)
