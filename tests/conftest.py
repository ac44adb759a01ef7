"""
Shared fixtures: every test gets its own empty data directory.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from staffing_api import config
from staffing_api.main import app
from staffing_api.store import reset_stores
from staffing_api.tokens import get_token_service


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point the stores at a fresh tmp directory for the duration of a test."""
    monkeypatch.setattr(config, "DATA_DIR", str(tmp_path / "data"))
    reset_stores()
    yield tmp_path / "data"
    reset_stores()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    credential = get_token_service().issue("test-client-id", "Test Client")
    return {"Authorization": f"Bearer {credential.token}"}


@pytest.fixture
def expired_headers() -> dict[str, str]:
    two_hours_ago = datetime.now(timezone.utc) - timedelta(hours=2)
    credential = get_token_service().issue("test-client-id", "Test Client", issued_at=two_hours_ago)
    return {"Authorization": f"Bearer {credential.token}"}
