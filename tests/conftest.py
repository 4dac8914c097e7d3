import pytest

from planner_api.settings import reset_settings


@pytest.fixture
def api_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'planner.db'}")
    monkeypatch.setenv("BACKEND_SESSION_SECRET", "test-secret")
    monkeypatch.setenv("ALLOWED_USERS", "alice@example.com,bob@example.com")
    reset_settings()
    yield
    reset_settings()
