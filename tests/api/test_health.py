import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from om2chat.api.deps import get_document_store, get_settings_dependency
from om2chat.api.main import create_app
from om2chat.configs import Settings
from om2chat.configs.llm import LLMSettings


@pytest.fixture
def store():
    store = AsyncMock()
    store.ping = AsyncMock(return_value=True)
    return store


def make_client(store, api_key="sk-test"):
    app = create_app()
    settings = Settings(llm=LLMSettings(api_key=api_key))
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_settings_dependency] = lambda: settings
    return TestClient(app)


def test_health_check(store):
    response = make_client(store).get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "checks": {"openai": True, "database": True},
    }


def test_health_check_without_api_key(store):
    response = make_client(store, api_key=None).get("/api/v1/health")
    assert response.status_code == 503
    assert response.json() == {
        "status": "unhealthy",
        "checks": {"openai": False, "database": True},
    }


def test_health_check_db_down(store):
    store.ping.side_effect = ConnectionRefusedError("connection refused")
    response = make_client(store).get("/api/v1/health")
    assert response.status_code == 503
    assert response.json()["checks"] == {"openai": True, "database": False}
