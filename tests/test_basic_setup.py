"""
Basic test to verify the project setup is working correctly.
"""

import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.core.dependencies import ServiceContainer


def test_app_creation():
    """Test that the FastAPI app can be created successfully."""
    assert app is not None
    assert app.title == "Map Explorer"


def test_root_endpoint():
    """Test the root endpoint returns expected response."""
    client = TestClient(app)
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data
    assert "status" in data
    assert data["status"] == "running"


def test_lifespan_initializes_and_cleans_up_services():
    """Test that startup wires the container and shutdown closes sessions."""
    with TestClient(app) as client:
        container = app.state.service_container
        before = len(container.get_session_registry())
        client.post("/viewer/sessions")
        assert len(container.get_session_registry()) == before + 1

    assert container._session_registry is None


def test_service_container_builds_independent_sessions():
    """Each session owns its own map handle."""
    container = ServiceContainer()
    first = container.build_session("a")
    second = container.build_session("b")

    first.set_layer("explore")

    assert first.surface.handle is not second.surface.handle
    assert second.surface.viewport.active_layer_id.value == "standard"


if __name__ == "__main__":
    pytest.main([__file__])
