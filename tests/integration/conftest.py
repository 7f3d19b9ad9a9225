import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import (
    ServiceContainer,
    get_geocoding_service,
    get_session_registry,
)
from app.main import app
from app.services.nearby_content_service import NearbyContentService
from app.viewer.registry import SessionRegistry


@pytest.fixture
def container(geocoding_service, geosearch_client, monkeypatch):
    """Service container whose upstream clients talk to the fakes."""
    container = ServiceContainer()
    monkeypatch.setattr(container, "get_geocoding_service", lambda: geocoding_service)
    nearby = NearbyContentService(geosearch_client)
    monkeypatch.setattr(container, "get_nearby_content_service", lambda: nearby)
    return container


@pytest.fixture
def registry(container) -> SessionRegistry:
    return SessionRegistry(container.build_session)


@pytest.fixture
def client(geocoding_service, registry):
    app.dependency_overrides[get_geocoding_service] = lambda: geocoding_service
    app.dependency_overrides[get_session_registry] = lambda: registry
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
