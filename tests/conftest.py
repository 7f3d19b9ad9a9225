"""
Shared fixtures: settings for the upstream clients, fake upstreams and
viewer sessions wired to them.
"""

from typing import Callable

import pytest

from app.config.settings import ContentSettings, GeocoderSettings
from app.models.internal_models import Coordinate
from app.services.geocoding_service import GeocodingService
from app.services.geosearch_client import GeosearchClient
from app.services.nearby_content_service import NearbyContentService
from app.viewer.map_handle import MapHandle
from app.viewer.map_surface import MapSurface
from app.viewer.place_search import PlaceSearch
from app.viewer.session import ViewerSession
from tests.fakes import CONTENT_URL, GEOCODER_URL, FakeGeocoder, FakeWiki


@pytest.fixture
def geocoder_settings() -> GeocoderSettings:
    return GeocoderSettings(api_url=GEOCODER_URL, user_agent="MapExplorerTests/1.0")


@pytest.fixture
def content_settings() -> ContentSettings:
    return ContentSettings(api_url=CONTENT_URL, user_agent="MapExplorerTests/1.0")


@pytest.fixture
def fake_geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def fake_wiki() -> FakeWiki:
    return FakeWiki()


@pytest.fixture
def geocoding_service(geocoder_settings, fake_geocoder) -> GeocodingService:
    return GeocodingService(geocoder_settings, transport=fake_geocoder.transport)


@pytest.fixture
def geosearch_client(content_settings, fake_wiki) -> GeosearchClient:
    return GeosearchClient(content_settings, transport=fake_wiki.transport)


@pytest.fixture
def nearby_service(geosearch_client) -> NearbyContentService:
    return NearbyContentService(geosearch_client)


@pytest.fixture
def map_surface() -> MapSurface:
    return MapSurface(MapHandle(center=Coordinate(51.505, -0.09), zoom=13))


@pytest.fixture
def session_factory(geocoding_service, nearby_service) -> Callable[..., ViewerSession]:
    def build(session_id: str = "test-session", nearby=None) -> ViewerSession:
        surface = MapSurface(MapHandle(center=Coordinate(51.505, -0.09), zoom=13))
        return ViewerSession(
            session_id=session_id,
            surface=surface,
            place_search=PlaceSearch(geocoding_service, surface, focus_zoom=13),
            nearby=nearby or nearby_service,
        )
    return build
