"""
Dependency injection setup for FastAPI.
Provides dependency providers for the upstream services and the viewer
session registry.
"""

from typing import Optional
import logging

from app.config.settings import Settings, get_settings
from app.models.internal_models import Coordinate
from app.services.geocoding_service import GeocodingService
from app.services.geosearch_client import GeosearchClient
from app.services.nearby_content_service import NearbyContentService
from app.viewer.map_handle import MapHandle
from app.viewer.map_surface import MapSurface
from app.viewer.place_search import PlaceSearch
from app.viewer.registry import SessionRegistry
from app.viewer.session import ViewerSession


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for managing application services.

    Services are created on first use, so request handlers work whether or
    not the application lifespan ran.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._geocoding_service: Optional[GeocodingService] = None
        self._nearby_content_service: Optional[NearbyContentService] = None
        self._session_registry: Optional[SessionRegistry] = None
        self._initialized = False

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def initialize_services(self) -> None:
        if self._initialized:
            return

        logger.info("Initializing service container")
        self._geocoding_service = GeocodingService(self.settings.geocoder)
        self._nearby_content_service = NearbyContentService(
            GeosearchClient(self.settings.content)
        )
        self._session_registry = SessionRegistry(self.build_session)
        self._initialized = True
        logger.info("Service container initialization completed")

    def cleanup_services(self) -> None:
        logger.info("Cleaning up service container")
        if self._session_registry is not None:
            self._session_registry.close_all()
        self._session_registry = None
        self._nearby_content_service = None
        self._geocoding_service = None
        self._initialized = False

    def build_session(self, session_id: str) -> ViewerSession:
        """Create a viewer session with its own map handle and default view."""
        map_settings = self.settings.map
        handle = MapHandle(
            center=Coordinate(map_settings.default_latitude, map_settings.default_longitude),
            zoom=map_settings.default_zoom,
        )
        surface = MapSurface(handle)
        return ViewerSession(
            session_id=session_id,
            surface=surface,
            place_search=PlaceSearch(
                self.get_geocoding_service(), surface, focus_zoom=map_settings.focus_zoom
            ),
            nearby=self.get_nearby_content_service(),
            focus_zoom=map_settings.focus_zoom,
            summary_chars=map_settings.summary_preview_chars,
        )

    def get_geocoding_service(self) -> GeocodingService:
        self.initialize_services()
        return self._geocoding_service

    def get_nearby_content_service(self) -> NearbyContentService:
        self.initialize_services()
        return self._nearby_content_service

    def get_session_registry(self) -> SessionRegistry:
        self.initialize_services()
        return self._session_registry


# Global service container instance
service_container = ServiceContainer()


def get_geocoding_service() -> GeocodingService:
    """Dependency provider for the geocoding service."""
    return service_container.get_geocoding_service()


def get_session_registry() -> SessionRegistry:
    """Dependency provider for the viewer session registry."""
    return service_container.get_session_registry()
