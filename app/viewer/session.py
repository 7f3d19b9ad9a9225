"""
Viewer session: the server-held state of one open map view.

Composes the map surface, place search and content browser, and applies
the trigger policy for nearby content: after the one-shot geolocation,
after every finished pan/zoom, and after a successful place search.

Overlapping nearby fetches are sequenced with a monotonically increasing
token; a result is applied only if its token is still the latest issued.
"""

import logging
from typing import Any, Dict, List, Optional

from app.models.internal_models import (
    Coordinate,
    Marker,
    MarkerStyle,
    PointOfInterest,
    TileLayerId,
)
from app.services.nearby_content_service import NearbyContentService
from app.viewer.content_browser import ContentBrowser
from app.viewer.map_surface import MapSurface
from app.viewer.place_search import PlaceSearch, SearchOutcome
from app.viewer.popup import build_popup

logger = logging.getLogger(__name__)


class ViewerSession:
    def __init__(
        self,
        session_id: str,
        surface: MapSurface,
        place_search: PlaceSearch,
        nearby: NearbyContentService,
        focus_zoom: int = 13,
        summary_chars: int = 150,
    ):
        self.session_id = session_id
        self.surface = surface
        self.place_search = place_search
        self.nearby = nearby
        self.browser = ContentBrowser()
        self.focus_zoom = focus_zoom
        self.summary_chars = summary_chars
        self.user_location: Optional[Coordinate] = None
        self._geolocation_reported = False
        self._issued_token = 0

    async def report_geolocation(self, coordinate: Optional[Coordinate]) -> bool:
        """
        Accept the result of the one-shot geolocation query.

        Only the first report counts; a missing coordinate (permission denied,
        unsupported device) is logged and blocks nothing else.
        """
        if self._geolocation_reported:
            logger.info(f"Session {self.session_id}: geolocation already reported, ignoring")
            return False
        self._geolocation_reported = True

        if coordinate is None:
            logger.info(f"Session {self.session_id}: geolocation unavailable")
            return False

        self.user_location = coordinate
        self.surface.set_center(coordinate, self.focus_zoom)
        self.surface.set_user_marker(coordinate)
        await self.refresh_nearby(coordinate)
        return True

    def center_on_user(self) -> bool:
        if self.user_location is None:
            return False
        self.surface.set_center(self.user_location, self.focus_zoom)
        return True

    async def search(self, query: Optional[str]) -> SearchOutcome:
        outcome = await self.place_search.submit(query)
        if outcome.match is not None:
            await self.refresh_nearby(outcome.match.coordinate)
        return outcome

    async def viewport_moved(self, center: Coordinate, zoom: int) -> bool:
        """Record the viewport after a pan/zoom gesture and refresh nearby content."""
        self.surface.set_center(center, zoom)
        return await self.refresh_nearby(center)

    def set_layer(self, layer_id: TileLayerId) -> None:
        self.surface.set_active_layer(layer_id)

    def next_item(self) -> Optional[int]:
        return self.browser.next()

    def previous_item(self) -> Optional[int]:
        return self.browser.previous()

    async def refresh_nearby(self, center: Coordinate) -> bool:
        """
        Fetch nearby content for ``center`` and apply it if no newer fetch
        was issued meanwhile. Returns whether the result was applied.
        """
        self._issued_token += 1
        token = self._issued_token

        pois = await self.nearby.fetch(center)

        if token != self._issued_token:
            logger.info(
                f"Session {self.session_id}: discarding stale nearby result",
                extra={"token": token, "latest_token": self._issued_token},
            )
            return False

        self._apply(pois)
        return True

    def _apply(self, pois: List[PointOfInterest]) -> None:
        self.browser.replace(pois)
        self.surface.replace_markers(
            Marker(
                coordinate=poi.coordinate,
                visual_style=MarkerStyle.POI,
                on_select=build_popup(poi, self.summary_chars),
                tooltip=poi.title,
            )
            for poi in pois
        )

    def snapshot(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "viewport": self.surface.viewport.to_dict(),
            "user_location": self.user_location.to_dict() if self.user_location else None,
            "search_location": (
                self.surface.search_marker.coordinate.to_dict()
                if self.surface.search_marker else None
            ),
            "marker_count": len(self.surface.poi_markers),
            "browser": self.browser.card(),
        }

    def render_map(self) -> str:
        return self.surface.render_html()
