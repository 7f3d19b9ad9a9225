"""Place search: free-text query to a recentered viewport."""
import logging
from dataclasses import dataclass
from typing import Optional

from app.core.exceptions import MapExplorerException
from app.models.internal_models import SearchResult
from app.services.geocoding_service import GeocodingService, parse_first_result
from app.viewer.map_surface import MapSurface

logger = logging.getLogger(__name__)

# Queries must be longer than this to reach the geocoder
MIN_QUERY_LENGTH = 2


@dataclass
class SearchOutcome:
    dispatched: bool
    match: Optional[SearchResult] = None


class PlaceSearch:
    def __init__(self, geocoder: GeocodingService, surface: MapSurface, focus_zoom: int = 13):
        self.geocoder = geocoder
        self.surface = surface
        self.focus_zoom = focus_zoom

    async def submit(self, query: Optional[str]) -> SearchOutcome:
        """
        Geocode ``query`` and recenter on the first match.

        Failures and empty results leave the view untouched; they are only
        logged.
        """
        query = (query or "").strip()
        if len(query) <= MIN_QUERY_LENGTH:
            return SearchOutcome(dispatched=False)

        try:
            payload = await self.geocoder.search(query)
        except MapExplorerException as e:
            logger.error(
                f"Place search failed for '{query}': {e.message}",
                extra={"error_code": e.error_code.value, "details": e.details},
            )
            return SearchOutcome(dispatched=True)

        match = parse_first_result(payload)
        if match is None:
            logger.info(f"No places found for '{query}'")
            return SearchOutcome(dispatched=True)

        self.surface.set_center(match.coordinate, self.focus_zoom)
        self.surface.set_search_marker(match.coordinate, match.display_name)
        logger.info(
            f"Recentered on '{match.display_name}'",
            extra={"lat": match.coordinate.lat, "lon": match.coordinate.lon},
        )
        return SearchOutcome(dispatched=True, match=match)
