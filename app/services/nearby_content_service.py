"""Nearby content service: discovery followed by batched hydration."""
import logging
from typing import List, Optional

from app.core.exceptions import UpstreamError
from app.models.internal_models import Coordinate, PointOfInterest
from app.services.geosearch_client import GeosearchClient

logger = logging.getLogger(__name__)


class NearbyContentService:
    def __init__(self, client: Optional[GeosearchClient] = None):
        self.client = client or GeosearchClient()

    async def fetch(self, center: Coordinate) -> List[PointOfInterest]:
        """
        Points of interest around ``center``.

        Never raises for collaborator failures: any failure in either phase
        yields an empty list so the caller replaces, rather than merges, what
        it showed before.
        """
        try:
            page_ids = await self.client.discover(center)
            if not page_ids:
                return []
            records = await self.client.hydrate(page_ids)
        except UpstreamError as e:
            logger.error(
                f"Nearby content fetch failed at {center.lat},{center.lon}: {e.cause or e.message}",
                extra={"service": e.service, "upstream_status": e.upstream_status},
            )
            return []

        pois = [poi for poi in records if poi.coordinate is not None]
        dropped = len(records) - len(pois)
        if dropped:
            logger.debug(f"Dropped {dropped} hydrated records without coordinates")
        return pois
