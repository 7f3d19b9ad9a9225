# Business logic services

from .geocoding_service import GeocodingService, parse_first_result
from .geosearch_client import GeosearchClient, parse_page
from .nearby_content_service import NearbyContentService

__all__ = [
    "GeocodingService",
    "parse_first_result",
    "GeosearchClient",
    "parse_page",
    "NearbyContentService",
]
