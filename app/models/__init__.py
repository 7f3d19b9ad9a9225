"""
Models package for the map explorer backend.

API models describe HTTP responses; internal models are the view-model
structures used by the upstream clients and viewer sessions.
"""

# API Models
from .api_models import (
    HealthCheckResponse,
    StandardErrorResponse,
)

# Internal Models
from .internal_models import (
    TileLayerId,
    MarkerStyle,
    Coordinate,
    Thumbnail,
    PointOfInterest,
    SearchResult,
    ViewportState,
    TileLayer,
    TILE_LAYERS,
    PopupFragment,
    Marker,
)

__all__ = [
    # API Models
    "HealthCheckResponse",
    "StandardErrorResponse",
    # Internal Models
    "TileLayerId",
    "MarkerStyle",
    "Coordinate",
    "Thumbnail",
    "PointOfInterest",
    "SearchResult",
    "ViewportState",
    "TileLayer",
    "TILE_LAYERS",
    "PopupFragment",
    "Marker",
]
