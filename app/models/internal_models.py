"""
Internal data models and enums for the map explorer backend.

This module contains the view-model structures shared by the upstream
clients and the viewer state layer: coordinates, points of interest,
search matches and viewport state.
"""

from dataclasses import dataclass
from typing import Optional, Any, Dict
from enum import Enum


class TileLayerId(str, Enum):
    """Interchangeable base map tile sources"""
    STANDARD = "standard"
    SATELLITE = "satellite"
    EXPLORE = "explore"


class MarkerStyle(str, Enum):
    """Visual style of an overlay marker"""
    POI = "poi"
    USER_LOCATION = "user_location"
    SEARCH_RESULT = "search_result"


@dataclass(frozen=True)
class Coordinate:
    """WGS84 latitude/longitude pair"""
    lat: float
    lon: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lon)

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}


@dataclass(frozen=True)
class Thumbnail:
    """Page image attached to a point of interest"""
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True)
class PointOfInterest:
    """Hydrated encyclopedia article located near a coordinate"""
    id: str
    title: str
    summary_text: str
    canonical_url: str
    coordinate: Optional[Coordinate] = None
    thumbnail: Optional[Thumbnail] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "summary_text": self.summary_text,
            "canonical_url": self.canonical_url,
            "coordinate": self.coordinate.to_dict() if self.coordinate else None,
            "thumbnail": (
                {
                    "url": self.thumbnail.url,
                    "width": self.thumbnail.width,
                    "height": self.thumbnail.height,
                }
                if self.thumbnail
                else None
            ),
        }


@dataclass(frozen=True)
class SearchResult:
    """First geocoder match, used once to recenter the viewport"""
    display_name: str
    coordinate: Coordinate


@dataclass
class ViewportState:
    """Current map center, zoom level and mounted tile layer"""
    center: Coordinate
    zoom_level: int
    active_layer_id: TileLayerId = TileLayerId.STANDARD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "center": self.center.to_dict(),
            "zoom_level": self.zoom_level,
            "active_layer_id": self.active_layer_id.value,
        }


@dataclass(frozen=True)
class TileLayer:
    """XYZ tile source template"""
    layer_id: TileLayerId
    url_template: str
    attribution: str


OSM_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)

TILE_LAYERS: Dict[TileLayerId, TileLayer] = {
    TileLayerId.STANDARD: TileLayer(
        layer_id=TileLayerId.STANDARD,
        url_template="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        attribution=OSM_ATTRIBUTION,
    ),
    TileLayerId.SATELLITE: TileLayer(
        layer_id=TileLayerId.SATELLITE,
        url_template=(
            "https://server.arcgisonline.com/ArcGIS/rest/services/"
            "World_Imagery/MapServer/tile/{z}/{y}/{x}"
        ),
        attribution="Tiles &copy; Esri",
    ),
    TileLayerId.EXPLORE: TileLayer(
        layer_id=TileLayerId.EXPLORE,
        url_template="https://{s}.tile.opentopomap.org/{z}/{x}/{y}.png",
        attribution=OSM_ATTRIBUTION + ', <a href="https://opentopomap.org">OpenTopoMap</a>',
    ),
}


@dataclass
class PopupFragment:
    """Toolkit-independent preview shown when a POI marker is activated"""
    coordinate: Coordinate
    title: str
    summary: str
    url: str
    thumbnail: Optional[Thumbnail] = None


@dataclass
class Marker:
    """Overlay marker with the payload surfaced on selection"""
    coordinate: Coordinate
    visual_style: MarkerStyle
    on_select: Optional[PopupFragment] = None
    tooltip: Optional[str] = None
