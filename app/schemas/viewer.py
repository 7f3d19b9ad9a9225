from pydantic import BaseModel, Field, model_validator
from typing import Optional

from app.models.internal_models import TileLayerId


class CoordinateRead(BaseModel):
    lat: float
    lon: float


class ThumbnailRead(BaseModel):
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


class PointOfInterestRead(BaseModel):
    id: str
    title: str
    summary_text: str
    canonical_url: str
    coordinate: Optional[CoordinateRead] = None
    thumbnail: Optional[ThumbnailRead] = None


class BrowserCard(BaseModel):
    item: Optional[PointOfInterestRead] = None
    index: Optional[int] = None
    count: int
    can_navigate: bool


class ViewportRead(BaseModel):
    center: CoordinateRead
    zoom_level: int
    active_layer_id: TileLayerId


class ViewerSnapshot(BaseModel):
    session_id: str
    viewport: ViewportRead
    user_location: Optional[CoordinateRead] = None
    search_location: Optional[CoordinateRead] = None
    marker_count: int
    browser: BrowserCard


class SearchMatch(BaseModel):
    display_name: str
    coordinate: CoordinateRead


class SearchOutcomeRead(BaseModel):
    dispatched: bool
    match: Optional[SearchMatch] = None
    snapshot: ViewerSnapshot


class GeolocationReport(BaseModel):
    """Result of the client's one-shot geolocation query."""
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    error: Optional[str] = None

    @model_validator(mode='after')
    def check_pair(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be reported together")
        return self


class SearchRequest(BaseModel):
    query: str = ""


class ViewportUpdate(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    zoom: int = Field(ge=0, le=19)


class LayerChange(BaseModel):
    layer: TileLayerId
