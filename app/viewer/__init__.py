"""
Viewer state layer: map surface, place search, content browser and the
sessions that compose them.
"""

from .map_handle import MapHandle
from .map_surface import MapSurface
from .content_browser import ContentBrowser
from .place_search import PlaceSearch, SearchOutcome
from .session import ViewerSession
from .registry import SessionRegistry

__all__ = [
    "MapHandle",
    "MapSurface",
    "ContentBrowser",
    "PlaceSearch",
    "SearchOutcome",
    "ViewerSession",
    "SessionRegistry",
]
