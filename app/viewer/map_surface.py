"""
Map surface: single source of truth for the viewport, the mounted tile
layer and the overlay markers of one view.
"""

import logging
from typing import Iterable, Optional

from app.models.internal_models import (
    Coordinate,
    Marker,
    MarkerStyle,
    TILE_LAYERS,
    TileLayerId,
    ViewportState,
)
from app.viewer.map_handle import MapHandle, POI_OVERLAY, SEARCH_OVERLAY, USER_OVERLAY

logger = logging.getLogger(__name__)


class MapSurface:
    def __init__(
        self,
        handle: MapHandle,
        layer_id: TileLayerId = TileLayerId.STANDARD,
    ):
        self.handle = handle
        self._viewport = ViewportState(
            center=handle.center,
            zoom_level=handle.zoom,
            active_layer_id=layer_id,
        )
        handle.add_tile_layer(TILE_LAYERS[layer_id])

    @property
    def viewport(self) -> ViewportState:
        return self._viewport

    def set_center(self, coordinate: Coordinate, zoom: Optional[int] = None) -> None:
        """Recenter the view; ``zoom=None`` keeps the current zoom level."""
        if zoom is None:
            zoom = self._viewport.zoom_level
        self._viewport.center = coordinate
        self._viewport.zoom_level = zoom
        self.handle.set_view(coordinate, zoom)

    def set_active_layer(self, layer_id: TileLayerId) -> None:
        """
        Swap the tile source. The previous layer is detached before the new
        one is attached, so exactly one tile layer is ever mounted.
        """
        layer_id = TileLayerId(layer_id)
        if layer_id == self._viewport.active_layer_id and self.handle.tile_layer is not None:
            return
        detached = self.handle.remove_tile_layer()
        self.handle.add_tile_layer(TILE_LAYERS[layer_id])
        self._viewport.active_layer_id = layer_id
        logger.debug(
            f"Switched tile layer {detached.layer_id.value if detached else None} -> {layer_id.value}"
        )

    def replace_markers(self, markers: Iterable[Marker]) -> None:
        """Clear the point-of-interest overlay, then add ``markers``."""
        self.handle.clear_overlay(POI_OVERLAY)
        for marker in markers:
            self.handle.add_marker(POI_OVERLAY, marker)

    def set_user_marker(self, coordinate: Coordinate) -> None:
        self.handle.clear_overlay(USER_OVERLAY)
        self.handle.add_marker(
            USER_OVERLAY,
            Marker(
                coordinate=coordinate,
                visual_style=MarkerStyle.USER_LOCATION,
                tooltip="You are here",
            ),
        )

    def set_search_marker(self, coordinate: Coordinate, label: str) -> None:
        """Pin the latest place search match; replaces any earlier pin."""
        self.handle.clear_overlay(SEARCH_OVERLAY)
        self.handle.add_marker(
            SEARCH_OVERLAY,
            Marker(
                coordinate=coordinate,
                visual_style=MarkerStyle.SEARCH_RESULT,
                tooltip=label,
            ),
        )

    @property
    def poi_markers(self) -> list[Marker]:
        return self.handle.markers(POI_OVERLAY)

    @property
    def user_marker(self) -> Optional[Marker]:
        markers = self.handle.markers(USER_OVERLAY)
        return markers[0] if markers else None

    @property
    def search_marker(self) -> Optional[Marker]:
        markers = self.handle.markers(SEARCH_OVERLAY)
        return markers[0] if markers else None

    def render_html(self) -> str:
        return self.handle.render_html()
