"""
Owned handle on the Leaflet map widget.

The handle mirrors what is mounted on the map (view, one tile layer, named
marker overlays) and renders it as a Leaflet page with folium. It is created
per view and passed explicitly to the map surface.
"""

import logging
from typing import Dict, List, Optional

import folium
from branca.element import MacroElement
from jinja2 import Template

from app.models.internal_models import Coordinate, Marker, MarkerStyle, TileLayer
from app.viewer.popup import render_popup_html

logger = logging.getLogger(__name__)

POI_OVERLAY = "points_of_interest"
USER_OVERLAY = "user_location"
SEARCH_OVERLAY = "search_result"

_OVERLAY_NAMES = {
    POI_OVERLAY: "Points of interest",
    USER_OVERLAY: "Your location",
    SEARCH_OVERLAY: "Search result",
}


class ZoomControl(MacroElement):
    """Leaflet zoom control anchored at a corner of the map."""

    _template = Template(
        """
        {% macro script(this, kwargs) %}
            L.control.zoom({position: {{ this.position|tojson }}}).addTo({{ this._parent.get_name() }});
        {% endmacro %}
        """
    )

    def __init__(self, position: str = "bottomright"):
        super().__init__()
        self._name = "ZoomControl"
        self.position = position


class MapHandle:
    """Mounted state of one map widget."""

    def __init__(self, center: Coordinate, zoom: int):
        self.center = center
        self.zoom = zoom
        self.tile_layer: Optional[TileLayer] = None
        self.overlays: Dict[str, List[Marker]] = {name: [] for name in _OVERLAY_NAMES}

    def set_view(self, center: Coordinate, zoom: int) -> None:
        self.center = center
        self.zoom = zoom

    def add_tile_layer(self, layer: TileLayer) -> None:
        if self.tile_layer is not None:
            raise RuntimeError(
                f"Tile layer '{self.tile_layer.layer_id.value}' is still mounted"
            )
        self.tile_layer = layer

    def remove_tile_layer(self) -> Optional[TileLayer]:
        detached, self.tile_layer = self.tile_layer, None
        return detached

    def clear_overlay(self, overlay: str) -> None:
        self.overlays[overlay] = []

    def add_marker(self, overlay: str, marker: Marker) -> None:
        self.overlays[overlay].append(marker)

    def markers(self, overlay: str) -> List[Marker]:
        return list(self.overlays[overlay])

    def to_folium(self) -> folium.Map:
        """Build a folium map reflecting the mounted state."""
        fmap = folium.Map(
            location=list(self.center.as_tuple()),
            zoom_start=self.zoom,
            tiles=None,
            zoom_control=False,
        )
        if self.tile_layer is not None:
            folium.TileLayer(
                tiles=self.tile_layer.url_template,
                attr=self.tile_layer.attribution,
                name=self.tile_layer.layer_id.value,
            ).add_to(fmap)
        ZoomControl("bottomright").add_to(fmap)

        for overlay, markers in self.overlays.items():
            group = folium.FeatureGroup(name=_OVERLAY_NAMES[overlay])
            for marker in markers:
                _folium_marker(marker).add_to(group)
            group.add_to(fmap)
        return fmap

    def render_html(self) -> str:
        return self.to_folium().get_root().render()


def _folium_marker(marker: Marker):
    location = list(marker.coordinate.as_tuple())
    if marker.visual_style == MarkerStyle.USER_LOCATION:
        return folium.CircleMarker(
            location=location,
            radius=8,
            color="#2563eb",
            fill=True,
            fill_opacity=0.8,
            tooltip=marker.tooltip,
        )

    if marker.visual_style == MarkerStyle.SEARCH_RESULT:
        return folium.Marker(
            location=location,
            tooltip=marker.tooltip,
            icon=folium.Icon(color="blue", icon="map-marker"),
        )

    popup = None
    if marker.on_select is not None:
        popup = folium.Popup(render_popup_html(marker.on_select), max_width=260)
    return folium.Marker(
        location=location,
        popup=popup,
        tooltip=marker.tooltip,
        icon=folium.Icon(color="red", icon="info-sign"),
    )
