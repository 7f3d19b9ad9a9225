"""
Marker preview content.

``build_popup`` maps a point of interest to a toolkit-independent fragment;
``render_popup_html`` turns that fragment into escaped HTML for Leaflet.
"""

import html
from typing import Any, Optional

from app.models.internal_models import PointOfInterest, PopupFragment


def truncate_summary(text: Optional[str], max_chars: int) -> str:
    """Trim to ``max_chars`` on a word boundary, ending with an ellipsis."""
    if not text:
        return ""
    text = " ".join(text.split())
    if len(text) <= max_chars:
        return text
    cut = text[: max_chars - 1]
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip(" ,.;:") + "…"


def build_popup(poi: PointOfInterest, max_chars: int = 150) -> PopupFragment:
    if poi.coordinate is None:
        raise ValueError(f"Point of interest '{poi.id}' has no coordinate")
    return PopupFragment(
        coordinate=poi.coordinate,
        title=poi.title,
        summary=truncate_summary(poi.summary_text, max_chars),
        url=poi.canonical_url,
        thumbnail=poi.thumbnail,
    )


def _esc(value: Any) -> str:
    if value is None:
        return ""
    escaped = html.escape(str(value))
    # Braces would otherwise be read as template tags when folium renders
    return escaped.replace("{", "&#123;").replace("}", "&#125;")


def render_popup_html(fragment: PopupFragment) -> str:
    parts = ['<div class="poi-popup">', f"<h3>{_esc(fragment.title)}</h3>"]
    if fragment.thumbnail is not None:
        size = ""
        if fragment.thumbnail.width and fragment.thumbnail.height:
            size = f' width="{int(fragment.thumbnail.width)}" height="{int(fragment.thumbnail.height)}"'
        parts.append(
            f'<img src="{_esc(fragment.thumbnail.url)}" alt="{_esc(fragment.title)}"'
            f' style="max-width:100%;height:auto"{size}>'
        )
    if fragment.summary:
        parts.append(f"<p>{_esc(fragment.summary)}</p>")
    if fragment.url:
        parts.append(
            f'<a href="{_esc(fragment.url)}" target="_blank" rel="noopener noreferrer">Read more</a>'
        )
    parts.append("</div>")
    return "".join(parts)
