import pytest

from app.models.internal_models import Coordinate, PointOfInterest, Thumbnail
from app.viewer.popup import build_popup, render_popup_html, truncate_summary


def _poi(**overrides):
    fields = dict(
        id="1",
        title="Tower Bridge",
        summary_text="Tower Bridge is a Grade I listed combined bascule and suspension bridge in London.",
        canonical_url="https://en.wikipedia.org/wiki/Tower_Bridge",
        coordinate=Coordinate(51.5055, -0.0754),
        thumbnail=Thumbnail("https://upload.test/tb.jpg", 300, 200),
    )
    fields.update(overrides)
    return PointOfInterest(**fields)


def test_truncate_keeps_short_text():
    assert truncate_summary("Short text.", 150) == "Short text."


def test_truncate_cuts_on_word_boundary():
    text = "word " * 60
    out = truncate_summary(text, 150)
    assert len(out) <= 150
    assert out.endswith("word…")


def test_truncate_handles_missing_text():
    assert truncate_summary(None, 150) == ""


def test_build_popup_maps_fields():
    fragment = build_popup(_poi(), max_chars=30)

    assert fragment.title == "Tower Bridge"
    assert fragment.coordinate == Coordinate(51.5055, -0.0754)
    assert fragment.url == "https://en.wikipedia.org/wiki/Tower_Bridge"
    assert len(fragment.summary) <= 30
    assert fragment.thumbnail.url == "https://upload.test/tb.jpg"


def test_build_popup_requires_coordinate():
    with pytest.raises(ValueError):
        build_popup(_poi(coordinate=None))


def test_render_escapes_content():
    html = render_popup_html(build_popup(_poi(title="<script>alert(1)</script>")))

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert 'href="https://en.wikipedia.org/wiki/Tower_Bridge"' in html
    assert '<img src="https://upload.test/tb.jpg"' in html


def test_render_without_thumbnail_omits_image():
    html = render_popup_html(build_popup(_poi(thumbnail=None)))
    assert "<img" not in html
