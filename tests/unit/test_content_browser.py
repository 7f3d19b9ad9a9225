"""
Unit tests for the content browser cursor
"""
import pytest

from app.models.internal_models import Coordinate, PointOfInterest
from app.viewer.content_browser import ContentBrowser


def _pois(n):
    return [
        PointOfInterest(
            id=str(i),
            title=f"Article {i}",
            summary_text="",
            canonical_url=f"https://en.wikipedia.org/wiki/Article_{i}",
            coordinate=Coordinate(51.5, -0.1),
        )
        for i in range(n)
    ]


def test_empty_browser_has_no_selection():
    browser = ContentBrowser()
    assert browser.index is None
    assert browser.current is None
    assert browser.count == 0
    assert browser.can_navigate is False


def test_replace_resets_cursor_to_zero():
    browser = ContentBrowser()
    browser.replace(_pois(3))
    browser.next()
    browser.next()
    assert browser.index == 2

    browser.replace(_pois(2))
    assert browser.index == 0
    assert browser.current.id == "0"


def test_replace_with_empty_list_clears_selection():
    browser = ContentBrowser()
    browser.replace(_pois(3))
    browser.replace([])
    assert browser.index is None
    assert browser.card() == {"item": None, "index": None, "count": 0, "can_navigate": False}


def test_next_sequence_wraps_around():
    browser = ContentBrowser()
    browser.replace(_pois(3))
    assert [browser.next() for _ in range(3)] == [1, 2, 0]


def test_previous_wraps_to_last_item():
    browser = ContentBrowser()
    browser.replace(_pois(3))
    assert browser.previous() == 2
    assert browser.previous() == 1


@pytest.mark.parametrize("n", [2, 3, 7, 50])
def test_n_steps_return_to_start(n):
    browser = ContentBrowser()
    browser.replace(_pois(n))
    browser.next()
    start = browser.index

    for _ in range(n):
        browser.next()
    assert browser.index == start

    for _ in range(n):
        browser.previous()
    assert browser.index == start


@pytest.mark.parametrize("n", [0, 1])
def test_navigation_unavailable_for_short_lists(n):
    browser = ContentBrowser()
    browser.replace(_pois(n))
    before = browser.index

    assert browser.can_navigate is False
    assert browser.next() == before
    assert browser.previous() == before
    assert browser.index == before


def test_card_reports_focused_item():
    browser = ContentBrowser()
    browser.replace(_pois(3))
    browser.next()

    card = browser.card()
    assert card["index"] == 1
    assert card["count"] == 3
    assert card["can_navigate"] is True
    assert card["item"]["title"] == "Article 1"
    assert card["item"]["coordinate"] == {"lat": 51.5, "lon": -0.1}
