"""
Unit tests for the two-phase nearby content fetch
"""
import pytest

from app.models.internal_models import Coordinate
from tests.fakes import page_record

LONDON = Coordinate(51.505, -0.09)


@pytest.mark.asyncio
async def test_three_discovered_items_are_hydrated(nearby_service, fake_wiki):
    for pid, title in [(101, "Tower of London"), (102, "The Shard"), (103, "Borough Market")]:
        fake_wiki.add_page(page_record(pid, title))

    pois = await nearby_service.fetch(LONDON)

    assert [p.title for p in pois] == ["Tower of London", "The Shard", "Borough Market"]
    assert len(fake_wiki.discovery_requests) == 1
    assert len(fake_wiki.hydration_requests) == 1


@pytest.mark.asyncio
async def test_empty_discovery_skips_hydration(nearby_service, fake_wiki):
    pois = await nearby_service.fetch(LONDON)

    assert pois == []
    assert len(fake_wiki.discovery_requests) == 1
    assert fake_wiki.hydration_requests == []


@pytest.mark.asyncio
async def test_records_without_full_coordinates_are_dropped(nearby_service, fake_wiki):
    fake_wiki.add_page(page_record(1, "Located"))
    fake_wiki.add_page(page_record(2, "No coordinates", lat=None, lon=None))
    fake_wiki.add_page(page_record(3, "Latitude only", lat=51.5, lon=None))
    fake_wiki.add_page(page_record(4, "Longitude only", lat=None, lon=-0.1))

    pois = await nearby_service.fetch(LONDON)

    assert [p.title for p in pois] == ["Located"]


@pytest.mark.asyncio
@pytest.mark.parametrize("phase", ["discovery", "hydration"])
async def test_failure_in_either_phase_yields_empty_list(nearby_service, fake_wiki, phase):
    fake_wiki.add_page(page_record(1, "Tower Bridge"))
    fake_wiki.fail_phase = phase

    assert await nearby_service.fetch(LONDON) == []


@pytest.mark.asyncio
async def test_full_page_of_discovered_items_is_kept(nearby_service, fake_wiki):
    for pid in range(1, 51):
        fake_wiki.add_page(page_record(pid, f"Place {pid}"))

    pois = await nearby_service.fetch(LONDON)

    assert len(pois) == 50
    assert all(p.summary_text for p in pois)
