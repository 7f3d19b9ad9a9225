"""Geocode proxy endpoint."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from typing import Optional

from app.core.dependencies import get_geocoding_service
from app.services.geocoding_service import GeocodingService

router = APIRouter(tags=["search"])


@router.get("/search")
async def search_places(
    q: Optional[str] = Query(None, description="Free-text place name"),
    geocoder: GeocodingService = Depends(get_geocoding_service),
):
    """
    Forward a place-name query to the upstream geocoder.

    Returns the upstream JSON array verbatim. A missing or empty ``q`` is
    rejected with 400 before any upstream call; upstream failures become a
    generic 500 body (see the error handlers).
    """
    payload = await geocoder.search(q)
    return JSONResponse(content=payload)
