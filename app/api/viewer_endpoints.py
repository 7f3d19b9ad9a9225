"""
Viewer session endpoints.

A browser front end drives one session per open map view: it reports the
one-shot geolocation, submits searches, reports finished pan/zoom gestures,
switches tile layers and steps through the nearby content cards.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
import logging

from app.core.dependencies import get_session_registry
from app.models.internal_models import Coordinate
from app.schemas.base import Envelope, Message
from app.schemas.viewer import (
    GeolocationReport,
    LayerChange,
    SearchOutcomeRead,
    SearchRequest,
    ViewerSnapshot,
    ViewportUpdate,
)
from app.viewer.registry import SessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/viewer/sessions", tags=["viewer"])


def _ok(session) -> Envelope[ViewerSnapshot]:
    return Envelope[ViewerSnapshot](
        status="ok", data=ViewerSnapshot.model_validate(session.snapshot())
    )


@router.post("", response_model=Envelope[ViewerSnapshot], status_code=201)
async def open_session(registry: SessionRegistry = Depends(get_session_registry)):
    session = registry.create()
    return _ok(session)


@router.get("/{session_id}", response_model=Envelope[ViewerSnapshot])
async def get_session(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    return _ok(registry.get(session_id))


@router.delete("/{session_id}", response_model=Envelope[Message])
async def close_session(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    registry.close(session_id)
    return Envelope[Message](status="ok", data=Message(message="Session closed"))


@router.post("/{session_id}/geolocation", response_model=Envelope[ViewerSnapshot])
async def report_geolocation(
    session_id: str,
    report: GeolocationReport,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = registry.get(session_id)
    coordinate = None
    if report.latitude is not None and report.longitude is not None:
        coordinate = Coordinate(report.latitude, report.longitude)
    elif report.error:
        logger.info(f"Session {session_id}: geolocation failed on client: {report.error}")
    await session.report_geolocation(coordinate)
    return _ok(session)


@router.post("/{session_id}/locate", response_model=Envelope[ViewerSnapshot])
async def center_on_user(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    session = registry.get(session_id)
    if not session.center_on_user():
        return Envelope[ViewerSnapshot](
            status="error",
            data=ViewerSnapshot.model_validate(session.snapshot()),
            error="User location is not available",
        )
    return _ok(session)


@router.post("/{session_id}/search", response_model=Envelope[SearchOutcomeRead])
async def search(
    session_id: str,
    body: SearchRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = registry.get(session_id)
    outcome = await session.search(body.query)
    match = None
    if outcome.match is not None:
        match = {
            "display_name": outcome.match.display_name,
            "coordinate": outcome.match.coordinate.to_dict(),
        }
    data = SearchOutcomeRead.model_validate({
        "dispatched": outcome.dispatched,
        "match": match,
        "snapshot": session.snapshot(),
    })
    error = None
    if outcome.dispatched and outcome.match is None:
        error = "No results found"
    return Envelope[SearchOutcomeRead](status="ok", data=data, error=error)


@router.post("/{session_id}/viewport", response_model=Envelope[ViewerSnapshot])
async def viewport_moved(
    session_id: str,
    update: ViewportUpdate,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = registry.get(session_id)
    await session.viewport_moved(Coordinate(update.latitude, update.longitude), update.zoom)
    return _ok(session)


@router.put("/{session_id}/layer", response_model=Envelope[ViewerSnapshot])
async def change_layer(
    session_id: str,
    change: LayerChange,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = registry.get(session_id)
    session.set_layer(change.layer)
    return _ok(session)


@router.post("/{session_id}/browser/next", response_model=Envelope[ViewerSnapshot])
async def next_item(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    session = registry.get(session_id)
    session.next_item()
    return _ok(session)


@router.post("/{session_id}/browser/previous", response_model=Envelope[ViewerSnapshot])
async def previous_item(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    session = registry.get(session_id)
    session.previous_item()
    return _ok(session)


@router.get("/{session_id}/map", response_class=HTMLResponse)
async def render_map(session_id: str, registry: SessionRegistry = Depends(get_session_registry)):
    session = registry.get(session_id)
    return HTMLResponse(content=session.render_map())
