"""
Geosearch client for the MediaWiki Action API.

Discovery lists page ids within a radius of a coordinate; hydration expands
a batch of ids into full records in one batched query, following
continuation while any prop module still has pages left.
"""

import logging
import httpx
from typing import Any, Dict, List, Optional

from app.config.settings import ContentSettings, get_settings
from app.core.exceptions import UpstreamError
from app.models.internal_models import Coordinate, PointOfInterest, Thumbnail

logger = logging.getLogger(__name__)

SERVICE_NAME = "geosearch"

# Upper bound on continuation requests for one hydration
MAX_CONTINUATIONS = 10


class GeosearchClient:
    """Client for geo-bounded article discovery and batched hydration."""

    def __init__(
        self,
        config: Optional[ContentSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = config or get_settings().content
        self.api_url = self.settings.api_url
        self.radius_m = self.settings.search_radius_m
        self.page_size = self.settings.page_size
        self.thumbnail_size = self.settings.thumbnail_size
        self.timeout = self.settings.timeout_seconds
        self._transport = transport

    def _get_headers(self) -> dict:
        return {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        kwargs = {"headers": self._get_headers(), "transport": self._transport}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return httpx.AsyncClient(**kwargs)

    async def _request(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run one Action API request and return the decoded body."""
        params = {"action": "query", "format": "json", **params}
        try:
            async with self._client() as client:
                response = await client.get(self.api_url, params=params)
        except httpx.HTTPError as e:
            raise UpstreamError(SERVICE_NAME, cause=e) from e

        if not response.is_success:
            raise UpstreamError(SERVICE_NAME, status_code_upstream=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(SERVICE_NAME, cause=e) from e

        # The Action API reports failures with a 200 and an "error" object
        if not isinstance(data, dict) or "error" in data:
            raise UpstreamError(
                SERVICE_NAME,
                cause=ValueError(f"Unexpected response: {str(data)[:200]}"),
            )
        return data

    async def _query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run one Action API query and return its ``query`` object."""
        data = await self._request(params)
        return data.get("query") or {}

    async def _query_pages(self, params: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
        """
        Run a ``prop=`` query to completion.

        Each prop module returns at most its per-request limit (20 intro
        extracts, for one); the rest arrive through ``continue``. Records for
        the same page are merged, keeping the first response's key order.
        """
        pages: Dict[str, Dict[str, Any]] = {}
        continuation: Dict[str, Any] = {}
        for _ in range(MAX_CONTINUATIONS):
            data = await self._request({**params, **continuation})
            batch = (data.get("query") or {}).get("pages", {})
            if not isinstance(batch, dict):
                raise UpstreamError(SERVICE_NAME, cause=ValueError("pages is not a mapping"))
            for page_id, page in batch.items():
                if not isinstance(page, dict):
                    raise UpstreamError(
                        SERVICE_NAME, cause=ValueError(f"page {page_id} is not an object")
                    )
                merged = pages.setdefault(page_id, {})
                for key, value in page.items():
                    merged.setdefault(key, value)

            continuation = data.get("continue") or {}
            if not continuation:
                return pages

        logger.warning(
            f"Hydration still incomplete after {MAX_CONTINUATIONS} requests",
            extra={"continue": continuation, "pages": len(pages)},
        )
        return pages

    async def discover(self, center: Coordinate) -> List[str]:
        """
        List page ids near ``center``, in upstream relevance order.

        Args:
            center: Search center

        Returns:
            Ordered page ids (as strings); empty when nothing is nearby
        """
        query = await self._query({
            "list": "geosearch",
            "gscoord": f"{center.lat}|{center.lon}",
            "gsradius": self.radius_m,
            "gslimit": self.page_size,
        })

        entries = query.get("geosearch", [])
        if not isinstance(entries, list):
            raise UpstreamError(
                SERVICE_NAME, cause=ValueError("geosearch is not a list")
            )

        try:
            ids = [str(entry["pageid"]) for entry in entries if "pageid" in entry]
        except TypeError as e:
            raise UpstreamError(SERVICE_NAME, cause=e) from e
        logger.info(
            f"Discovered {len(ids)} items near {center.lat},{center.lon}",
            extra={"radius_m": self.radius_m, "count": len(ids)},
        )
        return ids

    async def hydrate(self, page_ids: List[str]) -> List[PointOfInterest]:
        """
        Expand page ids into full records with one batched query, following
        continuation until every prop module has answered for every page.

        Order follows the first response's page key order. Records without a
        complete coordinate are kept here with ``coordinate=None``; callers
        decide whether to show them.
        """
        if not page_ids:
            return []

        pages = await self._query_pages({
            "pageids": "|".join(page_ids),
            "prop": "extracts|pageimages|info|coordinates",
            "exintro": 1,
            "explaintext": 1,
            "exlimit": "max",
            "piprop": "thumbnail",
            "pithumbsize": self.thumbnail_size,
            "pilimit": "max",
            "colimit": "max",
            "inprop": "url",
        })

        try:
            return [parse_page(page_id, page) for page_id, page in pages.items()]
        except (AttributeError, TypeError, ValueError) as e:
            raise UpstreamError(SERVICE_NAME, cause=e) from e


def _parse_coordinate(page: Dict[str, Any]) -> Optional[Coordinate]:
    coordinates = page.get("coordinates") or []
    if not coordinates:
        return None
    first = coordinates[0]
    lat, lon = first.get("lat"), first.get("lon")
    if lat is None or lon is None:
        return None
    return Coordinate(lat=float(lat), lon=float(lon))


def _parse_thumbnail(page: Dict[str, Any]) -> Optional[Thumbnail]:
    thumb = page.get("thumbnail")
    if not thumb or not thumb.get("source"):
        return None
    return Thumbnail(
        url=thumb["source"],
        width=thumb.get("width"),
        height=thumb.get("height"),
    )


def parse_page(page_id: str, page: Dict[str, Any]) -> PointOfInterest:
    """Map one hydrated page record to a PointOfInterest."""
    return PointOfInterest(
        id=str(page.get("pageid", page_id)),
        title=page.get("title", ""),
        summary_text=page.get("extract", ""),
        canonical_url=page.get("fullurl") or page.get("canonicalurl", ""),
        coordinate=_parse_coordinate(page),
        thumbnail=_parse_thumbnail(page),
    )
