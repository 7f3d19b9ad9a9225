"""
Geocoding Service - forwards place-name queries to the upstream geocoder
(Nominatim) and returns its JSON payload unchanged.
"""

import logging
import httpx
from typing import Any, Optional

from app.config.settings import GeocoderSettings, get_settings
from app.core.exceptions import UpstreamError, ValidationError
from app.models.internal_models import Coordinate, SearchResult

logger = logging.getLogger(__name__)

SERVICE_NAME = "geocoder"


class GeocodingService:
    """Unauthenticated client for the upstream place-name geocoder."""

    def __init__(
        self,
        config: Optional[GeocoderSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = config or get_settings().geocoder
        self.api_url = self.settings.api_url
        self.user_agent = self.settings.user_agent
        self.timeout = self.settings.timeout_seconds
        self._transport = transport

    def _get_headers(self) -> dict:
        """Upstream rejects anonymous requests, so always identify the client."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        kwargs = {"headers": self._get_headers(), "transport": self._transport}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return httpx.AsyncClient(**kwargs)

    async def search(self, query: Optional[str]) -> Any:
        """
        Forward a free-text query to the geocoder.

        Args:
            query: Place name (e.g., "Paris")

        Returns:
            The upstream JSON body, verbatim

        Raises:
            ValidationError: query is missing or empty (no request is made)
            UpstreamError: network failure, non-2xx status or invalid JSON
        """
        if query is None or not query.strip():
            raise ValidationError("Query parameter is required", details={"field": "q"})

        params = {"format": "json", "q": query}
        logger.info(f"Geocoding query: {query}")

        try:
            async with self._client() as client:
                response = await client.get(self.api_url, params=params)
        except httpx.HTTPError as e:
            raise UpstreamError(
                SERVICE_NAME, "Failed to fetch search results", cause=e
            ) from e

        if not response.is_success:
            raise UpstreamError(
                SERVICE_NAME,
                "Failed to fetch search results",
                status_code_upstream=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                SERVICE_NAME, "Failed to fetch search results", cause=e
            ) from e


def parse_first_result(payload: Any) -> Optional[SearchResult]:
    """
    Take the first geocoder candidate as the authoritative match.

    Returns None when the payload is not a non-empty list or when the first
    candidate's ``lat``/``lon`` strings cannot be parsed. Later candidates
    are never consulted.
    """
    if not isinstance(payload, list) or not payload:
        return None

    first = payload[0]
    if not isinstance(first, dict):
        return None
    try:
        coordinate = Coordinate(lat=float(first["lat"]), lon=float(first["lon"]))
    except (KeyError, TypeError, ValueError):
        logger.warning(f"First geocoder candidate has no usable coordinate: {first!r}")
        return None

    return SearchResult(
        display_name=str(first.get("display_name", "")),
        coordinate=coordinate,
    )
