import httpx
from typing import Any, Dict, List, Optional

from core.config import settings
from core.logging import get_logger
from schemas.places import Coordinate, LocationBias, PlaceDetail
from services.exceptions import DetailFetchFailed, ProviderUnavailable


logger = get_logger(__name__)

# Google rejects circle biases wider than this
MAX_BIAS_RADIUS_METERS = 50000.0


class GooglePlacesService:
    """Thin wrapper around Google Places API v1 for text search and details."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.GOOGLE_PLACES_API_KEY
        self.base_url = (base_url or settings.GOOGLE_PLACES_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.GOOGLE_PLACES_TIMEOUT
        self.transport = transport
        if not self.api_key:
            logger.warning("GOOGLE_PLACES_API_KEY not configured; Places lookups will be disabled")

    def _is_enabled(self) -> bool:
        return bool(self.api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def search(self, query: str, location_bias: Optional[LocationBias] = None) -> List[str]:
        """Return candidate place ids for a text query. Failures yield an empty list."""
        try:
            return await self._search_ids(query, location_bias)
        except ProviderUnavailable as e:
            logger.warning("Google Places text search failed", query=query, error=str(e))
            return []

    async def fetch_detail(self, place_id: str) -> Optional[PlaceDetail]:
        """Return the detail record for a place id, or None if it cannot be fetched."""
        try:
            return await self._fetch_detail(place_id)
        except DetailFetchFailed as e:
            logger.warning("Google Places details failed", place_id=place_id, error=e.reason)
            return None

    async def _search_ids(self, query: str, location_bias: Optional[LocationBias]) -> List[str]:
        if not self._is_enabled():
            raise ProviderUnavailable("Places provider disabled")

        url = f"{self.base_url}/places:searchText"
        headers = {
            "X-Goog-Api-Key": self.api_key,
            # Ids only; details are fetched per id
            "X-Goog-FieldMask": "places.id",
            "Content-Type": "application/json",
        }
        body: Dict[str, Any] = {"textQuery": query}
        if location_bias is not None:
            body["locationBias"] = {
                "circle": {
                    "center": {
                        "latitude": location_bias.center.latitude,
                        "longitude": location_bias.center.longitude,
                    },
                    "radius": min(float(location_bias.radius_meters), MAX_BIAS_RADIUS_METERS),
                }
            }

        try:
            async with self._client() as client:
                resp = await client.post(url, headers=headers, json=body)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderUnavailable(str(e)) from e

        ids = [p.get("id") for p in data.get("places", []) if isinstance(p, dict)]
        return [i for i in ids if i]

    async def _fetch_detail(self, place_id: str) -> PlaceDetail:
        if not self._is_enabled():
            raise DetailFetchFailed(place_id, "Places provider disabled")

        url = f"{self.base_url}/places/{place_id}"
        headers = {
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": "id,displayName,formattedAddress,location",
        }
        try:
            async with self._client() as client:
                resp = await client.get(url, headers=headers)
                resp.raise_for_status()
                result = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise DetailFetchFailed(place_id, str(e)) from e

        return self._map_place_detail_v1(place_id, result)

    def _map_place_detail_v1(self, place_id: str, r: Dict[str, Any]) -> PlaceDetail:
        loc = r.get("location") or {}
        if loc.get("latitude") is None or loc.get("longitude") is None:
            raise DetailFetchFailed(place_id, "missing location")
        display_name = (r.get("displayName") or {}).get("text")
        try:
            return PlaceDetail(
                id=r.get("id") or place_id,
                name=display_name or "Unknown",
                formatted_address=r.get("formattedAddress"),
                coordinate=Coordinate(latitude=loc["latitude"], longitude=loc["longitude"]),
            )
        except ValueError as e:
            raise DetailFetchFailed(place_id, str(e)) from e


google_places = GooglePlacesService()
