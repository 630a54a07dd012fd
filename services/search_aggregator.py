"""
Nearby-charity search aggregation.

Fans text queries out to the places provider, resolves every candidate id
to a detail record, then dedupes, measures, filters, ranks and caps the
merged result. Provider failures only ever shrink the result list.
"""

import asyncio
from math import radians, cos, sin, asin, sqrt
from typing import Dict, List, Optional, Sequence

from core.logging import get_logger
from schemas.places import Coordinate, LocationBias, Place, PlaceDetail
from services.google_places_service import GooglePlacesService, google_places


logger = get_logger(__name__)

EARTH_RADIUS_METERS = 6371000


def haversine_meters(origin: Coordinate, target: Coordinate) -> float:
    """Compute haversine distance in meters between two coords."""
    lon1, lat1, lon2, lat2 = map(radians, [origin.longitude, origin.latitude, target.longitude, target.latitude])
    dlon = lon2 - lon1
    dlat = lat2 - lat1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # clamp float drift above 1.0 for antipodal points
    c = 2 * asin(sqrt(min(1.0, a)))
    return c * EARTH_RADIUS_METERS


def _distance_key(place: Place) -> float:
    return place.distance_meters if place.distance_meters is not None else float("inf")


def rank_places(places: Sequence[Place], max_results: int) -> List[Place]:
    """Stable sort by distance (unknown distance last) and cap."""
    return sorted(places, key=_distance_key)[:max_results]


class SearchAggregator:
    """
    Stateless orchestrator over a places lookup client.

    The client needs two coroutines: ``search(query, location_bias)``
    returning candidate ids and ``fetch_detail(place_id)`` returning a
    ``PlaceDetail`` or None.
    """

    def __init__(self, client: GooglePlacesService):
        self.client = client

    async def run(
        self,
        queries: Sequence[str],
        origin: Optional[Coordinate],
        radius_meters: float,
        max_results: int,
    ) -> List[Place]:
        """Run one aggregation over all queries. Never raises."""
        if not queries or max_results <= 0:
            return []

        bias = LocationBias(center=origin, radius_meters=radius_meters) if origin is not None else None
        per_query_cap = 2 * max_results

        id_lists = await asyncio.gather(*(self._search(q, bias) for q in queries))

        # Discovery order: query order, then provider order within a query
        requested: List[str] = []
        seen_requested = set()
        for ids in id_lists:
            for place_id in ids[:per_query_cap]:
                if place_id not in seen_requested:
                    seen_requested.add(place_id)
                    requested.append(place_id)

        if not requested:
            return []

        details = await asyncio.gather(*(self._fetch(place_id) for place_id in requested))

        merged: Dict[str, Place] = {}
        for requested_id, detail in zip(requested, details):
            if detail is None:
                continue
            resolved_id = detail.id or requested_id
            if resolved_id in merged:
                continue
            merged[resolved_id] = self._to_place(resolved_id, detail, origin)

        kept = [
            place for place in merged.values()
            if origin is None or radius_meters <= 0 or place.distance_meters <= radius_meters
        ]
        results = rank_places(kept, max_results)

        logger.info(
            "Aggregation run completed",
            queries=len(queries),
            candidates=len(requested),
            resolved=len(merged),
            returned=len(results),
        )
        return results

    async def run_category(
        self,
        queries: Sequence[str],
        origin: Optional[Coordinate],
        radius_meters: float,
        max_results: int,
    ) -> List[Place]:
        """
        Run queries one at a time, stopping once ``max_results`` distinct
        places have been collected. Later queries are skipped when earlier
        ones already fill the budget.
        """
        if max_results <= 0:
            return []

        aggregate: Dict[str, Place] = {}
        for query in queries:
            if len(aggregate) >= max_results:
                break
            items = await self.run([query], origin, radius_meters, max_results)
            for place in items:
                if place.id in aggregate:
                    continue
                aggregate[place.id] = place
                if len(aggregate) >= max_results:
                    break

        return rank_places(list(aggregate.values()), max_results)

    async def _search(self, query: str, bias: Optional[LocationBias]) -> List[str]:
        try:
            return list(await self.client.search(query, bias) or [])
        except Exception as e:
            logger.warning("Search failed; query contributes nothing", query=query, error=str(e))
            return []

    async def _fetch(self, place_id: str) -> Optional[PlaceDetail]:
        try:
            return await self.client.fetch_detail(place_id)
        except Exception as e:
            logger.warning("Detail fetch failed; place dropped", place_id=place_id, error=str(e))
            return None

    @staticmethod
    def _to_place(place_id: str, detail: PlaceDetail, origin: Optional[Coordinate]) -> Place:
        distance = haversine_meters(origin, detail.coordinate) if origin is not None else None
        return Place(
            id=place_id,
            name=detail.name,
            subtitle=detail.formatted_address,
            coordinate=detail.coordinate,
            distance_meters=distance,
        )


search_aggregator = SearchAggregator(google_places)
