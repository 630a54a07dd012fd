"""
Discover API endpoints.

Provides:
- GET  /api/v1/discover/categories
- POST /api/v1/discover/search
- WS   /api/v1/discover/ws
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError

from api.deps import get_search_aggregator
from core.logging import get_logger
from schemas.places import CategoryRead, Coordinate, DiscoverSearchRequest, DiscoverSearchResponse, Place
from services.category_queries import CharityCategory, expand_category
from services.search_aggregator import SearchAggregator
from services.search_session import SearchSession


logger = get_logger(__name__)

router = APIRouter()


@router.get("/categories", response_model=List[CategoryRead])
async def list_categories() -> List[CategoryRead]:
    return [CategoryRead(value=c.value, label=c.label) for c in CharityCategory]


@router.post("/search", response_model=DiscoverSearchResponse)
async def search_charities(
    req: DiscoverSearchRequest,
    aggregator: SearchAggregator = Depends(get_search_aggregator),
) -> DiscoverSearchResponse:
    """
    One-shot search: expand the category and run it.

    Without coordinates the search is unbiased and results carry no distance.
    """
    try:
        category = _parse_category(req.category)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    queries = expand_category(category, req.free_text)
    origin = None
    if req.latitude is not None and req.longitude is not None:
        origin = Coordinate(latitude=req.latitude, longitude=req.longitude)

    results = await aggregator.run_category(queries, origin, req.radius_km * 1000, req.max_results)
    return DiscoverSearchResponse(results=results, query_count=len(queries))


@router.websocket("/ws")
async def discover_session(
    websocket: WebSocket,
    aggregator: SearchAggregator = Depends(get_search_aggregator),
):
    """
    Live discover session. Each message updates the session inputs; every
    published result set is pushed back with its sequence number.
    """
    await websocket.accept()

    async def publish(results: List[Place]) -> None:
        await websocket.send_json({
            "sequence": session.sequence,
            "is_loading": session.is_loading,
            "results": [r.model_dump() for r in results],
        })

    session = SearchSession(aggregator, on_publish=publish)
    session.refresh()
    try:
        while True:
            try:
                message = await websocket.receive_json()
                _apply_message(session, message)
            except (TypeError, ValueError, ValidationError) as e:
                await websocket.send_json({"error": str(e)})
    except WebSocketDisconnect:
        logger.info("Discover session closed", runs=session.sequence)
    finally:
        await session.close()


def _parse_category(value: Any) -> CharityCategory:
    try:
        return CharityCategory(value)
    except ValueError:
        raise ValueError(f"Unknown category: {value}")


def _apply_message(session: SearchSession, message: Dict[str, Any]) -> None:
    if not isinstance(message, dict):
        raise ValueError("Message must be a JSON object")

    # Validate everything before touching the session
    category = _parse_category(message["category"]) if "category" in message else None
    radius_km = float(message["radius_km"]) if "radius_km" in message else None
    free_text = message.get("free_text")
    if free_text is not None and not isinstance(free_text, str):
        raise ValueError("free_text must be a string")
    origin = None
    if "latitude" in message or "longitude" in message:
        origin = Coordinate(latitude=message.get("latitude"), longitude=message.get("longitude"))

    if origin is not None:
        session.set_origin(origin)
    if category is not None:
        session.set_category(category)
    if "free_text" in message:
        session.set_free_text(free_text)
    if radius_km is not None:
        session.set_radius(radius_km)
