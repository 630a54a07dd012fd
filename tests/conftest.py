import asyncio
import sys
from math import degrees
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure the project root is on sys.path for direct pytest runs
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.database import Base  # noqa: E402
import models  # noqa: E402,F401
from schemas.places import Coordinate, LocationBias, PlaceDetail  # noqa: E402


ORIGIN = Coordinate(latitude=0.0, longitude=0.0)


def north_of_origin(meters: float) -> Coordinate:
    """Point due north of (0, 0) at the given great-circle distance."""
    return Coordinate(latitude=degrees(meters / 6371000.0), longitude=0.0)


def detail(place_id: str, meters: float, name: Optional[str] = None) -> PlaceDetail:
    return PlaceDetail(
        id=place_id,
        name=name or f"Charity {place_id}",
        formatted_address=f"{place_id} Main St",
        coordinate=north_of_origin(meters),
    )


class FakePlacesClient:
    """In-memory stand-in for the Google Places client."""

    def __init__(
        self,
        searches: Optional[Dict[str, List[str]]] = None,
        details: Optional[Dict[str, PlaceDetail]] = None,
        failing_queries: Optional[Set[str]] = None,
        failing_ids: Optional[Set[str]] = None,
    ):
        self.searches = searches or {}
        self.details = details or {}
        self.failing_queries = failing_queries or set()
        self.failing_ids = failing_ids or set()
        self.gates: Dict[str, asyncio.Event] = {}
        self.search_calls: List[tuple] = []
        self.detail_calls: List[str] = []

    async def search(self, query: str, location_bias: Optional[LocationBias] = None) -> List[str]:
        self.search_calls.append((query, location_bias))
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        if query in self.failing_queries:
            raise RuntimeError(f"provider rejected {query}")
        return list(self.searches.get(query, []))

    async def fetch_detail(self, place_id: str) -> Optional[PlaceDetail]:
        self.detail_calls.append(place_id)
        # let other fetches interleave
        await asyncio.sleep(0)
        if place_id in self.failing_ids:
            raise RuntimeError(f"detail failed for {place_id}")
        return self.details.get(place_id)


@pytest.fixture
def fake_places() -> FakePlacesClient:
    return FakePlacesClient()


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session
