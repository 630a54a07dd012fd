from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class LocationBias(BaseModel):
    """Circular bias passed to the places provider with a text search."""
    model_config = ConfigDict(frozen=True)

    center: Coordinate
    radius_meters: float


class PlaceDetail(BaseModel):
    """Detail record returned by the places provider for a single id."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    formatted_address: Optional[str] = None
    coordinate: Coordinate


class Place(BaseModel):
    """
    A charity candidate produced by one aggregation run.

    Equality and hashing use ``id`` only, so two runs that resolve the same
    place with different distances still compare equal.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    subtitle: Optional[str] = None
    coordinate: Coordinate
    distance_meters: Optional[float] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Place):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class CategoryRead(BaseModel):
    value: str
    label: str


class DiscoverSearchRequest(BaseModel):
    category: str = Field("all", description="One of all, food, health, education, other")
    free_text: Optional[str] = Field(None, description="Search term for the 'other' category")
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Device latitude if available")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Device longitude if available")
    radius_km: int = Field(2, ge=1, le=50, description="Search radius in kilometers")
    max_results: int = Field(20, ge=1, le=20, description="Max results to return")


class DiscoverSearchResponse(BaseModel):
    results: List[Place] = Field(default_factory=list)
    query_count: int = 0
