from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from .common import BaseSchema


class FavoriteRead(BaseSchema):
    id: int
    place_id: str
    name: str
    subtitle: Optional[str] = None
    latitude: float
    longitude: float
    created_at: Optional[datetime] = None


class FavoriteStatus(BaseModel):
    place_id: str
    is_favorite: bool = Field(False)
