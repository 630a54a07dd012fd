from typing import Optional
from pydantic import BaseModel

from .common import BaseSchema


class ProfileUpdate(BaseModel):
    name: str
    email: str


class ProfileRead(BaseSchema):
    id: Optional[int] = None
    user_id: int
    name: str = ""
    email: str = ""
