"""
Common schemas used across the application.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema for ORM-backed read models."""

    model_config = ConfigDict(from_attributes=True)
