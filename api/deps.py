"""
Dependency injection utilities for API endpoints.
"""

from typing import AsyncGenerator
from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from models.user import AppUser
from repositories.user import UserRepository
from services.search_aggregator import SearchAggregator, search_aggregator


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async for session in get_db():
        yield session


def get_search_aggregator() -> SearchAggregator:
    """Get the shared search aggregator."""
    return search_aggregator


async def get_existing_user(
    user_id: int,
    db: AsyncSession = Depends(get_db_session)
) -> AppUser:
    """Resolve ``user_id`` to a user or fail with 404."""
    user = await UserRepository(db).get(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with ID {user_id} not found"
        )
    return user
