import logging
from typing import List, Optional
from sqlalchemy import select, or_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.favorite import FavoritePlace
from repositories.base import BaseRepository
from schemas.places import Place


logger = logging.getLogger(__name__)


class FavoriteRepository(BaseRepository[FavoritePlace]):
    def __init__(self, db: AsyncSession):
        super().__init__(FavoritePlace, db)

    async def get_by_place(self, user_id: int, place_id: str) -> Optional[FavoritePlace]:
        query = select(FavoritePlace).where(
            FavoritePlace.user_id == user_id,
            FavoritePlace.place_id == place_id,
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def is_favorite(self, user_id: int, place_id: str) -> bool:
        return await self.get_by_place(user_id, place_id) is not None

    async def toggle(self, user_id: int, place: Place) -> bool:
        """Add the place to favorites, or remove it if already there. Returns the new state."""
        try:
            existing = await self.get_by_place(user_id, place.id)
            if existing is not None:
                await self.db.delete(existing)
                added = False
            else:
                self.db.add(FavoritePlace(
                    user_id=user_id,
                    place_id=place.id,
                    name=place.name,
                    subtitle=place.subtitle,
                    latitude=place.coordinate.latitude,
                    longitude=place.coordinate.longitude,
                ))
                added = True
            await self.db.commit()
            logger.info(f"Favorite {'added' if added else 'removed'}: user={user_id} place={place.id}")
            return added
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Database error in toggle favorite: {str(e)}")
            raise

    async def list_for_user(self, user_id: int, query: str = "") -> List[FavoritePlace]:
        """Newest first; optional case-insensitive match on name or subtitle."""
        stmt = (
            select(FavoritePlace)
            .where(FavoritePlace.user_id == user_id)
            .order_by(FavoritePlace.created_at.desc(), FavoritePlace.id.desc())
        )
        q = (query or "").lower()
        if q:
            pattern = f"%{_escape_like(q)}%"
            stmt = stmt.where(or_(
                func.lower(FavoritePlace.name).like(pattern, escape="\\"),
                func.lower(func.coalesce(FavoritePlace.subtitle, "")).like(pattern, escape="\\"),
            ))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
