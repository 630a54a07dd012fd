import logging
from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.profile import Profile
from repositories.base import BaseRepository
from services.exceptions import InvalidProfile


logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository[Profile]):
    def __init__(self, db: AsyncSession):
        super().__init__(Profile, db)

    async def get_for_user(self, user_id: int) -> Optional[Profile]:
        result = await self.db.execute(select(Profile).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()

    async def upsert(self, user_id: int, name: str, email: str) -> Profile:
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email:
            raise InvalidProfile("Name and email are required")

        try:
            profile = await self.get_for_user(user_id)
            if profile is None:
                profile = Profile(user_id=user_id, name=name, email=email)
                self.db.add(profile)
            else:
                profile.name = name
                profile.email = email
            await self.db.commit()
            await self.db.refresh(profile)
            return profile
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Database error in upsert profile: {str(e)}")
            raise
