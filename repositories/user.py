import logging
from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import AppUser
from repositories.base import BaseRepository


logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[AppUser]):
    def __init__(self, db: AsyncSession):
        super().__init__(AppUser, db)

    async def get_by_email(self, email: str) -> Optional[AppUser]:
        result = await self.db.execute(select(AppUser).where(AppUser.email == email))
        return result.scalar_one_or_none()

    async def create(self, email: str, name: str, password_hash: str) -> AppUser:
        try:
            user = AppUser(email=email, name=name, password_hash=password_hash)
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
            return user
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Database error in create user: {str(e)}")
            raise

    async def set_password_hash(self, user: AppUser, password_hash: str) -> AppUser:
        try:
            user.password_hash = password_hash
            await self.db.commit()
            await self.db.refresh(user)
            return user
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Database error in set_password_hash: {str(e)}")
            raise
