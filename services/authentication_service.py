from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from core.logging import get_logger
from models.donation import DonationRecord
from models.favorite import FavoritePlace
from models.profile import Profile
from models.user import AppUser
from repositories.base import BaseRepository
from repositories.user import UserRepository
from services.exceptions import AccountExists, InvalidCredentials
from services.helpers import hash_password, normalize_email, verify_password


logger = get_logger(__name__)


async def register(db: AsyncSession, name: str, email: str, password: str) -> AppUser:
    name = (name or "").strip()
    email = normalize_email(email)
    if not name or not email or not (password or "").strip():
        raise InvalidCredentials("Name, email and password are required")

    repo = UserRepository(db)
    if await repo.get_by_email(email) is not None:
        raise AccountExists("Email already exists")

    user = await repo.create(email=email, name=name, password_hash=hash_password(password))
    logger.info("User registered", user_id=user.id)
    return user


async def login(db: AsyncSession, email: str, password: str) -> AppUser:
    user = await UserRepository(db).get_by_email(normalize_email(email))
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentials("Invalid email or password")
    return user


async def reset_password(db: AsyncSession, email: str, new_password: str) -> AppUser:
    if not (new_password or "").strip():
        raise InvalidCredentials("New password is required")
    repo = UserRepository(db)
    user = await repo.get_by_email(normalize_email(email))
    if user is None:
        raise InvalidCredentials("No account for this email")
    user = await repo.set_password_hash(user, hash_password(new_password))
    logger.info("Password reset", user_id=user.id)
    return user


async def delete_account(db: AsyncSession, email: str, password: str) -> None:
    """Remove the user together with their profile, favorites and donations."""
    user = await login(db, email, password)
    user_id = user.id
    try:
        for model in (Profile, FavoritePlace, DonationRecord):
            await BaseRepository(model, db).delete_where({"user_id": user_id})
        await db.delete(user)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Account deletion failed", user_id=user_id, error=str(e))
        raise
    logger.info("Account deleted", user_id=user_id)
