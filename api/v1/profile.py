from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db_session, get_existing_user
from models.user import AppUser
from repositories.profile import ProfileRepository
from schemas.profile import ProfileRead, ProfileUpdate
from services.exceptions import InvalidProfile

router = APIRouter()


@router.get("", response_model=ProfileRead, summary="Get the user's profile")
async def get_profile(
    user: AppUser = Depends(get_existing_user),
    db: AsyncSession = Depends(get_db_session)
):
    profile = await ProfileRepository(db).get_for_user(user.id)
    if profile is None:
        # No profile saved yet; start from the account details
        return ProfileRead(user_id=user.id, name=user.name, email=user.email)
    return profile


@router.put("", response_model=ProfileRead, summary="Create or update the user's profile")
async def update_profile(
    body: ProfileUpdate,
    user: AppUser = Depends(get_existing_user),
    db: AsyncSession = Depends(get_db_session)
):
    try:
        return await ProfileRepository(db).upsert(user.id, body.name, body.email)
    except InvalidProfile as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
