from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db_session, get_existing_user
from models.user import AppUser
from repositories.favorites import FavoriteRepository
from schemas.favorite import FavoriteRead, FavoriteStatus
from schemas.places import Place

router = APIRouter()


@router.get("", response_model=List[FavoriteRead], summary="List favorites, newest first")
async def list_favorites(
    q: str = "",
    user: AppUser = Depends(get_existing_user),
    db: AsyncSession = Depends(get_db_session)
):
    return await FavoriteRepository(db).list_for_user(user.id, q)


@router.post("/toggle", response_model=FavoriteStatus, summary="Add or remove a favorite")
async def toggle_favorite(
    place: Place,
    user: AppUser = Depends(get_existing_user),
    db: AsyncSession = Depends(get_db_session)
):
    added = await FavoriteRepository(db).toggle(user.id, place)
    return FavoriteStatus(place_id=place.id, is_favorite=added)


@router.get("/{place_id}", response_model=FavoriteStatus, summary="Check whether a place is a favorite")
async def favorite_status(
    place_id: str,
    user: AppUser = Depends(get_existing_user),
    db: AsyncSession = Depends(get_db_session)
):
    return FavoriteStatus(
        place_id=place_id,
        is_favorite=await FavoriteRepository(db).is_favorite(user.id, place_id),
    )
