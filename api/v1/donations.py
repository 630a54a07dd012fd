from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db_session, get_existing_user
from models.user import AppUser
from repositories.donations import DonationRepository
from schemas.donation import DonationCreate, DonationRead, PAYMENT_METHODS
from services.exceptions import InvalidDonation

router = APIRouter()


@router.get("", response_model=List[DonationRead], summary="Donation history, newest first")
async def list_donations(
    q: str = "",
    user: AppUser = Depends(get_existing_user),
    db: AsyncSession = Depends(get_db_session)
):
    return await DonationRepository(db).list_for_user(user.id, q)


@router.post(
    "",
    response_model=DonationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record a donation"
)
async def create_donation(
    donation: DonationCreate,
    user: AppUser = Depends(get_existing_user),
    db: AsyncSession = Depends(get_db_session)
):
    try:
        return await DonationRepository(db).create(user.id, donation)
    except InvalidDonation as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/payment-methods", response_model=List[str], summary="Available payment methods")
async def payment_methods():
    return PAYMENT_METHODS
