from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db_session
from schemas.responses import StandardSuccessResponse
from schemas.user import AccountDelete, PasswordReset, UserLogin, UserRead, UserRegister
from services import authentication_service
from services.exceptions import AccountExists, InvalidCredentials

router = APIRouter()


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a local account"
)
async def register(body: UserRegister, db: AsyncSession = Depends(get_db_session)):
    try:
        return await authentication_service.register(db, body.name, body.email, body.password)
    except AccountExists as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except InvalidCredentials as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/login", response_model=UserRead, summary="Check credentials")
async def login(body: UserLogin, db: AsyncSession = Depends(get_db_session)):
    try:
        return await authentication_service.login(db, body.email, body.password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))


@router.post("/reset-password", response_model=StandardSuccessResponse, summary="Set a new password")
async def reset_password(body: PasswordReset, db: AsyncSession = Depends(get_db_session)):
    try:
        await authentication_service.reset_password(db, body.email, body.new_password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return StandardSuccessResponse(message="Password updated")


@router.post(
    "/delete-account",
    response_model=StandardSuccessResponse,
    summary="Delete account and all local data"
)
async def delete_account(body: AccountDelete, db: AsyncSession = Depends(get_db_session)):
    """
    Permanently remove the account together with its profile, favorites
    and donation history.
    """
    try:
        await authentication_service.delete_account(db, body.email, body.password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return StandardSuccessResponse(message="Account deleted")
