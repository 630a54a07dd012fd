from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from .common import BaseSchema


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class PasswordReset(BaseModel):
    email: EmailStr
    new_password: str = Field(..., min_length=1)

    @field_validator('new_password')
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("New password is required")
        return v


class AccountDelete(BaseModel):
    email: EmailStr
    password: str


class UserRead(BaseSchema):
    id: int
    email: str
    name: str
    created_at: Optional[datetime] = None
