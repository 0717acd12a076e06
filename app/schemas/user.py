from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.models.user import UserRole
from app.schemas.common import CamelModel, InputModel, PatchModel, not_null


class UserRegister(InputModel):
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: UserRole = UserRole.STUDENT


class UserUpdate(PatchModel):
    username: Optional[str] = Field(None, min_length=3, max_length=100)
    password: Optional[str] = Field(None, min_length=6, max_length=128)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None

    @field_validator("username", "password", "name", "email", "role", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class UserResponse(CamelModel):
    """Public user shape; the password hash is never part of it"""
    id: int
    username: str
    name: str
    email: str
    role: UserRole
