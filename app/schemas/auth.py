from pydantic import Field

from app.schemas.common import CamelModel, InputModel
from app.schemas.user import UserResponse


class UserLogin(InputModel):
    username: str
    password: str


class RefreshRequest(InputModel):
    refresh_token: str


class Token(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LoginResponse(Token):
    user: UserResponse


class MessageResponse(CamelModel):
    message: str = Field(..., description="Human readable acknowledgement")
