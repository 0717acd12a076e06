from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from app.core.config import Settings
from app.core.exceptions import AuthenticationError, AuthorizationError, DuplicateUsernameError
from app.core.logging_config import logger, set_user_id
from app.core.rate_limiter import login_rate_limit, register_rate_limit
from app.core.security import (
    verify_password,
    get_password_hash,
    decode_token,
    token_subject,
    issue_token_pair,
)
from app.models.user import UserRole
from app.modules.auth.dependencies import get_current_user, get_optional_user, get_settings, get_storage
from app.schemas.auth import UserLogin, RefreshRequest, Token, LoginResponse, MessageResponse
from app.schemas.user import UserRegister, UserResponse
from app.storage import Row, Storage

router = APIRouter(tags=["Authentication"])


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@register_rate_limit()
async def register(
    request: Request,
    user_data: UserRegister,
    current_user: Optional[Row] = Depends(get_optional_user),
    storage: Storage = Depends(get_storage)
):
    """
    Register a new user.

    Anonymous callers may only create students; an admin may create any role.
    """
    client_ip = _client_ip(request)

    if user_data.role != UserRole.STUDENT and (
        current_user is None or current_user["role"] != UserRole.ADMIN
    ):
        logger.log_auth_event(
            event="register",
            success=False,
            username=user_data.username,
            reason=f"Not allowed to create role {user_data.role.value}",
            client_ip=client_ip
        )
        raise AuthorizationError("Only an admin can create this role")

    if await storage.get_user_by_username(user_data.username):
        logger.log_auth_event(
            event="register",
            success=False,
            username=user_data.username,
            reason="Username already exists",
            client_ip=client_ip
        )
        raise DuplicateUsernameError(user_data.username)

    values = user_data.to_row()
    values["password"] = get_password_hash(user_data.password)
    user = await storage.users.create(values)

    logger.log_auth_event(
        event="register",
        success=True,
        username=user["username"],
        client_ip=client_ip,
        user_role=user["role"].value
    )
    return user


@router.post("/login", response_model=LoginResponse)
@login_rate_limit()
async def login(
    request: Request,
    credentials: UserLogin,
    storage: Storage = Depends(get_storage),
    config: Settings = Depends(get_settings)
):
    """Exchange username and password for an access/refresh token pair"""
    client_ip = _client_ip(request)

    user = await storage.get_user_by_username(credentials.username)
    if not user or not verify_password(credentials.password, user["password"]):
        logger.log_auth_event(
            event="login",
            success=False,
            username=credentials.username,
            reason="Invalid credentials",
            client_ip=client_ip
        )
        raise AuthenticationError("Incorrect username or password")

    # Set user context for downstream logging
    set_user_id(str(user["id"]))

    logger.log_auth_event(
        event="login",
        success=True,
        username=user["username"],
        client_ip=client_ip,
        user_role=user["role"].value
    )

    return {**issue_token_pair(user, config=config), "user": user}


@router.post("/refresh", response_model=Token)
async def refresh_token(
    body: RefreshRequest,
    storage: Storage = Depends(get_storage),
    config: Settings = Depends(get_settings)
):
    """Trade a refresh token for a fresh token pair"""
    payload = decode_token(body.refresh_token, config=config)
    user_id = token_subject(payload, "refresh")

    user = await storage.users.get(user_id)
    if not user:
        logger.log_auth_event(event="refresh", success=False, reason="User not found")
        raise AuthenticationError("User not found")

    logger.log_auth_event(event="refresh", success=True, username=user["username"])
    return issue_token_pair(user, config=config)


@router.get("/user", response_model=UserResponse)
async def get_me(current_user: Row = Depends(get_current_user)):
    """Get current user info"""
    return current_user


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: Row = Depends(get_current_user)):
    """
    Log out.

    Tokens are stateless, so this only records the event; the client drops
    its tokens.
    """
    logger.log_auth_event(event="logout", success=True, username=current_user["username"])
    return {"message": "Logged out"}
