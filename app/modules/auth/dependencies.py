from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import Settings
from app.core.exceptions import AuthenticationError, ValidationFailedError
from app.core.logging_config import set_user_id
from app.core.security import decode_token, token_subject
from app.modules.auth.policy import PATH, AccessContext, get_rule
from app.storage import Row, Storage

# auto_error=False so a missing header ends in our own 401 body
security = HTTPBearer(auto_error=False)


def get_storage(request: Request) -> Storage:
    """Store chosen at startup (see create_app)"""
    return request.app.state.storage


def get_settings(request: Request) -> Settings:
    """Settings the app was built with"""
    return request.app.state.settings


async def _resolve_user(
    credentials: HTTPAuthorizationCredentials,
    storage: Storage,
    config: Settings
) -> Row:
    payload = decode_token(credentials.credentials, config=config)
    user_id = token_subject(payload, "access")

    user = await storage.users.get(user_id)
    if not user:
        raise AuthenticationError("User not found")

    set_user_id(str(user["id"]))
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    storage: Storage = Depends(get_storage),
    config: Settings = Depends(get_settings)
) -> Row:
    """Get current authenticated user"""
    if credentials is None:
        raise AuthenticationError()
    return await _resolve_user(credentials, storage, config)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    storage: Storage = Depends(get_storage),
    config: Settings = Depends(get_settings)
) -> Optional[Row]:
    """Current user when a token is sent; a bad token is still a 401"""
    if credentials is None:
        return None
    return await _resolve_user(credentials, storage, config)


async def read_raw_json(request: Request) -> Any:
    """
    The request body as plain JSON, before any schema has looked at it.

    FastAPI has already buffered the body by the time dependencies run, so
    this does not consume it. Undecodable bodies give None.
    """
    try:
        return await request.json()
    except ValueError:
        return None


def _path_owner(request: Request, name: str) -> int:
    raw = request.path_params.get(name)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationFailedError.for_field(name, "Input should be a valid integer")


def authorize(resource: str, action: str) -> Callable[..., Any]:
    """
    Dependency enforcing the (resource, action) rule.

    Role checks and path ownership run here. Row and body ownership need the
    stored row or the request body; the CRUD routes apply them in their own
    dependencies (see app/api/endpoints/crud.py), still ahead of body
    validation.
    """
    rule = get_rule(resource, action)

    async def dependency(
        request: Request,
        current_user: Dict[str, Any] = Depends(get_current_user)
    ) -> AccessContext:
        ctx = AccessContext(current_user, resource, action, rule)
        ctx.check_role()

        if rule.ownership is not None and rule.ownership.source == PATH:
            ctx.check_owner(_path_owner(request, rule.ownership.field))

        return ctx

    return dependency
