"""
Users Management API

- GET /users: admin only. Optional `role` filter; without it the listing
  covers every role and leaves out the requesting admin's own row.
- GET /users/{id}: admin, or the user themselves
- PUT /users/{id}: admin; a supplied password is re-hashed
- DELETE /users/{id}: admin; deleting yourself is refused

Users are created through /register. Responses never carry the password.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.endpoints.crud import CrudResource, register_crud_routes
from app.core.exceptions import ValidationFailedError
from app.core.security import get_password_hash
from app.models.user import UserRole
from app.modules.auth.dependencies import authorize, get_storage
from app.modules.auth.policy import AccessContext
from app.schemas.user import UserRegister, UserUpdate, UserResponse
from app.storage import Row, Storage

router = APIRouter(tags=["Users"])


def hash_new_password(values: Row, ctx: AccessContext) -> None:
    if "password" in values:
        values["password"] = get_password_hash(values["password"])


def refuse_self_delete(row: Row, ctx: AccessContext) -> None:
    if row["id"] == ctx.user_id:
        raise ValidationFailedError.for_field("id", "You cannot delete your own account")


users = CrudResource(
    name="users",
    label="User",
    path="/users",
    create_schema=UserRegister,
    update_schema=UserUpdate,
    response_schema=UserResponse,
    filter_field="role",
    before_update=hash_new_password,
    before_delete=refuse_self_delete,
)


@router.get("/users", response_model=List[UserResponse], name="users:list")
async def list_users(
    role: Optional[str] = Query(None, description="Only users with this role"),
    ctx: AccessContext = Depends(authorize("users", "list")),
    storage: Storage = Depends(get_storage)
):
    """List users (admin only)"""
    if role is not None:
        return await storage.get_users_by_role(users.parse_filter(role))

    rows = []
    for each_role in UserRole:
        rows.extend(await storage.get_users_by_role(each_role))
    return [row for row in rows if row["id"] != ctx.user_id]


register_crud_routes(router, users, include=("read", "update", "delete"))
