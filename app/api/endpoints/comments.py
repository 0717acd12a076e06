"""
Comments API

A comment is always authored by the requesting user: `userId` defaults to
the session user and only an admin may post under another id. Editing and
deleting is limited to the author and admins.
"""
from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes, register_relation_route
from app.modules.auth.policy import AccessContext
from app.schemas.learning import CommentCreate, CommentUpdate, CommentResponse
from app.storage import Row

router = APIRouter(tags=["Comments"])


def default_author(values: Row, ctx: AccessContext) -> None:
    if values.get("user_id") is None:
        values["user_id"] = ctx.user_id


comments = CrudResource(
    name="comments",
    label="Comment",
    path="/comments",
    create_schema=CommentCreate,
    update_schema=CommentUpdate,
    response_schema=CommentResponse,
    filter_field="content_id",
    before_create=default_author,
)
register_crud_routes(router, comments)

register_relation_route(
    router,
    "/content/{content_id}/comments",
    param="content_id",
    resource="comments",
    action="list_by_content",
    response_schema=CommentResponse,
    fetch=lambda storage, content_id: storage.get_comments_by_content(content_id),
)
