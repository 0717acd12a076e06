"""
Generic CRUD routes.

Every entity gets the same five routes (list, read, create, update, delete),
each behind `authorize(resource, action)`. A resource module describes its
entity with a `CrudResource` and then registers the routes it wants on its
own router, adding any custom or relationship routes next to them.

Usage:
    router = APIRouter(tags=["Clients"])
    register_crud_routes(router, CrudResource(
        name="clients",
        label="Client",
        path="/clients",
        create_schema=ClientCreate,
        update_schema=ClientUpdate,
        response_schema=ClientResponse,
        filter_field="industry",
    ))
"""
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable, List, Optional, Sequence, Tuple, Type

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from pydantic import TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from app.core.exceptions import ResourceNotFoundError, ValidationFailedError
from app.modules.auth.dependencies import authorize, get_storage, read_raw_json
from app.modules.auth.policy import AccessContext
from app.schemas.common import CamelModel, InputModel, PatchModel
from app.storage import Row, Storage

# Hook run on the column values just before they reach the store
ValuesHook = Callable[[Row, AccessContext], None]
# Hook run on the stored row just before it is deleted
RowHook = Callable[[Row, AccessContext], None]

ALL_ROUTES = ("list", "read", "create", "update", "delete")


@dataclass
class CrudResource:
    name: str
    label: str
    path: str
    create_schema: Type[InputModel]
    update_schema: Type[PatchModel]
    response_schema: Type[CamelModel]
    filter_field: Optional[str] = None
    before_create: Optional[ValuesHook] = None
    before_update: Optional[ValuesHook] = None
    before_delete: Optional[RowHook] = None

    @property
    def filter_alias(self) -> str:
        return to_camel(self.filter_field) if self.filter_field else "filter"

    @cached_property
    def _filter_adapter(self) -> TypeAdapter:
        return TypeAdapter(self.create_schema.model_fields[self.filter_field].annotation)

    def parse_filter(self, raw: str) -> Any:
        """Coerce a query-string filter to the column's type"""
        try:
            return self._filter_adapter.validate_python(raw)
        except ValidationError as e:
            raise ValidationFailedError.for_field(self.filter_alias, e.errors()[0]["msg"])


async def get_or_404(storage: Storage, resource: CrudResource, item_id: int) -> Row:
    row = await storage.repository(resource.name).get(item_id)
    if row is None:
        raise ResourceNotFoundError(resource.label, item_id)
    return row


def owned_row(resource: CrudResource, action: str) -> Callable[..., Any]:
    """
    Dependency loading the row named by `item_id` and applying row ownership.

    Dependencies resolve before FastAPI validates the request body, so a
    missing row (404) or a caller who does not own it (403) is reported
    ahead of any payload errors. For writes, the raw body's owner field and
    editable fields are checked here too.
    """
    async def dependency(
        request: Request,
        item_id: int = Path(...),
        ctx: AccessContext = Depends(authorize(resource.name, action)),
        storage: Storage = Depends(get_storage)
    ) -> Tuple[AccessContext, Row]:
        row = await get_or_404(storage, resource, item_id)
        ctx.check_row(row)
        if action == "update":
            ctx.check_raw_body(await read_raw_json(request))
        return ctx, row

    return dependency


def body_owner(resource: CrudResource, action: str) -> Callable[..., Any]:
    """Dependency applying body ownership to the raw JSON of a create"""
    async def dependency(
        request: Request,
        ctx: AccessContext = Depends(authorize(resource.name, action))
    ) -> AccessContext:
        ctx.check_raw_body(await read_raw_json(request))
        return ctx

    return dependency


def register_crud_routes(
    router: APIRouter,
    resource: CrudResource,
    include: Sequence[str] = ALL_ROUTES,
) -> None:
    """Add the standard routes for `resource` to `router`"""
    name = resource.name
    create_schema = resource.create_schema
    update_schema = resource.update_schema
    response_schema = resource.response_schema

    if "list" in include:
        @router.get(resource.path, response_model=List[response_schema], name=f"{name}:list")
        async def list_items(
            filter_value: Optional[str] = Query(
                None,
                alias=resource.filter_alias,
                include_in_schema=resource.filter_field is not None,
            ),
            ctx: AccessContext = Depends(authorize(name, "list")),
            storage: Storage = Depends(get_storage)
        ):
            repo = storage.repository(name)
            if resource.filter_field and filter_value is not None:
                return await repo.list_by(resource.filter_field, resource.parse_filter(filter_value))
            return await repo.list()

    if "read" in include:
        @router.get(f"{resource.path}/{{item_id}}", response_model=response_schema, name=f"{name}:read")
        async def get_item(
            access: Tuple[AccessContext, Row] = Depends(owned_row(resource, "read"))
        ):
            _, row = access
            return row

    if "create" in include:
        @router.post(
            resource.path,
            response_model=response_schema,
            status_code=status.HTTP_201_CREATED,
            name=f"{name}:create",
        )
        async def create_item(
            payload: create_schema,
            ctx: AccessContext = Depends(body_owner(resource, "create")),
            storage: Storage = Depends(get_storage)
        ):
            values = payload.to_row()
            if resource.before_create:
                resource.before_create(values, ctx)
            ctx.check_body(values)
            return await storage.repository(name).create(values)

    if "update" in include:
        @router.put(f"{resource.path}/{{item_id}}", response_model=response_schema, name=f"{name}:update")
        async def update_item(
            payload: update_schema,
            item_id: int = Path(...),
            access: Tuple[AccessContext, Row] = Depends(owned_row(resource, "update")),
            storage: Storage = Depends(get_storage)
        ):
            ctx, _ = access
            changes = payload.to_row()
            ctx.check_fields(changes)
            if resource.before_update:
                resource.before_update(changes, ctx)

            updated = await storage.repository(name).update(item_id, changes)
            if updated is None:
                raise ResourceNotFoundError(resource.label, item_id)
            return updated

    if "delete" in include:
        @router.delete(
            f"{resource.path}/{{item_id}}",
            status_code=status.HTTP_204_NO_CONTENT,
            response_class=Response,
            name=f"{name}:delete",
        )
        async def delete_item(
            item_id: int = Path(...),
            access: Tuple[AccessContext, Row] = Depends(owned_row(resource, "delete")),
            storage: Storage = Depends(get_storage)
        ):
            ctx, row = access
            if resource.before_delete:
                resource.before_delete(row, ctx)

            if not await storage.repository(name).delete(item_id):
                raise ResourceNotFoundError(resource.label, item_id)
            return Response(status_code=status.HTTP_204_NO_CONTENT)


def register_relation_route(
    router: APIRouter,
    path: str,
    param: str,
    resource: str,
    action: str,
    response_schema: Type[CamelModel],
    fetch: Callable[[Storage, int], Any],
) -> None:
    """
    Add `GET path` listing the rows that reference the id in `param`.

    `fetch(storage, parent_id)` does the foreign-key read.
    """
    @router.get(path, response_model=List[response_schema], name=f"{resource}:{action}")
    async def list_related(
        parent_id: int = Path(..., alias=param),
        ctx: AccessContext = Depends(authorize(resource, action)),
        storage: Storage = Depends(get_storage)
    ):
        return await fetch(storage, parent_id)
