from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes
from app.schemas.project import ClientCreate, ClientUpdate, ClientResponse

router = APIRouter(tags=["Clients"])

clients = CrudResource(
    name="clients",
    label="Client",
    path="/clients",
    create_schema=ClientCreate,
    update_schema=ClientUpdate,
    response_schema=ClientResponse,
    filter_field="industry",
)
register_crud_routes(router, clients)
