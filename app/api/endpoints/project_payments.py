from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes
from app.schemas.finance import ProjectPaymentCreate, ProjectPaymentUpdate, ProjectPaymentResponse

router = APIRouter(tags=["Project Payments"])

project_payments = CrudResource(
    name="project_payments",
    label="Project payment",
    path="/project-payments",
    create_schema=ProjectPaymentCreate,
    update_schema=ProjectPaymentUpdate,
    response_schema=ProjectPaymentResponse,
    filter_field="status",
)
register_crud_routes(router, project_payments)
