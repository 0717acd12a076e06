from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes
from app.schemas.finance import ExpenseCreate, ExpenseUpdate, ExpenseResponse

router = APIRouter(tags=["Expenses"])

expenses = CrudResource(
    name="expenses",
    label="Expense",
    path="/expenses",
    create_schema=ExpenseCreate,
    update_schema=ExpenseUpdate,
    response_schema=ExpenseResponse,
    filter_field="category",
)
register_crud_routes(router, expenses)
