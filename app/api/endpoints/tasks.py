"""
Tasks API

- admin and project_manager manage tasks and may change any field
- the assignee may read their task and change its `status`, nothing else
- /employees/{employee_id}/tasks: the employee themselves, admin, project_manager
"""
from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes, register_relation_route
from app.schemas.project import TaskCreate, TaskUpdate, TaskResponse

router = APIRouter(tags=["Tasks"])

tasks = CrudResource(
    name="tasks",
    label="Task",
    path="/tasks",
    create_schema=TaskCreate,
    update_schema=TaskUpdate,
    response_schema=TaskResponse,
    filter_field="status",
)
register_crud_routes(router, tasks)

register_relation_route(
    router,
    "/employees/{employee_id}/tasks",
    param="employee_id",
    resource="tasks",
    action="list_by_employee",
    response_schema=TaskResponse,
    fetch=lambda storage, employee_id: storage.get_tasks_by_employee(employee_id),
)
