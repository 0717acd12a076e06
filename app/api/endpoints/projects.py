"""
Projects API

Listing is role scoped:
- admin, project_manager, finance: every project (optional `status` filter)
- employee: only projects in which they hold at least one task
- everyone else: 403

Reads scoped to one project:
- /projects/{project_id}/milestones  (ordered by `order`)
- /projects/{project_id}/tasks
- /projects/{project_id}/payments    (admin, finance, project_manager)
- /managers/{manager_id}/projects
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.endpoints.crud import CrudResource, register_crud_routes, register_relation_route
from app.models.user import UserRole
from app.modules.auth.dependencies import authorize, get_storage
from app.modules.auth.policy import AccessContext
from app.schemas.finance import ProjectPaymentResponse
from app.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    MilestoneResponse,
    TaskResponse,
)
from app.storage import Row, Storage

router = APIRouter(tags=["Projects"])

projects = CrudResource(
    name="projects",
    label="Project",
    path="/projects",
    create_schema=ProjectCreate,
    update_schema=ProjectUpdate,
    response_schema=ProjectResponse,
    filter_field="status",
)


async def _projects_of_employee(storage: Storage, employee_id: int) -> List[Row]:
    tasks = await storage.get_tasks_by_employee(employee_id)
    project_ids = sorted({task["project_id"] for task in tasks})

    rows = []
    for project_id in project_ids:
        project = await storage.projects.get(project_id)
        if project is not None:
            rows.append(project)
    return rows


@router.get("/projects", response_model=List[ProjectResponse], name="projects:list")
async def list_projects(
    status_filter: Optional[str] = Query(None, alias="status"),
    ctx: AccessContext = Depends(authorize("projects", "list")),
    storage: Storage = Depends(get_storage)
):
    """List projects visible to the current user"""
    status_value = projects.parse_filter(status_filter) if status_filter is not None else None

    if ctx.role == UserRole.EMPLOYEE:
        rows = await _projects_of_employee(storage, ctx.user_id)
        if status_value is not None:
            rows = [row for row in rows if row["status"] == status_value]
        return rows

    if status_value is not None:
        return await storage.projects.list_by("status", status_value)
    return await storage.projects.list()


register_crud_routes(router, projects, include=("read", "create", "update", "delete"))


register_relation_route(
    router,
    "/projects/{project_id}/milestones",
    param="project_id",
    resource="milestones",
    action="list_by_project",
    response_schema=MilestoneResponse,
    fetch=lambda storage, project_id: storage.get_milestones_by_project(project_id),
)

register_relation_route(
    router,
    "/projects/{project_id}/tasks",
    param="project_id",
    resource="tasks",
    action="list_by_project",
    response_schema=TaskResponse,
    fetch=lambda storage, project_id: storage.get_tasks_by_project(project_id),
)

register_relation_route(
    router,
    "/projects/{project_id}/payments",
    param="project_id",
    resource="project_payments",
    action="list_by_project",
    response_schema=ProjectPaymentResponse,
    fetch=lambda storage, project_id: storage.get_project_payments_by_project(project_id),
)

register_relation_route(
    router,
    "/managers/{manager_id}/projects",
    param="manager_id",
    resource="projects",
    action="list_by_manager",
    response_schema=ProjectResponse,
    fetch=lambda storage, manager_id: storage.get_projects_by_manager(manager_id),
)
