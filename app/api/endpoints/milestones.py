"""
Milestones API

Standard CRUD plus /milestones/{milestone_id}/tasks.
"""
from fastapi import APIRouter

from app.api.endpoints.crud import CrudResource, register_crud_routes, register_relation_route
from app.schemas.project import MilestoneCreate, MilestoneUpdate, MilestoneResponse, TaskResponse

router = APIRouter(tags=["Milestones"])

milestones = CrudResource(
    name="milestones",
    label="Milestone",
    path="/milestones",
    create_schema=MilestoneCreate,
    update_schema=MilestoneUpdate,
    response_schema=MilestoneResponse,
    filter_field="project_id",
)
register_crud_routes(router, milestones)

register_relation_route(
    router,
    "/milestones/{milestone_id}/tasks",
    param="milestone_id",
    resource="tasks",
    action="list_by_milestone",
    response_schema=TaskResponse,
    fetch=lambda storage, milestone_id: storage.get_tasks_by_milestone(milestone_id),
)
