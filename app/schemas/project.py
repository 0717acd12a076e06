from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.models.project import ProjectStatus, TaskStatus
from app.schemas.common import CamelModel, InputModel, Money, PatchModel, UtcDateTime, not_null


# ==================== Clients ====================

class ClientCreate(InputModel):
    name: str = Field(..., max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    industry: Optional[str] = Field(None, max_length=255)


class ClientUpdate(PatchModel):
    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    industry: Optional[str] = Field(None, max_length=255)

    @field_validator("name", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class ClientResponse(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None


# ==================== Projects ====================

class ProjectCreate(InputModel):
    title: str = Field(..., max_length=500)
    description: Optional[str] = None
    client_id: Optional[int] = None
    budget: Optional[Money] = Field(None, ge=0, max_digits=10, decimal_places=2)
    start_date: UtcDateTime
    end_date: Optional[UtcDateTime] = None
    status: ProjectStatus
    manager_id: Optional[int] = None


class ProjectUpdate(PatchModel):
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    client_id: Optional[int] = None
    budget: Optional[Money] = Field(None, ge=0, max_digits=10, decimal_places=2)
    start_date: Optional[UtcDateTime] = None
    end_date: Optional[UtcDateTime] = None
    status: Optional[ProjectStatus] = None
    manager_id: Optional[int] = None

    @field_validator("title", "start_date", "status", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class ProjectResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    client_id: Optional[int] = None
    budget: Optional[Money] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    status: ProjectStatus
    manager_id: Optional[int] = None


# ==================== Milestones ====================

class MilestoneCreate(InputModel):
    project_id: int
    title: str = Field(..., max_length=500)
    description: Optional[str] = None
    due_date: Optional[UtcDateTime] = None
    completed: bool = False
    order: int


class MilestoneUpdate(PatchModel):
    project_id: Optional[int] = None
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    due_date: Optional[UtcDateTime] = None
    completed: Optional[bool] = None
    order: Optional[int] = None

    @field_validator("project_id", "title", "completed", "order", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class MilestoneResponse(CamelModel):
    id: int
    project_id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    completed: bool
    order: int


# ==================== Tasks ====================

class TaskCreate(InputModel):
    project_id: int
    milestone_id: Optional[int] = None
    title: str = Field(..., max_length=500)
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    status: TaskStatus
    due_date: Optional[UtcDateTime] = None


class TaskUpdate(PatchModel):
    project_id: Optional[int] = None
    milestone_id: Optional[int] = None
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[UtcDateTime] = None

    @field_validator("project_id", "title", "status", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class TaskResponse(CamelModel):
    id: int
    project_id: int
    milestone_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    status: TaskStatus
    due_date: Optional[datetime] = None
