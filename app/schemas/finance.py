from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.models.finance import ProjectPaymentStatus
from app.schemas.common import CamelModel, InputModel, Money, PatchModel, UtcDateTime, not_null


class ExpenseCreate(InputModel):
    title: str = Field(..., max_length=500)
    amount: Money = Field(..., gt=0, max_digits=10, decimal_places=2)
    category: str = Field(..., max_length=100)
    date: UtcDateTime = Field(default_factory=datetime.utcnow)
    description: Optional[str] = None


class ExpenseUpdate(PatchModel):
    title: Optional[str] = Field(None, max_length=500)
    amount: Optional[Money] = Field(None, gt=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, max_length=100)
    date: Optional[UtcDateTime] = None
    description: Optional[str] = None

    @field_validator("title", "amount", "category", "date", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class ExpenseResponse(CamelModel):
    id: int
    title: str
    amount: Money
    category: str
    date: datetime
    description: Optional[str] = None


class ProjectPaymentCreate(InputModel):
    project_id: int
    amount: Money = Field(..., gt=0, max_digits=10, decimal_places=2)
    date: UtcDateTime = Field(default_factory=datetime.utcnow)
    status: ProjectPaymentStatus
    description: Optional[str] = None


class ProjectPaymentUpdate(PatchModel):
    project_id: Optional[int] = None
    amount: Optional[Money] = Field(None, gt=0, max_digits=10, decimal_places=2)
    date: Optional[UtcDateTime] = None
    status: Optional[ProjectPaymentStatus] = None
    description: Optional[str] = None

    @field_validator("project_id", "amount", "date", "status", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class ProjectPaymentResponse(CamelModel):
    id: int
    project_id: int
    amount: Money
    date: datetime
    status: ProjectPaymentStatus
    description: Optional[str] = None
