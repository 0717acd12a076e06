from typing import Dict, List

from app.schemas.common import CamelModel, Money


class ProjectIncome(CamelModel):
    project_id: int
    title: str
    received: Money
    pending: Money


class FinanceReport(CamelModel):
    total_income: Money
    pending_income: Money
    total_expenses: Money
    net_income: Money
    expenses_by_category: Dict[str, Money]
    income_by_project: List[ProjectIncome]


class OverviewReport(CamelModel):
    students: int
    instructors: int
    employees: int
    courses: int
    projects: int
    active_projects: int
    clients: int
    enrollments: int
