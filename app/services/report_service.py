"""
Report Generation Service
Read-only aggregates for the finance and admin dashboards
"""

from collections import defaultdict
from decimal import Decimal
from typing import Any, Dict, List

from app.models.finance import ProjectPaymentStatus
from app.models.project import ProjectStatus
from app.models.user import UserRole
from app.storage import Storage

ZERO = Decimal("0")


class ReportService:
    """Service for generating the dashboard reports"""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def generate_finance_report(self) -> Dict[str, Any]:
        """
        Income, expenses and their balance.

        Income counts completed project payments; pending payments are
        reported separately and never enter the net figure.
        """
        payments = await self.storage.project_payments.list()
        expenses = await self.storage.expenses.list()

        received: Dict[int, Decimal] = defaultdict(lambda: ZERO)
        pending: Dict[int, Decimal] = defaultdict(lambda: ZERO)
        for payment in payments:
            if payment["status"] == ProjectPaymentStatus.COMPLETED:
                received[payment["project_id"]] += payment["amount"]
            else:
                pending[payment["project_id"]] += payment["amount"]

        expenses_by_category: Dict[str, Decimal] = defaultdict(lambda: ZERO)
        for expense in expenses:
            expenses_by_category[expense["category"]] += expense["amount"]

        income_by_project: List[Dict[str, Any]] = []
        for project_id in sorted(set(received) | set(pending)):
            project = await self.storage.projects.get(project_id)
            income_by_project.append({
                "project_id": project_id,
                "title": project["title"] if project else "",
                "received": received[project_id],
                "pending": pending[project_id],
            })

        total_income = sum(received.values(), ZERO)
        total_expenses = sum(expenses_by_category.values(), ZERO)

        return {
            "total_income": total_income,
            "pending_income": sum(pending.values(), ZERO),
            "total_expenses": total_expenses,
            "net_income": total_income - total_expenses,
            "expenses_by_category": dict(expenses_by_category),
            "income_by_project": income_by_project,
        }

    async def generate_overview_report(self) -> Dict[str, int]:
        """Head counts across the three modules"""
        projects = await self.storage.projects.list()

        return {
            "students": len(await self.storage.get_users_by_role(UserRole.STUDENT)),
            "instructors": len(await self.storage.get_users_by_role(UserRole.INSTRUCTOR)),
            "employees": len(await self.storage.get_users_by_role(UserRole.EMPLOYEE)),
            "courses": len(await self.storage.courses.list()),
            "projects": len(projects),
            "active_projects": sum(1 for p in projects if p["status"] == ProjectStatus.ACTIVE),
            "clients": len(await self.storage.clients.list()),
            "enrollments": len(await self.storage.enrollments.list()),
        }
