"""
Unit Tests for ReportService
"""
from datetime import datetime
from decimal import Decimal

from app.models import ProjectPaymentStatus, ProjectStatus, UserRole
from app.services.report_service import ReportService


async def add_project(storage, title, status=ProjectStatus.ACTIVE):
    return await storage.projects.create({
        "title": title,
        "start_date": datetime(2024, 1, 1),
        "status": status,
    })


async def add_payment(storage, project, amount, status):
    return await storage.project_payments.create({
        "project_id": project["id"],
        "amount": Decimal(amount),
        "status": status,
    })


class TestFinanceReport:

    async def test_empty_store(self, storage):
        report = await ReportService(storage).generate_finance_report()

        assert report["total_income"] == Decimal("0")
        assert report["net_income"] == Decimal("0")
        assert report["expenses_by_category"] == {}
        assert report["income_by_project"] == []

    async def test_income_expenses_and_net(self, storage):
        portal = await add_project(storage, "Portal")
        app = await add_project(storage, "Mobile app")
        await add_payment(storage, portal, "1000.00", ProjectPaymentStatus.COMPLETED)
        await add_payment(storage, portal, "500.00", ProjectPaymentStatus.PENDING)
        await add_payment(storage, app, "250.00", ProjectPaymentStatus.COMPLETED)
        for title, amount, category in [
            ("Hosting", "200.00", "Infrastructure"),
            ("Backups", "50.00", "Infrastructure"),
            ("Lunch", "30.00", "Meals"),
        ]:
            await storage.expenses.create({"title": title, "amount": Decimal(amount), "category": category})

        report = await ReportService(storage).generate_finance_report()

        assert report["total_income"] == Decimal("1250.00")
        assert report["pending_income"] == Decimal("500.00")
        assert report["total_expenses"] == Decimal("280.00")
        assert report["net_income"] == Decimal("970.00")
        assert report["expenses_by_category"] == {
            "Infrastructure": Decimal("250.00"),
            "Meals": Decimal("30.00"),
        }
        assert report["income_by_project"] == [
            {"project_id": portal["id"], "title": "Portal",
             "received": Decimal("1000.00"), "pending": Decimal("500.00")},
            {"project_id": app["id"], "title": "Mobile app",
             "received": Decimal("250.00"), "pending": Decimal("0")},
        ]


class TestOverviewReport:

    async def test_counts(self, storage, make_user, course, project):
        await make_user(UserRole.STUDENT)
        await make_user(UserRole.STUDENT)
        await make_user(UserRole.EMPLOYEE)
        await add_project(storage, "Paused", status=ProjectStatus.ON_HOLD)

        report = await ReportService(storage).generate_overview_report()

        assert report == {
            "students": 2,
            "instructors": 1,  # course owner
            "employees": 1,
            "courses": 1,
            "projects": 2,
            "active_projects": 1,
            "clients": 1,
            "enrollments": 0,
        }
