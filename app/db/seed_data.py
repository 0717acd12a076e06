"""
Seed Data Module

Demo data for every module plus the bootstrap admin used at startup.
Run with: python -m app.db.seed_data          (seed the configured store)
          python -m app.db.seed_data clear    (delete everything)
"""
import asyncio
import sys
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from app.core.config import settings
from app.core.logging_config import logger
from app.core.security import get_password_hash
from app.models import (
    ContentType,
    PaymentStatus,
    ProjectPaymentStatus,
    ProjectStatus,
    QuestionType,
    TaskStatus,
    UserRole,
)
from app.storage import ENTITY_MODELS, REFERENCES, Row, Storage, create_storage

DEMO_PASSWORD = "password123"


# ==================== Sample Data Constants ====================

SAMPLE_USERS = [
    {"username": "admin", "name": "Asha Admin", "email": "admin@campusops.io", "role": UserRole.ADMIN},
    {"username": "instructor1", "name": "Dr. Ravi Iyer", "email": "ravi@campusops.io", "role": UserRole.INSTRUCTOR},
    {"username": "instructor2", "name": "Prof. Lakshmi Devi", "email": "lakshmi@campusops.io", "role": UserRole.INSTRUCTOR},
    {"username": "student1", "name": "Rahul Sharma", "email": "rahul@campusops.io", "role": UserRole.STUDENT},
    {"username": "student2", "name": "Priya Patel", "email": "priya@campusops.io", "role": UserRole.STUDENT},
    {"username": "student3", "name": "Amit Kumar", "email": "amit@campusops.io", "role": UserRole.STUDENT},
    {"username": "manager1", "name": "Neha Agarwal", "email": "neha@campusops.io", "role": UserRole.PROJECT_MANAGER},
    {"username": "employee1", "name": "Karthik Rajan", "email": "karthik@campusops.io", "role": UserRole.EMPLOYEE},
    {"username": "employee2", "name": "Meera Shah", "email": "meera@campusops.io", "role": UserRole.EMPLOYEE},
    {"username": "finance1", "name": "Suresh Babu", "email": "suresh@campusops.io", "role": UserRole.FINANCE},
]

SAMPLE_COURSES = [
    {"title": "Intro to Python", "description": "Variables, loops and functions", "fee": Decimal("49.99")},
    {"title": "Web Development", "description": "HTML, CSS and a first backend", "fee": Decimal("79.00")},
    {"title": "Data Analysis", "description": "Working with tables and charts", "fee": Decimal("99.50")},
]

SAMPLE_CLIENTS = [
    {"name": "InnovateTech", "email": "hello@innovatetech.in", "phone": "+91 80 5550 0101", "industry": "Software"},
    {"name": "HealthAI", "email": "ops@healthai.in", "phone": "+91 22 5550 0202", "industry": "Healthcare"},
]

SAMPLE_EXPENSES = [
    {"title": "Cloud hosting", "amount": Decimal("320.00"), "category": "Infrastructure"},
    {"title": "Office rent", "amount": Decimal("1500.00"), "category": "Facilities"},
    {"title": "Team lunch", "amount": Decimal("85.40"), "category": "Meals"},
]


# ==================== Bootstrap ====================

async def ensure_bootstrap_admin(storage: Storage, username: str, password: str, email: str) -> Optional[Row]:
    """Create the first admin account when it does not exist yet"""
    existing = await storage.get_user_by_username(username)
    if existing:
        return None

    if not password:
        logger.warning(
            f"[Startup] BOOTSTRAP_ADMIN_USERNAME={username} but no password set - skipping"
        )
        return None

    admin = await storage.users.create({
        "username": username,
        "password": get_password_hash(password),
        "name": "Administrator",
        "email": email,
        "role": UserRole.ADMIN,
    })
    logger.info(f"[Startup] Created bootstrap admin '{username}'")
    return admin


# ==================== Seeders ====================

async def seed_users(storage: Storage) -> Dict[str, Row]:
    """Create demo users; existing usernames are reused"""
    users = {}
    password_hash = get_password_hash(DEMO_PASSWORD)

    for user_data in SAMPLE_USERS:
        user = await storage.get_user_by_username(user_data["username"])
        if user is None:
            user = await storage.users.create({**user_data, "password": password_hash})
        users[user["username"]] = user

    print(f"Seeded {len(users)} users (password: {DEMO_PASSWORD})")
    return users


async def seed_learning(storage: Storage, users: Dict[str, Row]) -> List[Row]:
    """Courses with contents, quizzes, enrollments, results and comments"""
    instructors = [users["instructor1"], users["instructor2"]]
    students = [users["student1"], users["student2"], users["student3"]]
    courses = []

    for i, course_data in enumerate(SAMPLE_COURSES):
        course = await storage.courses.create({
            **course_data,
            "instructor_id": instructors[i % len(instructors)]["id"],
        })
        courses.append(course)

        video = await storage.course_contents.create({
            "course_id": course["id"],
            "title": f"{course['title']}: Welcome",
            "type": ContentType.VIDEO,
            "content": f"https://videos.campusops.io/{course['id']}/welcome.mp4",
            "order": 1,
        })
        await storage.course_contents.create({
            "course_id": course["id"],
            "title": f"{course['title']}: Notes",
            "type": ContentType.PDF,
            "content": "Lecture notes for week one.",
            "order": 2,
        })

        quiz = await storage.quizzes.create({
            "course_id": course["id"],
            "title": f"{course['title']} - Check-in",
            "content_id": video["id"],
        })
        await storage.quiz_questions.create({
            "quiz_id": quiz["id"],
            "question": "Which keyword defines a function?",
            "type": QuestionType.MULTIPLE_CHOICE,
            "options": ["def", "func", "lambda", "fn"],
            "correct_answer": "def",
            "order": 1,
        })
        await storage.quiz_questions.create({
            "quiz_id": quiz["id"],
            "question": "Lists are mutable.",
            "type": QuestionType.TRUE_FALSE,
            "options": ["true", "false"],
            "correct_answer": "true",
            "order": 2,
        })

        for j, student in enumerate(students):
            paid = course["fee"] if j == 0 else Decimal("0")
            await storage.enrollments.create({
                "student_id": student["id"],
                "course_id": course["id"],
                "payment_status": PaymentStatus.COMPLETED if j == 0 else PaymentStatus.PENDING,
                "amount_paid": paid,
            })
            await storage.quiz_results.create({
                "quiz_id": quiz["id"],
                "student_id": student["id"],
                "score": Decimal(60 + 15 * j),
            })

        await storage.comments.create({
            "content_id": video["id"],
            "user_id": students[0]["id"],
            "comment": "Great introduction, thanks!",
        })

    print(f"Seeded {len(courses)} courses with contents, quizzes and enrollments")
    return courses


async def seed_projects(storage: Storage, users: Dict[str, Row]) -> List[Row]:
    """Clients, projects, milestones and tasks"""
    manager = users["manager1"]
    employees = [users["employee1"], users["employee2"]]
    projects = []
    now = datetime.utcnow()

    for i, client_data in enumerate(SAMPLE_CLIENTS):
        client = await storage.clients.create(client_data)
        project = await storage.projects.create({
            "title": f"{client['name']} portal",
            "description": f"Customer portal for {client['name']}",
            "client_id": client["id"],
            "budget": Decimal("25000.00") * (i + 1),
            "start_date": now - timedelta(days=30),
            "end_date": now + timedelta(days=60),
            "status": ProjectStatus.ACTIVE,
            "manager_id": manager["id"],
        })
        projects.append(project)

        for order, title in enumerate(["Discovery", "Build", "Launch"], start=1):
            milestone = await storage.milestones.create({
                "project_id": project["id"],
                "title": title,
                "due_date": now + timedelta(days=20 * order),
                "completed": order == 1,
                "order": order,
            })
            await storage.tasks.create({
                "project_id": project["id"],
                "milestone_id": milestone["id"],
                "title": f"{title} work package",
                "assigned_to": employees[order % len(employees)]["id"],
                "status": TaskStatus.COMPLETED if order == 1 else TaskStatus.ASSIGNED,
                "due_date": milestone["due_date"],
            })

    print(f"Seeded {len(projects)} projects with milestones and tasks")
    return projects


async def seed_finance(storage: Storage, projects: List[Row]) -> None:
    """Expenses and project payments"""
    for expense_data in SAMPLE_EXPENSES:
        await storage.expenses.create(expense_data)

    for project in projects:
        await storage.project_payments.create({
            "project_id": project["id"],
            "amount": Decimal("10000.00"),
            "status": ProjectPaymentStatus.COMPLETED,
            "description": "Advance",
        })
        await storage.project_payments.create({
            "project_id": project["id"],
            "amount": Decimal("5000.00"),
            "status": ProjectPaymentStatus.PENDING,
            "description": "Milestone 2",
        })

    print(f"Seeded {len(SAMPLE_EXPENSES)} expenses and {2 * len(projects)} payments")


async def seed_all(storage: Optional[Storage] = None):
    """Seed all sample data into the configured store"""
    storage = storage or create_storage(settings)
    print("=" * 50)
    print(f"Starting seeding ({storage.backend_name} store)...")
    print("=" * 50)

    await storage.startup()
    try:
        # Seed in order of dependencies
        users = await seed_users(storage)
        await seed_learning(storage, users)
        projects = await seed_projects(storage, users)
        await seed_finance(storage, projects)

        print("=" * 50)
        print("Seeding completed successfully!")
        print("=" * 50)
    finally:
        await storage.shutdown()


def _deletion_order() -> List[str]:
    """Children before parents, so restricted deletes never trip"""
    order: List[str] = []

    def visit(name: str) -> None:
        if name in order:
            return
        for child, _ in REFERENCES.get(name, []):
            visit(child)
        order.append(name)

    for name in ENTITY_MODELS:
        visit(name)
    return order


async def clear_all(storage: Optional[Storage] = None):
    """Clear all data from the store"""
    storage = storage or create_storage(settings)
    print("Clearing all data...")

    await storage.startup()
    try:
        for name in _deletion_order():
            repo = storage.repository(name)
            for row in await repo.list():
                await repo.delete(row["id"])
        print("All data cleared!")
    finally:
        await storage.shutdown()


def main():
    """Console entry point: seed, or clear with the `clear` argument"""
    if len(sys.argv) > 1 and sys.argv[1] == "clear":
        asyncio.run(clear_all())
    else:
        asyncio.run(seed_all())


if __name__ == "__main__":
    main()
