"""
Persistence gateway contract

Every test runs once per store implementation (in-memory and SQLite through
SQLAlchemy); both must behave identically.
"""
import pytest
from datetime import datetime
from decimal import Decimal

from app.core.config import Settings
from app.core.exceptions import DuplicateUsernameError, ReferencedRowError, StorageError, ValidationFailedError
from app.models import ContentType, PaymentStatus, ProjectStatus, QuestionType, TaskStatus, UserRole
from app.storage import InMemoryStorage, create_storage
from app.storage.database import DatabaseStorage


async def create_user(storage, username="rahul", role=UserRole.STUDENT):
    return await storage.users.create({
        "username": username,
        "password": "$2b$04$notarealhashbutgoodenough",
        "name": username.title(),
        "email": f"{username}@campusops.io",
        "role": role,
    })


async def create_course(storage, title="Intro", instructor_id=None):
    return await storage.courses.create({
        "title": title,
        "fee": Decimal("49.99"),
        "instructor_id": instructor_id,
    })


class TestCreateAndRead:

    async def test_create_returns_input_plus_id(self, any_storage):
        course = await create_course(any_storage)

        assert isinstance(course["id"], int)
        assert course["title"] == "Intro"
        assert course["fee"] == Decimal("49.99")
        assert course["description"] is None

    async def test_ids_are_distinct(self, any_storage):
        first = await create_course(any_storage, "A")
        second = await create_course(any_storage, "B")

        assert first["id"] != second["id"]

    async def test_get_by_id(self, any_storage):
        course = await create_course(any_storage)

        assert await any_storage.courses.get(course["id"]) == course

    async def test_get_missing_returns_none(self, any_storage):
        assert await any_storage.courses.get(999) is None

    async def test_list_in_id_order(self, any_storage):
        created = [await create_course(any_storage, title) for title in ("A", "B", "C")]

        listed = await any_storage.courses.list()

        assert [row["id"] for row in listed] == [row["id"] for row in created]

    async def test_column_defaults_applied(self, any_storage):
        student = await create_user(any_storage)
        course = await create_course(any_storage)

        enrollment = await any_storage.enrollments.create({
            "student_id": student["id"],
            "course_id": course["id"],
            "payment_status": PaymentStatus.PENDING,
            "amount_paid": Decimal("0"),
        })

        assert isinstance(enrollment["enrollment_date"], datetime)

    async def test_options_list_round_trips(self, any_storage):
        course = await create_course(any_storage)
        quiz = await any_storage.quizzes.create({"course_id": course["id"], "title": "Q1"})

        question = await any_storage.quiz_questions.create({
            "quiz_id": quiz["id"],
            "question": "Pick one",
            "type": QuestionType.MULTIPLE_CHOICE,
            "options": ["a", "b", "c"],
            "correct_answer": "b",
            "order": 1,
        })

        assert (await any_storage.quiz_questions.get(question["id"]))["options"] == ["a", "b", "c"]

    async def test_returned_rows_do_not_alias_stored_values(self, any_storage):
        course = await create_course(any_storage)
        quiz = await any_storage.quizzes.create({"course_id": course["id"], "title": "Q1"})
        options = ["a", "b"]

        question = await any_storage.quiz_questions.create({
            "quiz_id": quiz["id"],
            "question": "Pick one",
            "type": QuestionType.MULTIPLE_CHOICE,
            "options": options,
            "correct_answer": "a",
            "order": 1,
        })
        options.append("from-caller")
        question["options"].append("from-create")
        (await any_storage.quiz_questions.get(question["id"]))["options"].append("from-get")
        (await any_storage.quiz_questions.list())[0]["options"].append("from-list")

        updated = await any_storage.quiz_questions.update(question["id"], {"options": options})
        options.append("after-update")
        updated["options"].append("from-update")

        stored = await any_storage.quiz_questions.get(question["id"])
        assert stored["options"] == ["a", "b", "from-caller"]

    async def test_unknown_column_rejected(self, any_storage):
        with pytest.raises(ValueError):
            await any_storage.courses.create({"title": "A", "fee": 1, "rating": 5})


class TestUpdate:

    async def test_partial_update_keeps_absent_fields(self, any_storage):
        course = await create_course(any_storage)

        updated = await any_storage.courses.update(course["id"], {"fee": Decimal("10.00")})

        assert updated["fee"] == Decimal("10.00")
        assert updated["title"] == course["title"]
        assert await any_storage.courses.get(course["id"]) == updated

    async def test_update_missing_returns_none(self, any_storage):
        assert await any_storage.courses.update(999, {"title": "Nope"}) is None

    async def test_update_cannot_change_id(self, any_storage):
        course = await create_course(any_storage)

        updated = await any_storage.courses.update(course["id"], {"id": 500, "title": "Renamed"})

        assert updated["id"] == course["id"]
        assert await any_storage.courses.get(500) is None


class TestDelete:

    async def test_delete_then_second_delete(self, any_storage):
        course = await create_course(any_storage)

        assert await any_storage.courses.delete(course["id"]) is True
        assert await any_storage.courses.get(course["id"]) is None
        assert await any_storage.courses.delete(course["id"]) is False

    async def test_referenced_row_cannot_be_deleted(self, any_storage):
        course = await create_course(any_storage)
        await any_storage.course_contents.create({
            "course_id": course["id"],
            "title": "Welcome",
            "type": ContentType.VIDEO,
            "content": "https://videos.campusops.io/1.mp4",
            "order": 1,
        })

        with pytest.raises(ReferencedRowError) as exc_info:
            await any_storage.courses.delete(course["id"])

        assert exc_info.value.details["referenced_by"] == ["course_contents"]
        assert await any_storage.courses.get(course["id"]) is not None


class TestForeignKeyReads:

    async def test_list_by_isolates_key_values(self, any_storage):
        first = await create_course(any_storage, "A")
        second = await create_course(any_storage, "B")
        for course in (first, second, first):
            await any_storage.quizzes.create({"course_id": course["id"], "title": "Quiz"})

        quizzes = await any_storage.get_quizzes_by_course(first["id"])

        assert len(quizzes) == 2
        assert all(quiz["course_id"] == first["id"] for quiz in quizzes)

    async def test_list_by_orders_by_sequence_column(self, any_storage):
        course = await create_course(any_storage)
        for order in (3, 1, 2):
            await any_storage.course_contents.create({
                "course_id": course["id"],
                "title": f"Part {order}",
                "type": ContentType.PDF,
                "content": "...",
                "order": order,
            })

        contents = await any_storage.get_course_contents_by_course(course["id"])

        assert [row["order"] for row in contents] == [1, 2, 3]

    async def test_list_by_unknown_value_is_empty(self, any_storage):
        assert await any_storage.get_milestones_by_project(42) == []

    async def test_tasks_by_employee(self, any_storage):
        employee = await create_user(any_storage, "karthik", UserRole.EMPLOYEE)
        project = await any_storage.projects.create({
            "title": "Portal",
            "start_date": datetime(2024, 1, 1),
            "status": ProjectStatus.ACTIVE,
        })
        mine = await any_storage.tasks.create({
            "project_id": project["id"],
            "title": "Mine",
            "assigned_to": employee["id"],
            "status": TaskStatus.ASSIGNED,
        })
        await any_storage.tasks.create({
            "project_id": project["id"],
            "title": "Unassigned",
            "status": TaskStatus.ASSIGNED,
        })

        tasks = await any_storage.get_tasks_by_employee(employee["id"])

        assert [task["id"] for task in tasks] == [mine["id"]]

    async def test_users_by_role(self, any_storage):
        await create_user(any_storage, "asha", UserRole.ADMIN)
        student = await create_user(any_storage, "rahul", UserRole.STUDENT)

        students = await any_storage.get_users_by_role(UserRole.STUDENT)

        assert [user["id"] for user in students] == [student["id"]]
        assert await any_storage.get_user_by_username("rahul") == student
        assert await any_storage.get_user_by_username("nobody") is None


class TestIntegrity:

    async def test_username_is_unique(self, any_storage):
        await create_user(any_storage, "rahul")

        with pytest.raises(DuplicateUsernameError):
            await create_user(any_storage, "rahul")

    async def test_rename_onto_taken_username(self, any_storage):
        await create_user(any_storage, "rahul")
        priya = await create_user(any_storage, "priya")

        with pytest.raises(DuplicateUsernameError):
            await any_storage.users.update(priya["id"], {"username": "rahul"})

    async def test_missing_parent_rejected(self, any_storage):
        with pytest.raises(ValidationFailedError) as exc_info:
            await any_storage.quizzes.create({"course_id": 999, "title": "Orphan"})

        assert exc_info.value.details["errors"] == [
            {"field": "courseId", "message": "No course with id 999"}
        ]

    async def test_nullable_reference_may_be_empty(self, any_storage):
        course = await create_course(any_storage, instructor_id=None)

        assert course["instructor_id"] is None


class TestCreateStorage:

    def test_memory_backend(self):
        storage = create_storage(Settings(STORAGE_BACKEND="memory"))

        assert isinstance(storage, InMemoryStorage)
        assert storage.backend_name == "memory"

    def test_database_backend(self, tmp_path):
        storage = create_storage(Settings(
            STORAGE_BACKEND="database",
            DATABASE_URL=f"sqlite:///{tmp_path / 'x.db'}",
        ))

        assert isinstance(storage, DatabaseStorage)

    def test_database_backend_requires_url(self):
        with pytest.raises(RuntimeError):
            create_storage(Settings(STORAGE_BACKEND="database", DATABASE_URL=""))

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError):
            Settings(STORAGE_BACKEND="redis")

    async def test_database_store_connects_on_startup(self, tmp_path):
        path = tmp_path / "lazy.db"
        storage = create_storage(Settings(STORAGE_BACKEND="database", DATABASE_URL=f"sqlite:///{path}"))

        assert storage.engine is None
        assert not path.exists()
        with pytest.raises(StorageError):
            await storage.users.list()

        await storage.startup()
        try:
            assert storage.engine is not None
            assert await storage.users.list() == []
            assert path.exists()
        finally:
            await storage.shutdown()
