"""
Persistence gateway contract.

A `Storage` owns one `Repository` per entity. Every repository exposes the
same battery of access methods (create, get, list, list_by, update, delete)
and hands rows back as plain dicts keyed by column name, so the in-memory
and the SQLAlchemy implementations are interchangeable behind the API.

Deletes are restricted: a row that other rows still reference cannot be
removed (see REFERENCES). Creates and updates must point at parents that
exist.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic.alias_generators import to_camel

from app.core.database import Base
from app.core.exceptions import ReferencedRowError, ValidationFailedError
from app.models import (
    User,
    Course,
    CourseContent,
    Enrollment,
    Quiz,
    QuizQuestion,
    QuizResult,
    Comment,
    Project,
    Client,
    Milestone,
    Task,
    Expense,
    ProjectPayment,
)

Row = Dict[str, Any]


ENTITY_MODELS: Dict[str, Type[Base]] = {
    "users": User,
    "courses": Course,
    "course_contents": CourseContent,
    "enrollments": Enrollment,
    "quizzes": Quiz,
    "quiz_questions": QuizQuestion,
    "quiz_results": QuizResult,
    "comments": Comment,
    "projects": Project,
    "clients": Client,
    "milestones": Milestone,
    "tasks": Task,
    "expenses": Expense,
    "project_payments": ProjectPayment,
}

ENTITY_LABELS: Dict[str, str] = {
    "users": "user",
    "courses": "course",
    "course_contents": "course content",
    "enrollments": "enrollment",
    "quizzes": "quiz",
    "quiz_questions": "quiz question",
    "quiz_results": "quiz result",
    "comments": "comment",
    "projects": "project",
    "clients": "client",
    "milestones": "milestone",
    "tasks": "task",
    "expenses": "expense",
    "project_payments": "project payment",
}

# parent entity -> [(child entity, child column pointing at the parent)]
REFERENCES: Dict[str, List[Tuple[str, str]]] = {
    "users": [
        ("courses", "instructor_id"),
        ("enrollments", "student_id"),
        ("quiz_results", "student_id"),
        ("comments", "user_id"),
        ("projects", "manager_id"),
        ("tasks", "assigned_to"),
    ],
    "courses": [
        ("course_contents", "course_id"),
        ("enrollments", "course_id"),
        ("quizzes", "course_id"),
    ],
    "course_contents": [
        ("quizzes", "content_id"),
        ("comments", "content_id"),
    ],
    "quizzes": [
        ("quiz_questions", "quiz_id"),
        ("quiz_results", "quiz_id"),
    ],
    "clients": [("projects", "client_id")],
    "projects": [
        ("milestones", "project_id"),
        ("tasks", "project_id"),
        ("project_payments", "project_id"),
    ],
    "milestones": [("tasks", "milestone_id")],
}

# child entity -> {column: parent entity}
PARENTS: Dict[str, Dict[str, str]] = {}
for _parent, _children in REFERENCES.items():
    for _child, _column in _children:
        PARENTS.setdefault(_child, {})[_column] = _parent


def column_names(name: str) -> List[str]:
    return [column.key for column in ENTITY_MODELS[name].__table__.columns]


def column_defaults(name: str) -> Row:
    """Values a column takes when an insert leaves it out"""
    defaults: Row = {}
    for column in ENTITY_MODELS[name].__table__.columns:
        if column.key == "id":
            continue
        default = column.default
        if default is None:
            defaults[column.key] = None
        elif default.is_callable:
            defaults[column.key] = default.arg(None)
        else:
            defaults[column.key] = default.arg
    return defaults


class Repository(ABC):
    """Access methods for one entity"""

    def __init__(self, name: str, storage: "Storage"):
        self.name = name
        self.storage = storage
        self.columns = column_names(name)

    def _check_columns(self, data: Row) -> Row:
        unknown = set(data) - set(self.columns)
        if unknown:
            raise ValueError(f"Unknown columns for {self.name}: {sorted(unknown)}")
        return {key: value for key, value in data.items() if key != "id"}

    async def create(self, data: Row) -> Row:
        """Insert a row and return it with its assigned id"""
        values = self._check_columns(data)
        await self.storage.ensure_parents_exist(self.name, values)
        return await self._insert(values)

    async def update(self, row_id: int, changes: Row) -> Optional[Row]:
        """Merge `changes` onto the stored row; None when the id is unknown"""
        values = self._check_columns(changes)
        if await self.get(row_id) is None:
            return None
        await self.storage.ensure_parents_exist(self.name, values)
        return await self._update(row_id, values)

    async def delete(self, row_id: int) -> bool:
        """Remove the row; False when there was nothing to remove"""
        if await self.get(row_id) is None:
            return False
        await self.storage.ensure_unreferenced(self.name, row_id)
        return await self._delete(row_id)

    @abstractmethod
    async def get(self, row_id: int) -> Optional[Row]:
        ...

    @abstractmethod
    async def list(self) -> List[Row]:
        """Every row, in id order"""

    @abstractmethod
    async def list_by(self, field: str, value: Any, order_by: Optional[str] = None) -> List[Row]:
        """Rows whose `field` equals `value`, ordered by `order_by` then id"""

    @abstractmethod
    async def exists_by(self, field: str, value: Any) -> bool:
        ...

    @abstractmethod
    async def _insert(self, values: Row) -> Row:
        ...

    @abstractmethod
    async def _update(self, row_id: int, values: Row) -> Optional[Row]:
        ...

    @abstractmethod
    async def _delete(self, row_id: int) -> bool:
        ...


class Storage(ABC):
    """One repository per entity plus the named foreign-key reads"""

    users: Repository
    courses: Repository
    course_contents: Repository
    enrollments: Repository
    quizzes: Repository
    quiz_questions: Repository
    quiz_results: Repository
    comments: Repository
    projects: Repository
    clients: Repository
    milestones: Repository
    tasks: Repository
    expenses: Repository
    project_payments: Repository

    backend_name = "abstract"

    def __init__(self):
        for name in ENTITY_MODELS:
            setattr(self, name, self.create_repository(name))

    @abstractmethod
    def create_repository(self, name: str) -> Repository:
        ...

    async def startup(self) -> None:
        """Prepare the backing store"""

    async def shutdown(self) -> None:
        """Release the backing store"""

    def repository(self, name: str) -> Repository:
        if name not in ENTITY_MODELS:
            raise KeyError(name)
        return getattr(self, name)

    # ==================== Referential integrity ====================

    async def ensure_parents_exist(self, name: str, values: Row) -> None:
        errors = []
        for column, parent in PARENTS.get(name, {}).items():
            value = values.get(column)
            if value is None:
                continue
            if await self.repository(parent).get(value) is None:
                errors.append({
                    "field": to_camel(column),
                    "message": f"No {ENTITY_LABELS[parent]} with id {value}",
                })
        if errors:
            raise ValidationFailedError(errors)

    async def ensure_unreferenced(self, name: str, row_id: int) -> None:
        referenced_by = []
        for child, column in REFERENCES.get(name, []):
            if await self.repository(child).exists_by(column, row_id):
                referenced_by.append(child)
        if referenced_by:
            raise ReferencedRowError(name, row_id, referenced_by)

    # ==================== Users ====================

    async def get_user_by_username(self, username: str) -> Optional[Row]:
        users = await self.users.list_by("username", username)
        return users[0] if users else None

    async def get_users_by_role(self, role) -> List[Row]:
        return await self.users.list_by("role", role)

    # ==================== Learning ====================

    async def get_course_contents_by_course(self, course_id: int) -> List[Row]:
        return await self.course_contents.list_by("course_id", course_id, order_by="order")

    async def get_enrollments_by_student(self, student_id: int) -> List[Row]:
        return await self.enrollments.list_by("student_id", student_id)

    async def get_enrollments_by_course(self, course_id: int) -> List[Row]:
        return await self.enrollments.list_by("course_id", course_id)

    async def get_quizzes_by_course(self, course_id: int) -> List[Row]:
        return await self.quizzes.list_by("course_id", course_id)

    async def get_quiz_questions_by_quiz(self, quiz_id: int) -> List[Row]:
        return await self.quiz_questions.list_by("quiz_id", quiz_id, order_by="order")

    async def get_quiz_results_by_quiz(self, quiz_id: int) -> List[Row]:
        return await self.quiz_results.list_by("quiz_id", quiz_id)

    async def get_quiz_results_by_student(self, student_id: int) -> List[Row]:
        return await self.quiz_results.list_by("student_id", student_id)

    async def get_comments_by_content(self, content_id: int) -> List[Row]:
        return await self.comments.list_by("content_id", content_id)

    # ==================== Projects ====================

    async def get_projects_by_manager(self, manager_id: int) -> List[Row]:
        return await self.projects.list_by("manager_id", manager_id)

    async def get_milestones_by_project(self, project_id: int) -> List[Row]:
        return await self.milestones.list_by("project_id", project_id, order_by="order")

    async def get_tasks_by_project(self, project_id: int) -> List[Row]:
        return await self.tasks.list_by("project_id", project_id)

    async def get_tasks_by_milestone(self, milestone_id: int) -> List[Row]:
        return await self.tasks.list_by("milestone_id", milestone_id)

    async def get_tasks_by_employee(self, employee_id: int) -> List[Row]:
        return await self.tasks.list_by("assigned_to", employee_id)

    # ==================== Finance ====================

    async def get_expenses_by_category(self, category: str) -> List[Row]:
        return await self.expenses.list_by("category", category)

    async def get_project_payments_by_project(self, project_id: int) -> List[Row]:
        return await self.project_payments.list_by("project_id", project_id)
