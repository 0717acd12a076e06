# Re-export all models for convenient imports
from app.models.user import User, UserRole
from app.models.learning import (
    Course,
    CourseContent,
    ContentType,
    Enrollment,
    PaymentStatus,
    Quiz,
    QuizQuestion,
    QuestionType,
    QuizResult,
    Comment,
)
from app.models.project import Project, ProjectStatus, Client, Milestone, Task, TaskStatus
from app.models.finance import Expense, ProjectPayment, ProjectPaymentStatus

__all__ = [
    # User
    "User",
    "UserRole",
    # Learning
    "Course",
    "CourseContent",
    "ContentType",
    "Enrollment",
    "PaymentStatus",
    "Quiz",
    "QuizQuestion",
    "QuestionType",
    "QuizResult",
    "Comment",
    # Projects
    "Project",
    "ProjectStatus",
    "Client",
    "Milestone",
    "Task",
    "TaskStatus",
    # Finance
    "Expense",
    "ProjectPayment",
    "ProjectPaymentStatus",
]
