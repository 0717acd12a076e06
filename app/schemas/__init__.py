# Pydantic schemas
from app.schemas.common import CamelModel, InputModel, PatchModel, Money, UtcDateTime
from app.schemas.user import UserRegister, UserUpdate, UserResponse
from app.schemas.auth import UserLogin, RefreshRequest, Token, LoginResponse, MessageResponse
from app.schemas.learning import (
    CourseCreate,
    CourseUpdate,
    CourseResponse,
    CourseContentCreate,
    CourseContentUpdate,
    CourseContentResponse,
    EnrollmentCreate,
    EnrollmentUpdate,
    EnrollmentResponse,
    QuizCreate,
    QuizUpdate,
    QuizResponse,
    QuizQuestionCreate,
    QuizQuestionUpdate,
    QuizQuestionResponse,
    QuizResultCreate,
    QuizResultUpdate,
    QuizResultResponse,
    CommentCreate,
    CommentUpdate,
    CommentResponse,
)
from app.schemas.project import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    MilestoneCreate,
    MilestoneUpdate,
    MilestoneResponse,
    TaskCreate,
    TaskUpdate,
    TaskResponse,
)
from app.schemas.finance import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ProjectPaymentCreate,
    ProjectPaymentUpdate,
    ProjectPaymentResponse,
)
from app.schemas.report import FinanceReport, OverviewReport, ProjectIncome

__all__ = [
    # Common
    "CamelModel",
    "InputModel",
    "PatchModel",
    "Money",
    "UtcDateTime",
    # Users & auth
    "UserRegister",
    "UserUpdate",
    "UserResponse",
    "UserLogin",
    "RefreshRequest",
    "Token",
    "LoginResponse",
    "MessageResponse",
    # Learning
    "CourseCreate",
    "CourseUpdate",
    "CourseResponse",
    "CourseContentCreate",
    "CourseContentUpdate",
    "CourseContentResponse",
    "EnrollmentCreate",
    "EnrollmentUpdate",
    "EnrollmentResponse",
    "QuizCreate",
    "QuizUpdate",
    "QuizResponse",
    "QuizQuestionCreate",
    "QuizQuestionUpdate",
    "QuizQuestionResponse",
    "QuizResultCreate",
    "QuizResultUpdate",
    "QuizResultResponse",
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    # Projects
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "MilestoneCreate",
    "MilestoneUpdate",
    "MilestoneResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    # Finance
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "ProjectPaymentCreate",
    "ProjectPaymentUpdate",
    "ProjectPaymentResponse",
    # Reports
    "FinanceReport",
    "OverviewReport",
    "ProjectIncome",
]
