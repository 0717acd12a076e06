"""
Request and response models for the learning module.

Create models list the insertable columns (required ones with `...`),
Update models make every column optional and refuse an explicit null for
columns the table declares NOT NULL.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator

from app.models.learning import ContentType, PaymentStatus, QuestionType
from app.schemas.common import CamelModel, InputModel, Money, PatchModel, UtcDateTime, not_null


# ==================== Courses ====================

class CourseCreate(InputModel):
    title: str = Field(..., max_length=500)
    description: Optional[str] = None
    fee: Money = Field(..., ge=0, max_digits=10, decimal_places=2)
    instructor_id: Optional[int] = None


class CourseUpdate(PatchModel):
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    fee: Optional[Money] = Field(None, ge=0, max_digits=10, decimal_places=2)
    instructor_id: Optional[int] = None

    @field_validator("title", "fee", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class CourseResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    fee: Money
    instructor_id: Optional[int] = None


# ==================== Course contents ====================

class CourseContentCreate(InputModel):
    course_id: int
    title: str = Field(..., max_length=500)
    type: ContentType
    content: str
    order: int


class CourseContentUpdate(PatchModel):
    course_id: Optional[int] = None
    title: Optional[str] = Field(None, max_length=500)
    type: Optional[ContentType] = None
    content: Optional[str] = None
    order: Optional[int] = None

    @field_validator("course_id", "title", "type", "content", "order", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class CourseContentResponse(CamelModel):
    id: int
    course_id: int
    title: str
    type: ContentType
    content: str
    order: int


# ==================== Enrollments ====================

class EnrollmentCreate(InputModel):
    student_id: int
    course_id: int
    enrollment_date: UtcDateTime = Field(default_factory=datetime.utcnow)
    payment_status: PaymentStatus
    amount_paid: Money = Field(..., ge=0, max_digits=10, decimal_places=2)


class EnrollmentUpdate(PatchModel):
    student_id: Optional[int] = None
    course_id: Optional[int] = None
    enrollment_date: Optional[UtcDateTime] = None
    payment_status: Optional[PaymentStatus] = None
    amount_paid: Optional[Money] = Field(None, ge=0, max_digits=10, decimal_places=2)

    @field_validator(
        "student_id", "course_id", "enrollment_date", "payment_status", "amount_paid",
        mode="after",
    )
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class EnrollmentResponse(CamelModel):
    id: int
    student_id: int
    course_id: int
    enrollment_date: datetime
    payment_status: PaymentStatus
    amount_paid: Money


# ==================== Quizzes ====================

class QuizCreate(InputModel):
    course_id: int
    title: str = Field(..., max_length=500)
    content_id: Optional[int] = None


class QuizUpdate(PatchModel):
    course_id: Optional[int] = None
    title: Optional[str] = Field(None, max_length=500)
    content_id: Optional[int] = None

    @field_validator("course_id", "title", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class QuizResponse(CamelModel):
    id: int
    course_id: int
    title: str
    content_id: Optional[int] = None


class QuizQuestionCreate(InputModel):
    quiz_id: int
    question: str
    type: QuestionType
    options: Optional[List[str]] = None
    correct_answer: str
    order: int


class QuizQuestionUpdate(PatchModel):
    quiz_id: Optional[int] = None
    question: Optional[str] = None
    type: Optional[QuestionType] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    order: Optional[int] = None

    @field_validator("quiz_id", "question", "type", "correct_answer", "order", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class QuizQuestionResponse(CamelModel):
    id: int
    quiz_id: int
    question: str
    type: QuestionType
    options: Optional[List[str]] = None
    correct_answer: str
    order: int


class QuizResultCreate(InputModel):
    quiz_id: int
    student_id: int
    score: Decimal = Field(..., max_digits=5, decimal_places=2)
    date_taken: UtcDateTime = Field(default_factory=datetime.utcnow)


class QuizResultUpdate(PatchModel):
    quiz_id: Optional[int] = None
    student_id: Optional[int] = None
    score: Optional[Decimal] = Field(None, max_digits=5, decimal_places=2)
    date_taken: Optional[UtcDateTime] = None

    @field_validator("quiz_id", "student_id", "score", "date_taken", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class QuizResultResponse(CamelModel):
    id: int
    quiz_id: int
    student_id: int
    score: Money
    date_taken: datetime


# ==================== Comments ====================

class CommentCreate(InputModel):
    content_id: int
    # Filled from the session when omitted
    user_id: Optional[int] = None
    comment: str
    date_posted: UtcDateTime = Field(default_factory=datetime.utcnow)


class CommentUpdate(PatchModel):
    # Authorship is fixed at creation
    content_id: Optional[int] = None
    comment: Optional[str] = None
    date_posted: Optional[UtcDateTime] = None

    @field_validator("content_id", "comment", "date_posted", mode="after")
    @classmethod
    def reject_null(cls, value):
        return not_null(value)


class CommentResponse(CamelModel):
    id: int
    content_id: int
    user_id: int
    comment: str
    date_posted: datetime
