"""
Learning management tables: courses, their contents, enrollments, quizzes
and the comments students leave on course material.
"""
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Integer, Text, ForeignKey, JSON, Numeric
from datetime import datetime
import enum

from app.core.database import Base


class ContentType(str, enum.Enum):
    """Course content kinds"""
    VIDEO = "video"
    PDF = "pdf"


class PaymentStatus(str, enum.Enum):
    """Enrollment fee status"""
    COMPLETED = "completed"
    PENDING = "pending"
    PARTIAL = "partial"


class QuestionType(str, enum.Enum):
    """Quiz question kinds"""
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    FILL_IN_BLANK = "fill-in-blank"


class Course(Base):
    """Course model"""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    fee = Column(Numeric(10, 2), nullable=False)
    instructor_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    def __repr__(self):
        return f"<Course {self.id}: {self.title}>"


class CourseContent(Base):
    """A video or PDF inside a course, shown in `order`"""
    __tablename__ = "course_contents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    type = Column(SQLEnum(ContentType), nullable=False)
    content = Column(Text, nullable=False)  # video URL or PDF body
    order = Column(Integer, nullable=False)


class Enrollment(Base):
    """Student <-> course link with payment state"""
    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    enrollment_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    payment_status = Column(SQLEnum(PaymentStatus), nullable=False)
    amount_paid = Column(Numeric(10, 2), nullable=False)


class Quiz(Base):
    """Quiz model"""
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    content_id = Column(Integer, ForeignKey("course_contents.id"), nullable=True)


class QuizQuestion(Base):
    """Quiz question model"""
    __tablename__ = "quiz_questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    type = Column(SQLEnum(QuestionType), nullable=False)
    options = Column(JSON, nullable=True)  # choices for multiple-choice questions
    correct_answer = Column(Text, nullable=False)
    order = Column(Integer, nullable=False)


class QuizResult(Base):
    """Quiz result model"""
    __tablename__ = "quiz_results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    score = Column(Numeric(5, 2), nullable=False)
    date_taken = Column(DateTime, default=datetime.utcnow, nullable=False)


class Comment(Base):
    """Comment on a piece of course content"""
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content_id = Column(Integer, ForeignKey("course_contents.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    comment = Column(Text, nullable=False)
    date_posted = Column(DateTime, default=datetime.utcnow, nullable=False)
