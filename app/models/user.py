from sqlalchemy import Column, String, Integer, Enum as SQLEnum
import enum

from app.core.database import Base


class UserRole(str, enum.Enum):
    """User roles"""
    ADMIN = "admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"
    PROJECT_MANAGER = "project_manager"
    EMPLOYEE = "employee"
    FINANCE = "finance"


class User(Base):
    """User model"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash, never serialized
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, index=True)

    def __repr__(self):
        return f"<User {self.username}>"
