from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Integer, Text, ForeignKey, Numeric
from datetime import datetime
import enum

from app.core.database import Base


class ProjectPaymentStatus(str, enum.Enum):
    """Payment status"""
    COMPLETED = "completed"
    PENDING = "pending"


class Expense(Base):
    """Expense model"""
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False)
    description = Column(Text, nullable=True)


class ProjectPayment(Base):
    """Payment received against a project"""
    __tablename__ = "project_payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    date = Column(DateTime, default=datetime.utcnow, nullable=False)
    status = Column(SQLEnum(ProjectPaymentStatus), nullable=False)
    description = Column(Text, nullable=True)
