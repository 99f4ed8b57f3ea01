"""
Problem report model
"""
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base import Base


class ProblemCategory(str, enum.Enum):
    ATTENDANCE = "attendance"
    TECHNICAL = "technical"
    ACCOUNT = "account"
    OTHER = "other"


class ProblemStatus(str, enum.Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ProblemPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# Entering one of these statuses stamps the resolver and needs resolution text
TERMINAL_PROBLEM_STATUSES = (ProblemStatus.RESOLVED, ProblemStatus.CLOSED)


class ProblemReport(Base):
    __tablename__ = "problem_reports"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    subject = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(20), nullable=False, default=ProblemCategory.OTHER.value)
    status = Column(String(20), nullable=False, default=ProblemStatus.OPEN.value, index=True)
    priority = Column(String(20), nullable=False, default=ProblemPriority.MEDIUM.value)
    resolved_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    resolution = Column(Text, nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    # Relationships
    user = relationship("User", foreign_keys=[user_id], backref="problem_reports")
    resolved_by = relationship("User", foreign_keys=[resolved_by_id])
