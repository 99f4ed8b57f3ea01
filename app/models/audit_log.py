"""
Audit log model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from app.db.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(Integer, ForeignKey("users.id"), nullable=True)  # None for public actions (registration)
    action = Column(String, nullable=False)  # e.g. "ATTENDANCE_CHECK_IN", "LEAVE_APPROVE"
    entity_type = Column(String, nullable=False)  # e.g. "attendance", "leaves", "registration_requests"
    entity_id = Column(Integer, nullable=True)
    meta_json = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
