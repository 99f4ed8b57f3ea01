"""
Audit trail - one row per state change (check-in, review decision, export...)
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog
from app.utils.datetime_utils import now_utc
from app.utils.json_serializer import sanitize_for_json

logger = logging.getLogger(__name__)


def log_audit(
    db: Session,
    actor_id: Optional[int],
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    meta: Optional[Dict[str, Any]] = None
) -> AuditLog:
    """
    Record and commit an audit entry

    Args:
        actor_id: Acting user, None for public actions such as registration
        action: Upper-case verb, e.g. "ATTENDANCE_CHECK_IN" or "LEAVE_REJECT"
        entity_type: Table name of the affected row ("attendance", "leaves", ...)
        meta: Free-form details; dates and enums are converted to JSON values
    """
    entry = AuditLog(
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        meta_json=sanitize_for_json(meta) if meta is not None else None,
        # SQLite ignores timezone-aware server defaults
        created_at=now_utc()
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def log_audit_best_effort(db: Session, **fields) -> Optional[AuditLog]:
    """Like log_audit, but a database error is logged and rolled back instead of raised."""
    try:
        return log_audit(db, **fields)
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Audit entry %s not recorded: %s", fields.get("action"), e)
        return None
