"""
Audit sink. Writes are fire-and-forget: a failed audit write is logged and
never surfaces to the operation that triggered it.
"""
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.encoders import jsonable_encoder
from sqlmodel import Session

from database.connection import get_session
from database.models import AuditAction, AuditLog
from utils.logger import get_logger

logger = get_logger(__name__)


class AuditSink:
    def __init__(self, session: Session):
        self.session = session

    def record(
        self,
        entity_type: str,
        entity_id: str,
        action: AuditAction | str,
        performed_by: Optional[str],
        old_data: Optional[Dict[str, Any]] = None,
        new_data: Optional[Dict[str, Any]] = None,
        company_id: Optional[str] = None,
    ) -> bool:
        """Persist one audit entry. Returns False (after logging) on failure."""
        try:
            entry = AuditLog(
                entity_type=entity_type,
                entity_id=entity_id,
                action=action.value if isinstance(action, AuditAction) else action,
                performed_by=performed_by,
                old_data=jsonable_encoder(old_data) if old_data is not None else None,
                new_data=jsonable_encoder(new_data) if new_data is not None else None,
                company_id=company_id,
            )
            self.session.add(entry)
            self.session.commit()
            return True
        except Exception as e:
            logger.error(f"Failed to create audit log for {entity_type} {entity_id}: {e}")
            try:
                self.session.rollback()
            except Exception as rollback_error:
                logger.error(f"Audit log rollback failed: {rollback_error}")
            return False


def get_audit_sink(session: Session = Depends(get_session)) -> AuditSink:
    return AuditSink(session)
