from services.audit import AuditSink, get_audit_sink
from services.locks import company_lock
from services.reviewer_service import (
    LevelAssignment,
    ReviewerRankEngine,
    get_reviewer_engine,
)

__all__ = [
    "AuditSink",
    "get_audit_sink",
    "company_lock",
    "LevelAssignment",
    "ReviewerRankEngine",
    "get_reviewer_engine",
]
