import math
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy import or_
from sqlmodel import Session, select, func

from database.models import AuditLog, User

ALL_FILTER = "ALL"


def _company_scope(company_id: str):
    # Entries about the company itself predate company_id tagging
    return or_(AuditLog.company_id == company_id, AuditLog.entity_id == company_id)


def _apply_filters(
    query,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    action: Optional[str] = None,
    entity_type: Optional[str] = None,
    search: Optional[str] = None,
):
    if start_date:
        query = query.where(AuditLog.created_at >= start_date)
    if end_date:
        query = query.where(AuditLog.created_at <= end_date)
    if action and action.upper() != ALL_FILTER:
        query = query.where(AuditLog.action == action.upper())
    if entity_type and entity_type.upper() != ALL_FILTER:
        query = query.where(AuditLog.entity_type == entity_type)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(AuditLog.entity_type.ilike(pattern), AuditLog.entity_id.ilike(pattern))
        )
    return query


def get_performers(session: Session, user_ids: list[str]) -> dict[str, dict]:
    """Map user id -> {email, display_name} for the given performers."""
    if not user_ids:
        return {}
    users = session.exec(select(User).where(User.id.in_(set(user_ids)))).all()
    return {u.id: {"email": u.email, "display_name": u.display_name} for u in users}


def get_company_audit_logs(
    session: Session,
    company_id: str,
    page: int = 1,
    limit: int = 50,
    **filters,
) -> dict:
    """Audit logs of a company, newest first, with performer details."""
    base = _apply_filters(select(AuditLog).where(_company_scope(company_id)), **filters)
    count_query = _apply_filters(
        select(func.count(AuditLog.id)).where(_company_scope(company_id)), **filters
    )
    total = session.exec(count_query).one()

    logs = session.exec(
        base.order_by(AuditLog.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()

    performers = get_performers(session, [log.performed_by for log in logs if log.performed_by])

    return {
        "logs": [
            {
                **log.model_dump(),
                "performer": performers.get(log.performed_by) if log.performed_by else None,
            }
            for log in logs
        ],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit) if limit else 0,
        },
    }


def get_audit_summary(session: Session, company_id: str, days: int = 30) -> dict:
    """Counts by action and by day over the last ``days`` days."""
    since = datetime.now(timezone.utc) - timedelta(days=days)
    rows = session.exec(
        select(AuditLog.action, AuditLog.created_at).where(
            _company_scope(company_id),
            AuditLog.created_at >= since,
        )
    ).all()

    by_action = Counter(action for action, _ in rows)
    by_day = Counter(created_at.date().isoformat() for _, created_at in rows)

    return {
        "total": len(rows),
        "by_action": dict(by_action),
        "by_day": dict(sorted(by_day.items())),
    }


def get_entity_types(session: Session, company_id: str) -> list[str]:
    """Sorted distinct entity types logged for a company."""
    types = session.exec(
        select(AuditLog.entity_type).where(_company_scope(company_id)).distinct()
    ).all()
    return sorted(types)
