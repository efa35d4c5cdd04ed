from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from api.audit import crud
from api.audit.schemas import AuditLogListResponse, AuditSummaryResponse
from auth.dependencies import require_company_access
from config.settings import (
    AUDIT_LOG_PAGE_LIMIT_DEFAULT,
    AUDIT_LOG_PAGE_LIMIT_MAX,
    AUDIT_SUMMARY_DAYS,
)
from core.permissions import Module, ModulePermission
from database.connection import get_session

router = APIRouter()

can_read_org_settings = require_company_access(Module.ORG_SETTINGS, ModulePermission.READ)


@router.get("/{company_id}/audit-logs", response_model=AuditLogListResponse)
def get_company_audit_logs(
    company_id: str,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    action: Optional[str] = None,
    entity_type: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(AUDIT_LOG_PAGE_LIMIT_DEFAULT, ge=1, le=AUDIT_LOG_PAGE_LIMIT_MAX),
    session: Session = Depends(get_session),
    user_id: str = Depends(can_read_org_settings),
):
    """Audit logs for a company, newest first."""
    return crud.get_company_audit_logs(
        session,
        company_id,
        page=page,
        limit=limit,
        start_date=start_date,
        end_date=end_date,
        action=action,
        entity_type=entity_type,
        search=search,
    )


@router.get("/{company_id}/audit-logs/summary", response_model=AuditSummaryResponse)
def get_audit_log_summary(
    company_id: str,
    session: Session = Depends(get_session),
    user_id: str = Depends(can_read_org_settings),
):
    """Audit activity over the last days, by action and by day."""
    return crud.get_audit_summary(session, company_id, days=AUDIT_SUMMARY_DAYS)


@router.get("/{company_id}/audit-logs/entity-types", response_model=list[str])
def get_entity_types(
    company_id: str,
    session: Session = Depends(get_session),
    user_id: str = Depends(can_read_org_settings),
):
    """Entity types present in the company's audit log, for filter dropdowns."""
    return crud.get_entity_types(session, company_id)
