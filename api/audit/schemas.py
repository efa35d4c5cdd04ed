from pydantic import BaseModel
from datetime import datetime
from typing import Any, Optional


class PerformerResponse(BaseModel):
    email: Optional[str] = None
    display_name: Optional[str] = None


class AuditLogResponse(BaseModel):
    id: str
    entity_type: str
    entity_id: str
    action: str
    performed_by: Optional[str]
    old_data: Optional[dict[str, Any]]
    new_data: Optional[dict[str, Any]]
    company_id: Optional[str]
    created_at: datetime
    performer: Optional[PerformerResponse] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class AuditLogListResponse(BaseModel):
    logs: list[AuditLogResponse]
    pagination: Pagination


class AuditSummaryResponse(BaseModel):
    total: int
    by_action: dict[str, int]
    by_day: dict[str, int]
