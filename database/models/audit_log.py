import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AuditLog(SQLModel, table=True):
    __tablename__ = "audit_logs"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    entity_type: str = Field(index=True, max_length=100)  # e.g., "company_reviewer"
    entity_id: str = Field(index=True, max_length=255)
    action: str = Field(index=True, max_length=20)  # Store as string, not enum
    performed_by: Optional[str] = Field(default=None, index=True, max_length=255)
    old_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    new_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    company_id: Optional[str] = Field(default=None, index=True, max_length=255)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
