import uuid
from datetime import datetime, timezone
from enum import Enum
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class CompanyStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


class CompanyRole(str, Enum):
    """Company-level role. Scopes a principal to one company."""
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"
    VIEWER = "VIEWER"


class Company(SQLModel, table=True):
    """A payroll company. Belongs to exactly one workspace."""
    __tablename__ = "companies"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    workspace_id: str = Field(foreign_key="workspaces.id", index=True)
    business_name: str = Field(max_length=255)
    status: CompanyStatus = Field(default=CompanyStatus.PENDING)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CompanyUser(SQLModel, table=True):
    __tablename__ = "company_users"
    __table_args__ = (UniqueConstraint("company_id", "user_id"),)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    company_id: str = Field(foreign_key="companies.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    role: str = Field(index=True, max_length=50)  # Store as string, not enum
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
