import uuid
from datetime import datetime, timezone
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class CompanyReviewer(SQLModel, table=True):
    """A company user's position in the company's approval chain.

    Levels of one company always form the dense range 1..N. There is no unique
    constraint on (company_id, reviewer_level) because a bulk shift moves many
    rows in a single UPDATE and would collide mid-statement.
    """
    __tablename__ = "company_reviewers"
    __table_args__ = (UniqueConstraint("company_id", "company_user_id"),)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    company_id: str = Field(foreign_key="companies.id", index=True)
    company_user_id: str = Field(foreign_key="company_users.id", index=True)
    reviewer_level: int = Field(index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
