from datetime import datetime, timezone
from sqlmodel import SQLModel, Field
from typing import Optional


class User(SQLModel, table=True):
    """Principal mirrored from the hosted auth platform."""
    __tablename__ = "users"

    # Same id as the auth platform's user (the JWT "sub" claim)
    id: str = Field(primary_key=True, max_length=255)
    email: Optional[str] = Field(default=None, index=True, max_length=255)
    display_name: Optional[str] = Field(default=None, max_length=255)
    banned_until: Optional[datetime] = Field(default=None)  # set = suspended
    last_sign_in_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
