import uuid
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class RoleModulePermission(SQLModel, table=True):
    """Permission matrix entry: (workspace role, module) -> permission flags."""
    __tablename__ = "role_module_permissions"
    __table_args__ = (UniqueConstraint("role", "module"),)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    role: str = Field(index=True, max_length=50)  # workspace role
    module: str = Field(index=True, max_length=50)
    can_read: bool = Field(default=False)
    can_write: bool = Field(default=False)
    can_delete: bool = Field(default=False)
    can_approve: bool = Field(default=False)
