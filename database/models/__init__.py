from database.models.user import User
from database.models.workspace import Workspace, WorkspaceUser, WorkspaceRole
from database.models.company import Company, CompanyUser, CompanyStatus, CompanyRole
from database.models.permission import RoleModulePermission
from database.models.reviewer import CompanyReviewer
from database.models.audit_log import AuditLog, AuditAction

__all__ = [
    "User",
    "Workspace",
    "WorkspaceUser",
    "WorkspaceRole",
    "Company",
    "CompanyUser",
    "CompanyStatus",
    "CompanyRole",
    "RoleModulePermission",
    "CompanyReviewer",
    "AuditLog",
    "AuditAction",
]
