"""
Company access resolution.

A principal may act on a module of a company when, in order:
  1. the company exists,
  2. the principal owns the company's workspace (grants everything), or
  3. the principal is a member of the workspace,
  4. the principal is attached to the company itself, and
  5. the permission matrix entry for the principal's *workspace* role and the
     module has the requested flag set.

The company role is only checked for existence (step 4). The workspace role
selects the capability class, the company membership selects the scope.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from core.exceptions import DependencyError
from core.permissions import ALL_PERMISSIONS, Module, ModulePermission
from database.models import (
    Company,
    CompanyUser,
    RoleModulePermission,
    Workspace,
    WorkspaceRole,
    WorkspaceUser,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class DenialReason:
    COMPANY_NOT_FOUND = "COMPANY_NOT_FOUND"
    NOT_IN_WORKSPACE = "NOT_IN_WORKSPACE"
    NOT_IN_COMPANY = "NOT_IN_COMPANY"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    UNKNOWN_PERMISSION = "UNKNOWN_PERMISSION"
    LOOKUP_FAILED = "LOOKUP_FAILED"


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    role: Optional[str] = None
    reason: Optional[str] = None


def _value(item) -> str:
    return item.value if hasattr(item, "value") else item


class AccessResolver:
    """Resolves company-scoped permissions. Read-only, never mutates."""

    def __init__(self, session: Session):
        self.session = session

    def resolve(
        self,
        company_id: str,
        principal_id: str,
        module: Module | str,
        permission: ModulePermission | str,
    ) -> AccessDecision:
        """Walk the resolution chain. Raises DependencyError if the store fails."""
        module = _value(module)
        permission = _value(permission)

        try:
            company = self.session.get(Company, company_id)
            if not company:
                return AccessDecision(False, reason=DenialReason.COMPANY_NOT_FOUND)

            workspace = self.session.get(Workspace, company.workspace_id)
            if workspace and workspace.owner_user_id == principal_id:
                return AccessDecision(True, role=WorkspaceRole.OWNER.value)

            membership = self.session.exec(
                select(WorkspaceUser).where(
                    WorkspaceUser.workspace_id == company.workspace_id,
                    WorkspaceUser.user_id == principal_id,
                )
            ).first()
            if not membership:
                return AccessDecision(False, reason=DenialReason.NOT_IN_WORKSPACE)

            company_user = self.session.exec(
                select(CompanyUser).where(
                    CompanyUser.company_id == company_id,
                    CompanyUser.user_id == principal_id,
                )
            ).first()
            if not company_user:
                return AccessDecision(
                    False, role=membership.role, reason=DenialReason.NOT_IN_COMPANY
                )

            if permission not in ALL_PERMISSIONS:
                return AccessDecision(
                    False, role=membership.role, reason=DenialReason.UNKNOWN_PERMISSION
                )

            entry = self.session.exec(
                select(RoleModulePermission).where(
                    RoleModulePermission.role == membership.role,
                    RoleModulePermission.module == module,
                )
            ).first()
        except SQLAlchemyError as e:
            raise DependencyError(f"Access lookup failed: {e}") from e

        if not entry or getattr(entry, permission) is not True:
            return AccessDecision(
                False, role=membership.role, reason=DenialReason.INSUFFICIENT_PERMISSIONS
            )

        return AccessDecision(True, role=membership.role)

    def check_access(
        self,
        company_id: str,
        principal_id: str,
        module: Module | str,
        permission: ModulePermission | str,
    ) -> bool:
        """Fail-closed check: anything other than an explicit grant is False."""
        try:
            decision = self.resolve(company_id, principal_id, module, permission)
        except Exception as e:
            logger.error(
                f"Access check failed closed for user {principal_id} on company {company_id}: {e}"
            )
            return False

        if not decision.allowed:
            logger.info(
                f"Access denied: user={principal_id} company={company_id} "
                f"module={_value(module)} permission={_value(permission)} reason={decision.reason}"
            )
        return decision.allowed is True
