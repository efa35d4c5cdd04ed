from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from auth.token import extract_claims
from config.auth_settings import ACCESS_TOKEN_COOKIE
from core.access import AccessResolver
from core.exceptions import NotAuthorized
from core.permissions import Module, ModulePermission
from database.connection import get_session


security = HTTPBearer(auto_error=False)


def get_token_from_request(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Extract token from Authorization header or cookie."""
    if credentials:
        return credentials.credentials

    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(token: str = Depends(get_token_from_request)) -> str:
    """Principal id of the authenticated caller."""
    return extract_claims(token).user_id


def get_access_resolver(session: Session = Depends(get_session)) -> AccessResolver:
    return AccessResolver(session)


class CompanyAccessChecker:
    """Dependency class for checking company-scoped module permissions."""

    def __init__(self, module: Module | str, permission: ModulePermission | str):
        self.module = module
        self.permission = permission

    def __call__(
        self,
        company_id: str,
        user_id: str = Depends(get_current_user_id),
        resolver: AccessResolver = Depends(get_access_resolver),
    ) -> str:
        if not resolver.check_access(company_id, user_id, self.module, self.permission):
            module = self.module.value if isinstance(self.module, Module) else self.module
            permission = (
                self.permission.value
                if isinstance(self.permission, ModulePermission)
                else self.permission
            )
            raise NotAuthorized(f"Permission denied: {module}.{permission} required")

        return user_id


def require_company_access(module: Module | str, permission: ModulePermission | str):
    """Factory function to create a company access dependency."""
    return CompanyAccessChecker(module, permission)
