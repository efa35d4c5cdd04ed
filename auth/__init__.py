from auth.dependencies import (
    get_current_user_id,
    get_access_resolver,
    require_company_access,
)
from auth.identity import (
    IdentityProvider,
    DatabaseIdentityProvider,
    AdminApiIdentityProvider,
    Principal,
    PrincipalStatus,
    get_identity_provider,
)
from auth.token import extract_claims, decode_token

__all__ = [
    "get_current_user_id",
    "get_access_resolver",
    "require_company_access",
    "IdentityProvider",
    "DatabaseIdentityProvider",
    "AdminApiIdentityProvider",
    "Principal",
    "PrincipalStatus",
    "get_identity_provider",
    "extract_claims",
    "decode_token",
]
