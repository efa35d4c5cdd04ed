"""
Identity provider: profile lookups for principals.

Lookups fail independently per principal with IdentityLookupError so callers
can degrade one record instead of failing a whole listing.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import httpx
from fastapi import Depends
from sqlmodel import Session

from config.settings import (
    AUTH_ADMIN_URL,
    AUTH_SERVICE_KEY,
    IDENTITY_PROVIDER,
    IDENTITY_TIMEOUT_SECONDS,
)
from core.exceptions import IdentityLookupError
from database.connection import get_session
from database.models import User
from utils.logger import get_logger

logger = get_logger(__name__)


class PrincipalStatus:
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    UNKNOWN = "UNKNOWN"


@dataclass
class Principal:
    id: str
    email: Optional[str]
    display_name: Optional[str]
    is_banned: bool
    last_sign_in_at: Optional[datetime]

    @property
    def status(self) -> str:
        return PrincipalStatus.SUSPENDED if self.is_banned else PrincipalStatus.ACTIVE


class IdentityProvider:
    """Interface for principal profile lookups."""

    def get_principal_by_id(self, principal_id: str) -> Principal:
        raise NotImplementedError


class DatabaseIdentityProvider(IdentityProvider):
    """Reads principals from the local users table."""

    def __init__(self, session: Session):
        self.session = session

    def get_principal_by_id(self, principal_id: str) -> Principal:
        try:
            user = self.session.get(User, principal_id)
        except Exception as e:
            raise IdentityLookupError(f"Failed to load user {principal_id}: {e}") from e

        if not user:
            raise IdentityLookupError(f"User {principal_id} not found")

        return Principal(
            id=user.id,
            email=user.email,
            display_name=user.display_name,
            is_banned=bool(user.banned_until),
            last_sign_in_at=user.last_sign_in_at,
        )


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class AdminApiIdentityProvider(IdentityProvider):
    """Looks principals up through the hosted auth platform's admin API."""

    def __init__(
        self,
        base_url: str = AUTH_ADMIN_URL,
        service_key: str = AUTH_SERVICE_KEY,
        timeout: float = IDENTITY_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.timeout = timeout
        self.transport = transport

    def is_configured(self) -> bool:
        return bool(self.base_url and self.service_key)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Accept": "application/json",
        }

    def _fetch_user(self, principal_id: str) -> Dict[str, Any]:
        url = f"{self.base_url}/admin/users/{principal_id}"
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.get(url, headers=self._get_headers())

        if response.status_code != 200:
            raise IdentityLookupError(
                f"Identity lookup for {principal_id} failed: HTTP {response.status_code}"
            )
        return response.json()

    def get_principal_by_id(self, principal_id: str) -> Principal:
        if not self.is_configured():
            raise IdentityLookupError("Auth admin API not configured")

        try:
            data = self._fetch_user(principal_id)
        except httpx.HTTPError as e:
            raise IdentityLookupError(f"Identity lookup for {principal_id} failed: {e}") from e
        except ValueError as e:
            raise IdentityLookupError(f"Identity lookup for {principal_id} returned invalid JSON") from e

        # Some deployments wrap the record as {"user": {...}}
        user = data.get("user", data) if isinstance(data, dict) else None
        if not isinstance(user, dict) or not user.get("id"):
            raise IdentityLookupError(f"Identity lookup for {principal_id} returned no user")

        try:
            metadata = user.get("user_metadata") or {}
            return Principal(
                id=user["id"],
                email=user.get("email"),
                display_name=metadata.get("full_names") or metadata.get("user_name"),
                is_banned=bool(user.get("banned_until")),
                last_sign_in_at=_parse_timestamp(user.get("last_sign_in_at")),
            )
        except (AttributeError, TypeError) as e:
            raise IdentityLookupError(
                f"Identity lookup for {principal_id} returned a malformed user: {e}"
            ) from e


def get_identity_provider(session: Session = Depends(get_session)) -> IdentityProvider:
    """FastAPI dependency selecting the provider configured by IDENTITY_PROVIDER."""
    if IDENTITY_PROVIDER == "admin_api":
        return AdminApiIdentityProvider()
    return DatabaseIdentityProvider(session)
