"""
Company reviewer chain.

Reviewers of a company hold levels that always form the dense range 1..N.
Single-item mutations (add, move, remove) shift the neighbouring levels with
one atomic ``reviewer_level +/- 1`` UPDATE and commit everything in one
transaction under the company's lock, so they are all-or-nothing and
concurrent writers on the same company are serialized.

``reorder`` is the exception: it writes caller-supplied levels as given and
only checks density when ``strict`` is requested.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy import func, update
from sqlmodel import Session, select

from auth.identity import IdentityProvider, Principal, PrincipalStatus, get_identity_provider
from config.settings import ELIGIBLE_REVIEWER_ROLES
from core.access import AccessResolver
from core.exceptions import (
    ConflictError,
    DependencyError,
    NotAuthorized,
    NotFound,
    ValidationError,
)
from core.permissions import Module, ModulePermission
from database.connection import get_session
from database.models import AuditAction, CompanyReviewer, CompanyUser
from services.audit import AuditSink, get_audit_sink
from services.locks import company_lock
from utils.logger import get_logger

logger = get_logger(__name__)

ENTITY_TYPE = "company_reviewer"


@dataclass
class LevelAssignment:
    reviewer_id: str
    reviewer_level: int


def _validate_level(level: Any) -> int:
    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        raise ValidationError("Reviewer level must be at least 1")
    return level


def _parse_assignments(assignments: Any) -> List[LevelAssignment]:
    if not isinstance(assignments, list) or not assignments:
        raise ValidationError("Reviewers array is required")

    parsed = []
    for item in assignments:
        if isinstance(item, LevelAssignment):
            reviewer_id, level = item.reviewer_id, item.reviewer_level
        elif isinstance(item, dict):
            reviewer_id, level = item.get("id"), item.get("reviewer_level")
        else:
            raise ValidationError("Each reviewer needs an id and a reviewer_level")

        if not reviewer_id or not isinstance(reviewer_id, str):
            raise ValidationError("Each reviewer needs an id and a reviewer_level")
        parsed.append(LevelAssignment(reviewer_id, _validate_level(level)))
    return parsed


class ReviewerRankEngine:
    """Maintains the per-company reviewer ranking."""

    def __init__(
        self,
        session: Session,
        identity: IdentityProvider,
        audit: AuditSink,
        resolver: Optional[AccessResolver] = None,
    ):
        self.session = session
        self.identity = identity
        self.audit = audit
        self.resolver = resolver or AccessResolver(session)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _authorize(self, company_id: str, principal_id: str, permission: ModulePermission, message: str):
        if not self.resolver.check_access(company_id, principal_id, Module.ORG_SETTINGS, permission):
            raise NotAuthorized(message)

    def _lookup(self, user_id: str) -> Optional[Principal]:
        try:
            return self.identity.get_principal_by_id(user_id)
        except DependencyError as e:
            logger.warning(f"Error fetching user {user_id}: {e}")
            return None

    def _count(self, company_id: str) -> int:
        return self.session.exec(
            select(func.count(CompanyReviewer.id)).where(CompanyReviewer.company_id == company_id)
        ).one()

    def _get_with_user(self, company_id: str, reviewer_id: str):
        return self.session.exec(
            select(CompanyReviewer, CompanyUser)
            .join(CompanyUser, CompanyUser.id == CompanyReviewer.company_user_id)
            .where(
                CompanyReviewer.id == reviewer_id,
                CompanyReviewer.company_id == company_id,
            )
        ).first()

    def _shift(self, company_id: str, delta: int, *conditions) -> int:
        """Move every matching reviewer of the company by ``delta`` in one UPDATE."""
        result = self.session.execute(
            update(CompanyReviewer)
            .where(CompanyReviewer.company_id == company_id, *conditions)
            .values(reviewer_level=CompanyReviewer.reviewer_level + delta)
        )
        shifted = result.rowcount or 0
        if shifted:
            logger.info(f"Shifted {shifted} reviewer(s) of company {company_id} by {delta:+d}")
        return shifted

    @staticmethod
    def _format(
        reviewer: CompanyReviewer,
        company_user: CompanyUser,
        principal: Optional[Principal],
    ) -> Dict[str, Any]:
        return {
            "id": reviewer.id,
            "reviewer_level": reviewer.reviewer_level,
            "created_at": reviewer.created_at,
            "company_user_id": reviewer.company_user_id,
            "user_id": company_user.user_id,
            "email": principal.email if principal else None,
            "full_names": principal.display_name if principal else None,
            "role": company_user.role,
            "status": principal.status if principal else PrincipalStatus.UNKNOWN,
            "last_sign_in": principal.last_sign_in_at if principal else None,
        }

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list_reviewers(self, company_id: str, performed_by: str) -> List[Dict[str, Any]]:
        """Reviewers by ascending level, enriched with identity data per row."""
        self._authorize(
            company_id, performed_by, ModulePermission.READ,
            "Unauthorized to view company reviewers.",
        )

        rows = self.session.exec(
            select(CompanyReviewer, CompanyUser)
            .join(CompanyUser, CompanyUser.id == CompanyReviewer.company_user_id)
            .where(CompanyReviewer.company_id == company_id)
            .order_by(CompanyReviewer.reviewer_level)
        ).all()

        return [
            self._format(reviewer, company_user, self._lookup(company_user.user_id))
            for reviewer, company_user in rows
        ]

    def get_eligible(self, company_id: str, performed_by: str) -> List[Dict[str, Any]]:
        """Active ADMIN/MANAGER company users who are not reviewers yet."""
        self._authorize(
            company_id, performed_by, ModulePermission.READ,
            "Unauthorized to view eligible reviewers.",
        )

        company_users = self.session.exec(
            select(CompanyUser).where(
                CompanyUser.company_id == company_id,
                CompanyUser.role.in_(ELIGIBLE_REVIEWER_ROLES),
            )
        ).all()
        existing = set(self.session.exec(
            select(CompanyReviewer.company_user_id).where(CompanyReviewer.company_id == company_id)
        ).all())

        eligible = []
        for company_user in company_users:
            if company_user.id in existing:
                continue
            principal = self._lookup(company_user.user_id)
            # Unknown identities are dropped, as are suspended ones
            if principal is None or principal.status != PrincipalStatus.ACTIVE:
                continue
            eligible.append({
                "company_user_id": company_user.id,
                "user_id": company_user.user_id,
                "email": principal.email,
                "full_names": principal.display_name,
                "role": company_user.role,
                "status": principal.status,
            })
        return eligible

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_reviewer(
        self,
        company_id: str,
        company_user_id: Optional[str],
        reviewer_level: Any,
        performed_by: str,
    ) -> Dict[str, Any]:
        """Insert a reviewer at ``reviewer_level``, pushing occupants up by one.

        Levels past the end of the chain are placed at N + 1.
        """
        if not company_user_id:
            raise ValidationError("Company user ID is required")
        level = _validate_level(reviewer_level)
        self._authorize(
            company_id, performed_by, ModulePermission.WRITE,
            "Unauthorized to add company reviewers.",
        )

        with company_lock(self.session, company_id):
            company_user = self.session.exec(
                select(CompanyUser).where(
                    CompanyUser.id == company_user_id,
                    CompanyUser.company_id == company_id,
                )
            ).first()
            if not company_user:
                raise NotFound("Company user not found")

            if company_user.role not in ELIGIBLE_REVIEWER_ROLES:
                raise ConflictError(
                    f"Only {' and '.join(ELIGIBLE_REVIEWER_ROLES)} users can be reviewers"
                )

            existing = self.session.exec(
                select(CompanyReviewer.id).where(
                    CompanyReviewer.company_id == company_id,
                    CompanyReviewer.company_user_id == company_user_id,
                )
            ).first()
            if existing:
                raise ConflictError("User is already a reviewer for this company")

            level = min(level, self._count(company_id) + 1)
            occupied = self.session.exec(
                select(CompanyReviewer.id).where(
                    CompanyReviewer.company_id == company_id,
                    CompanyReviewer.reviewer_level == level,
                )
            ).first()
            if occupied:
                self._shift(company_id, 1, CompanyReviewer.reviewer_level >= level)

            reviewer = CompanyReviewer(
                company_id=company_id,
                company_user_id=company_user_id,
                reviewer_level=level,
            )
            self.session.add(reviewer)
            self.session.commit()
            self.session.refresh(reviewer)

        formatted = self._format(reviewer, company_user, self._lookup(company_user.user_id))
        self.audit.record(
            ENTITY_TYPE, reviewer.id, AuditAction.CREATE, performed_by,
            new_data=formatted, company_id=company_id,
        )
        return formatted

    def update_level(
        self,
        company_id: str,
        reviewer_id: str,
        reviewer_level: Any,
        performed_by: str,
    ) -> Dict[str, Any]:
        """Move a reviewer within the chain.

        Promotion (lower number) pushes [new, old) up by one; demotion pushes
        (old, new] down by one. Levels past the end are placed at N.
        """
        level = _validate_level(reviewer_level)
        self._authorize(
            company_id, performed_by, ModulePermission.APPROVE,
            "Unauthorized to update reviewer levels.",
        )

        with company_lock(self.session, company_id):
            row = self._get_with_user(company_id, reviewer_id)
            if not row:
                raise NotFound("Reviewer not found")
            reviewer, company_user = row

            old_level = reviewer.reviewer_level
            new_level = min(level, self._count(company_id))

            if new_level < old_level:
                self._shift(
                    company_id, 1,
                    CompanyReviewer.reviewer_level >= new_level,
                    CompanyReviewer.reviewer_level < old_level,
                )
            elif new_level > old_level:
                self._shift(
                    company_id, -1,
                    CompanyReviewer.reviewer_level > old_level,
                    CompanyReviewer.reviewer_level <= new_level,
                )

            reviewer.reviewer_level = new_level
            self.session.add(reviewer)
            self.session.commit()
            self.session.refresh(reviewer)

        formatted = self._format(reviewer, company_user, self._lookup(company_user.user_id))
        self.audit.record(
            ENTITY_TYPE, reviewer.id, AuditAction.UPDATE, performed_by,
            old_data={"reviewer_level": old_level}, new_data=formatted, company_id=company_id,
        )
        return formatted

    def remove_reviewer(self, company_id: str, reviewer_id: str, performed_by: str) -> Dict[str, Any]:
        """Delete a reviewer and close the gap it leaves."""
        self._authorize(
            company_id, performed_by, ModulePermission.DELETE,
            "Unauthorized to remove company reviewers.",
        )

        with company_lock(self.session, company_id):
            row = self._get_with_user(company_id, reviewer_id)
            if not row:
                raise NotFound("Reviewer not found")
            reviewer, company_user = row

            removed = {
                "id": reviewer.id,
                "reviewer_level": reviewer.reviewer_level,
                "company_user_id": reviewer.company_user_id,
                "user_id": company_user.user_id,
            }
            self.session.delete(reviewer)
            self.session.flush()
            self._shift(company_id, -1, CompanyReviewer.reviewer_level > removed["reviewer_level"])
            self.session.commit()

        self.audit.record(
            ENTITY_TYPE, reviewer_id, AuditAction.DELETE, performed_by,
            old_data=removed, company_id=company_id,
        )
        return removed

    def _check_permutation(self, company_id: str, assignments: List[LevelAssignment]):
        reviewer_ids = set(self.session.exec(
            select(CompanyReviewer.id).where(CompanyReviewer.company_id == company_id)
        ).all())
        assigned_ids = [a.reviewer_id for a in assignments]

        if len(assigned_ids) != len(set(assigned_ids)) or set(assigned_ids) != reviewer_ids:
            raise ValidationError("Reorder must list every reviewer of the company exactly once")

        levels = sorted(a.reviewer_level for a in assignments)
        if levels != list(range(1, len(reviewer_ids) + 1)):
            raise ValidationError(f"Reviewer levels must be exactly 1..{len(reviewer_ids)}")

    def reorder(
        self,
        company_id: str,
        assignments: Iterable[Any],
        performed_by: str,
        strict: bool = False,
    ) -> int:
        """Write caller-supplied levels. Returns the number of reviewers updated.

        Ids outside the company are ignored. Without ``strict`` the resulting
        levels are not checked for density.
        """
        parsed = _parse_assignments(assignments)
        self._authorize(
            company_id, performed_by, ModulePermission.APPROVE,
            "Unauthorized to reorder reviewers.",
        )

        with company_lock(self.session, company_id):
            if strict:
                self._check_permutation(company_id, parsed)

            updated = 0
            for assignment in parsed:
                result = self.session.execute(
                    update(CompanyReviewer)
                    .where(
                        CompanyReviewer.id == assignment.reviewer_id,
                        CompanyReviewer.company_id == company_id,
                    )
                    .values(reviewer_level=assignment.reviewer_level)
                )
                updated += result.rowcount or 0
            self.session.commit()

        self.audit.record(
            ENTITY_TYPE, company_id, AuditAction.UPDATE, performed_by,
            new_data={"reordered": [
                {"id": a.reviewer_id, "reviewer_level": a.reviewer_level} for a in parsed
            ]},
            company_id=company_id,
        )
        return updated


def get_reviewer_engine(
    session: Session = Depends(get_session),
    identity: IdentityProvider = Depends(get_identity_provider),
    audit: AuditSink = Depends(get_audit_sink),
) -> ReviewerRankEngine:
    return ReviewerRankEngine(session, identity, audit)
