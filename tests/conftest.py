"""
Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database with the default permission
matrix seeded, and the API's get_session dependency is pointed at it.
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

TEST_JWT_SECRET = "test-jwt-secret"

# Configure before any application module reads the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_JWT_SECRET"] = TEST_JWT_SECRET
os.environ["AUTH_JWT_AUDIENCE"] = ""
os.environ["IDENTITY_PROVIDER"] = "database"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from auth.identity import DatabaseIdentityProvider
from database.connection import get_session
from database.models import (
    Company,
    CompanyStatus,
    CompanyUser,
    User,
    Workspace,
    WorkspaceUser,
)
from database.seed import seed_permission_matrix
from services.audit import AuditSink
from services.reviewer_service import ReviewerRankEngine


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_token(user_id: str, secret: str = TEST_JWT_SECRET, **claims) -> str:
    payload = {"sub": user_id, "role": "authenticated", **claims}
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


def make_user(session: Session, user_id: str, banned: bool = False) -> User:
    user = User(
        id=user_id,
        email=f"{user_id}@example.com",
        display_name=user_id.replace("-", " ").title(),
    )
    if banned:
        user.banned_until = datetime.now(timezone.utc) + timedelta(days=365)
    session.add(user)
    session.commit()
    return user


def add_member(
    session: Session,
    company: Company,
    user_id: str,
    workspace_role: str | None,
    company_role: str | None,
    banned: bool = False,
) -> CompanyUser | None:
    """Create a user and attach it to the company's workspace and/or the company."""
    make_user(session, user_id, banned=banned)
    if workspace_role:
        session.add(WorkspaceUser(workspace_id=company.workspace_id, user_id=user_id, role=workspace_role))
    company_user = None
    if company_role:
        company_user = CompanyUser(company_id=company.id, user_id=user_id, role=company_role)
        session.add(company_user)
    session.commit()
    if company_user:
        session.refresh(company_user)
    return company_user


def reviewer_levels(session: Session, company_id: str) -> dict[str, int]:
    from sqlmodel import select
    from database.models import CompanyReviewer

    session.expire_all()
    rows = session.exec(
        select(CompanyReviewer).where(CompanyReviewer.company_id == company_id)
    ).all()
    return {r.id: r.reviewer_level for r in rows}


def assert_dense(session: Session, company_id: str) -> None:
    levels = sorted(reviewer_levels(session, company_id).values())
    assert levels == list(range(1, len(levels) + 1))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(db_engine) -> Session:
    with Session(db_engine) as session:
        seed_permission_matrix(session)
        yield session


@pytest.fixture
def org(session: Session) -> SimpleNamespace:
    """A workspace with one company and a principal for each access tier."""
    make_user(session, "owner")
    workspace = Workspace(name="Acme Holdings", owner_user_id="owner")
    session.add(workspace)
    session.commit()
    session.refresh(workspace)

    company = Company(workspace_id=workspace.id, business_name="Acme Ltd", status=CompanyStatus.ACTIVE)
    session.add(company)
    session.commit()
    session.refresh(company)

    return SimpleNamespace(
        workspace=workspace,
        company=company,
        owner="owner",
        admin=add_member(session, company, "admin", "ADMIN", "ADMIN"),
        manager=add_member(session, company, "manager", "MANAGER", "MANAGER"),
        viewer=add_member(session, company, "viewer", "VIEWER", "EMPLOYEE"),
        member=add_member(session, company, "member", "MEMBER", "EMPLOYEE"),
    )


@pytest.fixture
def engine_svc(session: Session) -> ReviewerRankEngine:
    return ReviewerRankEngine(session, DatabaseIdentityProvider(session), AuditSink(session))


@pytest.fixture
def add_managers(session: Session, org: SimpleNamespace):
    """Factory: create ``count`` MANAGER company users, return them in creation order."""
    counter = {"n": 0}

    def _add(count: int) -> list[CompanyUser]:
        created = []
        for _ in range(count):
            counter["n"] += 1
            created.append(
                add_member(session, org.company, f"reviewer-{counter['n']}", "MANAGER", "MANAGER")
            )
        return created

    return _add


@pytest.fixture
def chain(engine_svc: ReviewerRankEngine, org: SimpleNamespace, add_managers):
    """Factory: build a reviewer chain of ``count`` reviewers, return ids ordered by level."""

    def _build(count: int) -> list[str]:
        ids = []
        for level, company_user in enumerate(add_managers(count), start=1):
            reviewer = engine_svc.add_reviewer(org.company.id, company_user.id, level, org.owner)
            ids.append(reviewer["id"])
        return ids

    return _build


@pytest.fixture
def client(db_engine, session: Session) -> TestClient:
    """TestClient with get_session overridden to use the test database."""
    from main import app

    def override_get_session():
        with Session(db_engine) as s:
            yield s

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.pop(get_session, None)
