"""
Database seeding for the default role/module permission matrix.
Run this after database tables are created. Existing entries are left untouched,
so a matrix edited externally is never overwritten.
"""
from sqlmodel import Session, select

from core.permissions import DEFAULT_ROLE_MODULE_PERMISSIONS
from database.connection import engine
from database.models import RoleModulePermission
from utils.logger import get_logger

logger = get_logger(__name__)


def seed_permission_matrix(session: Session) -> int:
    """Insert missing matrix entries. Returns the number of entries created."""
    created = 0
    for role, modules in DEFAULT_ROLE_MODULE_PERMISSIONS.items():
        for module, flags in modules.items():
            module_name = module.value if hasattr(module, "value") else module
            existing = session.exec(
                select(RoleModulePermission).where(
                    RoleModulePermission.role == role,
                    RoleModulePermission.module == module_name,
                )
            ).first()
            if existing:
                continue

            session.add(RoleModulePermission(role=role, module=module_name, **flags))
            created += 1

    session.commit()
    return created


def seed_database():
    """Seed the permission matrix into the configured database."""
    with Session(engine) as session:
        created = seed_permission_matrix(session)
    logger.info(f"Permission matrix seeded ({created} new entries)")


if __name__ == "__main__":
    seed_database()
