from sqlmodel import SQLModel, create_engine, Session
from config.settings import DATABASE_URL

# Register all table models on SQLModel.metadata
import database.models  # noqa: F401


# ---------------------------------------------------------------------
# Database Engine Configuration
# ---------------------------------------------------------------------
def build_engine(url: str = DATABASE_URL):
    """Create the engine. SQLite gets no pool sizing (used for local runs and tests)."""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        url,
        echo=False,           # Set to True for SQL query debugging
        pool_size=10,         # Max number of DB connections in pool
        max_overflow=5,       # Allow 5 extra connections during peak load
        pool_recycle=300,     # Recycle connections every 5 min
        pool_pre_ping=True,   # Verify connection health before use
        pool_timeout=60       # Wait up to 60 seconds for a connection
    )


engine = build_engine()


# ---------------------------------------------------------------------
# Database Initialization
# ---------------------------------------------------------------------
def create_db_and_tables():
    """
    Create all database tables defined in SQLModel models.
    Called once at app startup (see main.py lifespan).
    """
    SQLModel.metadata.create_all(engine)


# ---------------------------------------------------------------------
# Dependency for FastAPI Routes (context-managed)
# ---------------------------------------------------------------------
def get_session():
    """
    Dependency for FastAPI endpoints: provides a scoped SQLModel session.
    Example:
        @router.get("/{company_id}/reviewers")
        def list_reviewers(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
