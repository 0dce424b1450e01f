"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes the FastAPI session dependency.
"""
import os
import sys
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


# Database connection URL
# Generate dynamically from individual components if DATABASE_URL is not provided
def _get_database_url() -> str:
    # If DATABASE_URL is explicitly set, use it
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    db_user = os.getenv("POSTGRES_USER")
    db_password = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST")
    db_port = os.getenv("POSTGRES_PORT")
    db_name = os.getenv("POSTGRES_DB")

    if not all([db_user, db_password, db_host, db_port, db_name]):
        if _is_pytest_runtime():
            return "sqlite+pysqlite:///:memory:"
        missing = [
            name
            for name, value in (
                ("POSTGRES_USER", db_user),
                ("POSTGRES_PASSWORD", db_password),
                ("POSTGRES_HOST", db_host),
                ("POSTGRES_PORT", db_port),
                ("POSTGRES_DB", db_name),
            )
            if not value
        ]
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test runs, so
    module import during collection is detected through ``sys.modules``.
    ``PYTEST_RUNNING=1`` forces the detection.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


# Test override strategy:
# 1. If BIZCRM_TEST_DB is set, use it.
# 2. Else under pytest force in-memory sqlite shared through a StaticPool.
explicit_test_db = os.getenv("BIZCRM_TEST_DB")

if explicit_test_db:
    DATABASE_URL = explicit_test_db
elif _is_pytest_runtime():
    DATABASE_URL = "sqlite+pysqlite:///:memory:"
else:
    DATABASE_URL = _get_database_url()

if DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    # StaticPool so the schema persists across connections
    _engine_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
elif DATABASE_URL.startswith("sqlite"):
    _engine_kwargs = {"connect_args": {"check_same_thread": False}}
else:
    _engine_kwargs = {"pool_pre_ping": True}

engine = create_engine(DATABASE_URL, **_engine_kwargs)

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # pragma: no cover - driver hook
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# When using an in-memory SQLite database we must create the schema eagerly so
# that every session (re-used via StaticPool) sees the tables. Postgres schemas
# are owned by Alembic migrations.
if DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    from bizcrm.db import models  # local import to avoid circular import at module load

    models.Base.metadata.create_all(bind=engine)

# Create a SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
