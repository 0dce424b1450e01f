import os
import tempfile

import pytest

# Must be in place before bizcrm.db.database picks its engine and before the
# app mounts the upload directory.
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="bizcrm-uploads-"))

from fastapi.testclient import TestClient

from bizcrm.db import database, models
from bizcrm.api.main import app
from bizcrm.utils.security import create_access_token


# Fresh schema per test. The in-memory engine shares one connection through a
# StaticPool, so dropping and recreating is cheaper than tracking rows.
@pytest.fixture(autouse=True)
def _fresh_schema():
    models.Base.metadata.drop_all(bind=database.engine)
    models.Base.metadata.create_all(bind=database.engine)
    yield


@pytest.fixture
def db_session():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def _bearer(manager) -> dict:
    token = create_access_token(manager_id=manager.manager_id, email=manager.email, role=manager.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    """Return a helper minting bearer headers for a manager row."""
    return _bearer
