import pytest


@pytest.fixture(autouse=True)
def _fresh_schema():
    """Override schema reset for pure unit tests that do not touch the database."""
    yield
