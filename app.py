"""
App assembly entry point.

Re-exports the FastAPI `app` from `bizcrm.api.main` so `uvicorn app:app`
works from the repository root.
"""

from bizcrm.api.main import app  # noqa: F401
