"""Environment-driven settings shared by the API and persistence layers."""

import os
import re
import sys
from typing import List

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}

DEFAULT_CORS_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:8000",
]

_DEV_JWT_SECRET = "dev-secret-change-me"


def parse_duration(value: str) -> int:
    """Convert ``"24h"``, ``"30m"``, ``"7d"`` or ``"3600"`` into seconds.

    Raises:
        ValueError: If the value is not a positive duration.
    """
    match = _DURATION_RE.match(value or "")
    if not match:
        raise ValueError(f"Invalid duration '{value}'. Expected a number with optional s/m/h/d suffix")
    seconds = int(match.group(1)) * _DURATION_UNITS[match.group(2).lower()]
    if seconds <= 0:
        raise ValueError(f"Duration must be positive, got '{value}'")
    return seconds


def _truthy(name: str) -> bool:
    return os.getenv(name, "false").lower() == "true"


def get_jwt_secret() -> str:
    """Return the signing secret; a development default is only allowed in dev or test runs."""
    secret = os.getenv("JWT_SECRET")
    if secret:
        return secret
    if _truthy("DEV_MODE") or os.getenv("PYTEST_RUNNING") == "1" or "pytest" in sys.modules:
        return _DEV_JWT_SECRET
    raise RuntimeError("JWT_SECRET is not configured")


def get_jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def get_jwt_expires_in() -> int:
    return parse_duration(os.getenv("JWT_EXPIRES_IN", "24h"))


def get_upload_dir() -> str:
    return os.getenv("UPLOAD_DIR", "./uploads")


def get_max_file_size() -> int:
    return int(os.getenv("MAX_FILE_SIZE", "10485760"))


def get_default_warehouse_id() -> int:
    return int(os.getenv("DEFAULT_WAREHOUSE_ID", "1"))


def get_cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)
