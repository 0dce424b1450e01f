"""
Password hashing and access-token helpers.

Responsibilities:
- Hash manager passwords with Argon2id and verify them in constant time
- Issue signed JWT access tokens carrying manager id, email and role
- Decode tokens, rejecting bad signatures and expired tokens
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from argon2.low_level import Type

from bizcrm.utils import config

_hasher = PasswordHasher(time_cost=2, memory_cost=19456, parallelism=1, hash_len=32, type=Type.ID)

MIN_PASSWORD_LENGTH = 6


class InvalidTokenError(Exception):
    """Raised when an access token is malformed, forged or expired."""


@dataclass(frozen=True)
class TokenClaims:
    manager_id: int
    email: str
    role: str
    expires_at: int


def hash_password(password: str) -> str:
    """Return an Argon2id hash string for the given password."""
    return _hasher.hash(password)


def verify_password(password: str, stored_hash: Optional[str]) -> bool:
    """Return True when the password matches the stored hash."""
    if not password or not stored_hash:
        return False
    try:
        return _hasher.verify(stored_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def password_needs_rehash(stored_hash: str) -> bool:
    return _hasher.check_needs_rehash(stored_hash)


def create_access_token(
    *,
    manager_id: int,
    email: str,
    role: str,
    expires_in: Optional[int] = None,
    now: Optional[int] = None,
) -> str:
    """Sign a token for the manager. ``expires_in`` defaults to JWT_EXPIRES_IN."""
    issued_at = int(now if now is not None else time.time())
    ttl = expires_in if expires_in is not None else config.get_jwt_expires_in()
    payload: Dict[str, Any] = {
        "manager_id": manager_id,
        "email": email,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(payload, config.get_jwt_secret(), algorithm=config.get_jwt_algorithm())


def decode_access_token(token: str) -> TokenClaims:
    """Validate the token signature and expiry and return its claims.

    Raises:
        InvalidTokenError: On any decoding or claim problem.
    """
    try:
        payload = jwt.decode(
            token,
            config.get_jwt_secret(),
            algorithms=[config.get_jwt_algorithm()],
            options={"require": ["exp"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    manager_id = payload.get("manager_id")
    if not isinstance(manager_id, int) or not payload.get("role"):
        raise InvalidTokenError("Token is missing manager claims")
    return TokenClaims(
        manager_id=manager_id,
        email=str(payload.get("email") or ""),
        role=str(payload["role"]),
        expires_at=int(payload["exp"]),
    )
