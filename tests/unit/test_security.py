import time

import jwt
import pytest

from bizcrm.utils import config
from bizcrm.utils.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    password_needs_rehash,
    verify_password,
)


def test_hash_and_verify_password():
    stored = hash_password("hunter22")
    assert stored != "hunter22"
    assert stored.startswith("$argon2id$")
    assert verify_password("hunter22", stored)
    assert not verify_password("hunter23", stored)
    assert not password_needs_rehash(stored)


def test_verify_rejects_empty_and_garbage_hashes():
    assert not verify_password("", hash_password("x"))
    assert not verify_password("x", None)
    assert not verify_password("x", "not-a-hash")


def test_token_round_trip():
    token = create_access_token(manager_id=7, email="a@example.com", role="head", expires_in=60)
    claims = decode_access_token(token)
    assert claims.manager_id == 7
    assert claims.email == "a@example.com"
    assert claims.role == "head"
    assert claims.expires_at > time.time()


def test_expired_token_rejected():
    issued = int(time.time()) - 7200
    token = create_access_token(manager_id=1, email="a@example.com", role="manager", expires_in=60, now=issued)
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_token_signed_with_other_secret_rejected():
    forged = jwt.encode(
        {"manager_id": 1, "email": "a@example.com", "role": "admin", "exp": int(time.time()) + 60},
        "someone-else",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        decode_access_token(forged)


def test_token_without_manager_claims_rejected():
    token = jwt.encode(
        {"sub": "x", "exp": int(time.time()) + 60},
        config.get_jwt_secret(),
        algorithm=config.get_jwt_algorithm(),
    )
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_default_expiry_follows_env(monkeypatch):
    monkeypatch.setenv("JWT_EXPIRES_IN", "2h")
    token = create_access_token(manager_id=3, email="b@example.com", role="manager", now=1_000)
    payload = jwt.decode(
        token, config.get_jwt_secret(), algorithms=["HS256"], options={"verify_exp": False}
    )
    assert payload["exp"] - payload["iat"] == 7200
