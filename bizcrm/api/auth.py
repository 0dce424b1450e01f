"""
Authentication endpoints and helpers.

Login checks the password against the stored Argon2 hash and returns a
signed access token. Tokens are stateless, so logout only acknowledges.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import models, schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import managers as manager_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import dump, ok, success
from bizcrm.utils.security import (
    create_access_token,
    hash_password,
    password_needs_rehash,
    verify_password,
)

logger = logging.getLogger("bizcrm.auth")

router = APIRouter(prefix="/auth", tags=["auth"])


def authenticate(db: Session, email: Optional[str], password: Optional[str]) -> Optional[models.Manager]:
    """Return the manager for valid credentials, otherwise None."""
    manager = manager_repo.get_manager_by_email(db, email or "")
    if manager is None or not verify_password(password or "", manager.password_hash):
        return None
    if password_needs_rehash(manager.password_hash):
        manager.password_hash = hash_password(password)
        db.commit()
    return manager


def issue_token(manager: models.Manager) -> str:
    return create_access_token(manager_id=manager.manager_id, email=manager.email, role=manager.role)


@router.post("/login")
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    if not payload.email or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password are required")
    email = payload.email.strip().lower()
    manager = authenticate(db, email, payload.password)
    if manager is None:
        logger.info(f"Login failed for {email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    logger.info(f"Login succeeded for manager {manager.manager_id}")
    return success({"user": dump(schemas.Manager, manager), "token": issue_token(manager)})


@router.post("/logout")
def logout():
    return success(message="Logged out successfully")


@router.get("/me")
def me(user_context=Depends(get_current_user_context)):
    manager, _ = user_context
    return ok(schemas.Manager, manager)
