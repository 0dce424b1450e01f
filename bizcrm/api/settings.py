"""
Self-service settings endpoints: profile and password.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import managers as manager_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import ok, success
from bizcrm.utils.security import MIN_PASSWORD_LENGTH, verify_password

logger = logging.getLogger("bizcrm.settings")

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/profile")
def get_profile(user_context=Depends(get_current_user_context)):
    manager, _ = user_context
    return ok(schemas.Manager, manager)


@router.put("/profile")
def update_profile(
    profile: schemas.ProfileUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    manager, _ = user_context
    if not profile.first_name or not profile.last_name or not profile.email:
        raise HTTPException(status_code=400, detail="First name, last name and email are required")
    try:
        updated = manager_repo.update_profile(db, manager, profile)
    except ValueError as e:
        # DuplicateError and malformed email both surface here
        raise HTTPException(status_code=400, detail=str(e))
    return ok(schemas.Manager, updated)


@router.post("/change-password")
def change_password(
    payload: schemas.PasswordChange,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    manager, _ = user_context
    if not payload.current_password or not payload.new_password:
        raise HTTPException(status_code=400, detail="Current password and new password are required")
    if len(payload.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )
    if not verify_password(payload.current_password, manager.password_hash):
        raise HTTPException(status_code=400, detail="Current password is incorrect")
    manager_repo.set_password(db, manager, payload.new_password)
    logger.info(f"Password changed for manager {manager.manager_id}")
    return success(message="Password changed successfully")
