"""
Manager repository functions.

Implements manager CRUD, hierarchy link maintenance and the self-service
profile/password updates used by the settings endpoints.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from bizcrm.db import models, schemas, visibility
from bizcrm.db.errors import DuplicateError, NotFoundError
from bizcrm.utils.security import hash_password
from .common import apply_updates, delete_row


def get_manager(db: Session, manager_id: int, current_user: Optional[Dict[str, Any]] = None):
    query = db.query(models.Manager).filter(models.Manager.manager_id == manager_id)
    if current_user is not None:
        visible = visibility.visible_manager_ids(db, current_user)
        query = visibility.apply_owner_filter(query, visible, models.Manager.manager_id)
    return query.first()


def get_manager_by_email(db: Session, email: str):
    return db.query(models.Manager).filter(models.Manager.email == (email or "").strip().lower()).first()


def get_managers(db: Session, current_user: Optional[Dict[str, Any]] = None) -> List[models.Manager]:
    query = db.query(models.Manager)
    if current_user is not None:
        visible = visibility.visible_manager_ids(db, current_user)
        query = visibility.apply_owner_filter(query, visible, models.Manager.manager_id)
    return query.order_by(models.Manager.manager_id).all()


def _load_managers(db: Session, ids: Iterable[int], exclude: Optional[int] = None) -> List[models.Manager]:
    wanted = [i for i in dict.fromkeys(ids) if i != exclude]
    if not wanted:
        return []
    found = db.query(models.Manager).filter(models.Manager.manager_id.in_(wanted)).all()
    if len(found) != len(wanted):
        missing = sorted(set(wanted) - {m.manager_id for m in found})
        raise NotFoundError(f"Manager not found: {missing[0]}")
    return found


def _ensure_email_free(db: Session, email: str, message: str, own_id: Optional[int] = None):
    existing = get_manager_by_email(db, email)
    if existing is not None and existing.manager_id != own_id:
        raise DuplicateError(message)


def create_manager(db: Session, manager: schemas.ManagerCreate):
    _ensure_email_free(db, manager.email, "Email already in use")
    db_manager = models.Manager(
        first_name=manager.first_name,
        last_name=manager.last_name,
        email=manager.email,
        phone_number=manager.phone_number,
        role=manager.role.value,
        password_hash=hash_password(manager.password),
    )
    db_manager.supervisors = _load_managers(db, manager.supervisor_ids)
    db_manager.subordinates = _load_managers(db, manager.subordinate_ids)
    db.add(db_manager)
    db.commit()
    db.refresh(db_manager)
    return db_manager


def update_manager(db: Session, manager_id: int, manager: schemas.ManagerUpdate):
    db_manager = get_manager(db, manager_id)
    if db_manager is None:
        return None
    fields = manager.model_fields_set
    if manager.email is not None:
        _ensure_email_free(db, manager.email, "Email already in use", own_id=manager_id)
    apply_updates(db_manager, manager, exclude=("password", "supervisor_ids", "subordinate_ids", "role"))
    if manager.role is not None:
        db_manager.role = manager.role.value
    if manager.password:
        db_manager.password_hash = hash_password(manager.password)
    # Hierarchy links are replaced only when the key is present
    if "supervisor_ids" in fields:
        db_manager.supervisors = _load_managers(db, manager.supervisor_ids or [], exclude=manager_id)
    if "subordinate_ids" in fields:
        db_manager.subordinates = _load_managers(db, manager.subordinate_ids or [], exclude=manager_id)
    db.commit()
    db.refresh(db_manager)
    return db_manager


def delete_manager(db: Session, manager_id: int) -> bool:
    return delete_row(db, get_manager(db, manager_id), "Manager")


def update_profile(db: Session, db_manager: models.Manager, profile: schemas.ProfileUpdate):
    email = schemas.normalize_email(profile.email)
    _ensure_email_free(db, email, "Email is already taken", own_id=db_manager.manager_id)
    db_manager.first_name = profile.first_name
    db_manager.last_name = profile.last_name
    db_manager.email = email
    if "phone_number" in profile.model_fields_set:
        db_manager.phone_number = profile.phone_number
    db.commit()
    db.refresh(db_manager)
    return db_manager


def set_password(db: Session, db_manager: models.Manager, new_password: str):
    db_manager.password_hash = hash_password(new_password)
    db.commit()
    return db_manager
