"""
Task repository functions.

A task is visible when either its responsible manager or its creator is in
the caller's visible set.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from bizcrm.db import models, schemas, visibility
from .common import apply_updates, delete_row


def _scoped(db: Session, current_user: Optional[Dict[str, Any]]):
    query = db.query(models.Task)
    if current_user is None:
        return query
    visible = visibility.visible_manager_ids(db, current_user)
    return visibility.apply_owner_filter(
        query, visible, models.Task.responsible_manager_id, models.Task.creator_manager_id
    )


def get_tasks(
    db: Session,
    current_user: Optional[Dict[str, Any]] = None,
    project_id: Optional[int] = None,
    subproject_id: Optional[int] = None,
    status: Optional[str] = None,
):
    query = _scoped(db, current_user)
    if project_id is not None:
        query = query.filter(models.Task.project_id == project_id)
    if subproject_id is not None:
        query = query.filter(models.Task.subproject_id == subproject_id)
    if status:
        query = query.filter(models.Task.status == status)
    return query.order_by(models.Task.created_at.desc(), models.Task.task_id.desc()).all()


def get_task(db: Session, task_id: int, current_user: Optional[Dict[str, Any]] = None):
    return _scoped(db, current_user).filter(models.Task.task_id == task_id).first()


def create_task(db: Session, task: schemas.TaskCreate, current_user: Dict[str, Any]):
    data = task.model_dump()
    data["status"] = task.status.value
    data["creator_manager_id"] = current_user.get("id")
    if data.get("responsible_manager_id") is None:
        data["responsible_manager_id"] = current_user.get("id")
    db_task = models.Task(**data)
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    return db_task


def update_task(db: Session, db_task: models.Task, task: schemas.TaskUpdate):
    apply_updates(db_task, task, exclude=("status",))
    if task.status is not None:
        db_task.status = task.status.value
    db.commit()
    db.refresh(db_task)
    return db_task


def set_task_status(db: Session, db_task: models.Task, status: str):
    db_task.status = status
    db.commit()
    db.refresh(db_task)
    return db_task


def delete_task(db: Session, task_id: int, current_user: Optional[Dict[str, Any]] = None) -> bool:
    return delete_row(db, get_task(db, task_id, current_user), "Task")
