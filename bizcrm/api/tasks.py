"""
Tasks API endpoints.

Reads are visibility-filtered on assignee or creator. Full edits belong to
the creator, partial edits and status changes to the creator or assignee;
admins may do all three.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import tasks as task_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.permissions import can_change_task_status, can_edit_task, can_patch_task
from bizcrm.api.responses import ok, parse_id, success

logger = logging.getLogger("bizcrm.tasks")

router = APIRouter(prefix="/tasks", tags=["tasks"])

NOT_FOUND = "Task not found"


def _visible_task(db: Session, task_id: int, current_user):
    db_task = task_repo.get_task(db, task_id, current_user=current_user)
    if db_task is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return db_task


def _deny(current_user, task_id: int, detail: str):
    logger.info(f"Manager {current_user.get('id')} denied on task {task_id}: {detail}")
    raise HTTPException(status_code=403, detail=detail)


@router.get("")
def list_tasks(
    project_id: Optional[str] = None,
    subproject_id: Optional[str] = None,
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    tasks = task_repo.get_tasks(
        db,
        current_user=current_user,
        project_id=parse_id(project_id, "Invalid project ID") if project_id else None,
        subproject_id=parse_id(subproject_id, "Invalid subproject ID") if subproject_id else None,
        status=status,
    )
    return ok(schemas.Task, tasks)


@router.get("/{task_id}")
def get_task(task_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    return ok(schemas.TaskDetail, _visible_task(db, parse_id(task_id), current_user))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_task(task: schemas.TaskCreate, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    return ok(schemas.TaskDetail, task_repo.create_task(db, task, current_user))


@router.put("/{task_id}")
def update_task(
    task_id: str,
    task: schemas.TaskUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    tid = parse_id(task_id)
    db_task = _visible_task(db, tid, current_user)
    if not can_edit_task(db_task, current_user):
        _deny(current_user, tid, "Only the creator can edit this task")
    return ok(schemas.TaskDetail, task_repo.update_task(db, db_task, task))


@router.patch("/{task_id}")
def patch_task(
    task_id: str,
    task: schemas.TaskUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    tid = parse_id(task_id)
    db_task = _visible_task(db, tid, current_user)
    if not can_patch_task(db_task, current_user):
        _deny(current_user, tid, "You can only edit tasks you created or are assigned to")
    return ok(schemas.TaskDetail, task_repo.update_task(db, db_task, task))


@router.patch("/{task_id}/status")
def update_task_status(
    task_id: str,
    payload: schemas.TaskStatusUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    tid = parse_id(task_id)
    if not payload.status:
        raise HTTPException(status_code=400, detail="Missing status")
    if payload.status not in schemas.TASK_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status")
    db_task = _visible_task(db, tid, current_user)
    if not can_change_task_status(db_task, current_user):
        _deny(current_user, tid, "Only the assignee can change status")
    return ok(schemas.TaskDetail, task_repo.set_task_status(db, db_task, payload.status))


@router.delete("/{task_id}")
def delete_task(task_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    if not task_repo.delete_task(db, parse_id(task_id), current_user=current_user):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return success(message="Task deleted successfully")
