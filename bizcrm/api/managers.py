"""
Managers API endpoints.

Listing and reads are visibility-filtered; account management is admin-only.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import managers as manager_repo
from bizcrm.api.deps import get_current_user_context, require_roles
from bizcrm.api.responses import ok, parse_id, success
from bizcrm.utils.roles import MANAGE_ROLES

router = APIRouter(prefix="/managers", tags=["managers"])

require_manage = require_roles(*MANAGE_ROLES)


@router.get("")
def list_managers(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    return ok(schemas.ManagerDetail, manager_repo.get_managers(db, current_user=current_user))


@router.get("/{manager_id}")
def get_manager(manager_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    db_manager = manager_repo.get_manager(db, parse_id(manager_id), current_user=current_user)
    if db_manager is None:
        raise HTTPException(status_code=404, detail="Manager not found")
    return ok(schemas.ManagerDetail, db_manager)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_manager(
    manager: schemas.ManagerCreate,
    db: Session = Depends(get_db),
    user_context=Depends(require_manage),
):
    return ok(schemas.ManagerDetail, manager_repo.create_manager(db, manager))


@router.put("/{manager_id}")
def update_manager(
    manager_id: str,
    manager: schemas.ManagerUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(require_manage),
):
    db_manager = manager_repo.update_manager(db, parse_id(manager_id), manager)
    if db_manager is None:
        raise HTTPException(status_code=404, detail="Manager not found")
    return ok(schemas.ManagerDetail, db_manager)


@router.delete("/{manager_id}")
def delete_manager(manager_id: str, db: Session = Depends(get_db), user_context=Depends(require_manage)):
    if not manager_repo.delete_manager(db, parse_id(manager_id)):
        raise HTTPException(status_code=404, detail="Manager not found")
    return success(message="Manager deleted successfully")
