"""
Subprojects API endpoints.

Subprojects are visible through their project. Line items are keyed by
product/service id within the subproject.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import subprojects as subproject_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import ok, parse_id, success

router = APIRouter(prefix="/subprojects", tags=["subprojects"])

NOT_FOUND = "Subproject not found"


def _visible_subproject(db: Session, subproject_id: str, current_user):
    db_subproject = subproject_repo.get_subproject(db, parse_id(subproject_id), current_user=current_user)
    if db_subproject is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return db_subproject


@router.get("")
def list_subprojects(
    project_id: Optional[str] = None,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    pid = parse_id(project_id, "Invalid project ID") if project_id else None
    return ok(schemas.SubProjectListItem, subproject_repo.get_subprojects(db, current_user=current_user, project_id=pid))


@router.get("/{subproject_id}")
def get_subproject(subproject_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    return ok(schemas.SubProjectDetail, _visible_subproject(db, subproject_id, current_user))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_subproject(
    subproject: schemas.SubProjectCreate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    try:
        db_subproject = subproject_repo.create_subproject(db, subproject, current_user=current_user)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ok(schemas.SubProjectDetail, db_subproject)


@router.put("/{subproject_id}")
def update_subproject(
    subproject_id: str,
    subproject: schemas.SubProjectUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_subproject = subproject_repo.update_subproject(db, parse_id(subproject_id), subproject, current_user=current_user)
    if db_subproject is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ok(schemas.SubProjectDetail, db_subproject)


@router.delete("/{subproject_id}")
def delete_subproject(subproject_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    if not subproject_repo.delete_subproject(db, parse_id(subproject_id), current_user=current_user):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return success(message="Subproject deleted successfully")


@router.post("/{subproject_id}/products", status_code=status.HTTP_201_CREATED)
def add_subproject_product(
    subproject_id: str,
    payload: schemas.SubProjectProductIn,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_subproject = _visible_subproject(db, subproject_id, current_user)
    if payload.product_id is None:
        raise HTTPException(status_code=400, detail="Product ID is required")
    db_line = subproject_repo.add_subproject_product(
        db, db_subproject.subproject_id, payload.product_id, payload.quantity
    )
    return ok(schemas.SubProjectProduct, db_line)


@router.delete("/{subproject_id}/products/{product_id}")
def remove_subproject_product(
    subproject_id: str,
    product_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_subproject = _visible_subproject(db, subproject_id, current_user)
    if not subproject_repo.remove_subproject_product(db, db_subproject.subproject_id, parse_id(product_id)):
        raise HTTPException(status_code=404, detail="Product not found in subproject")
    return success(message="Product removed from subproject")


@router.post("/{subproject_id}/services", status_code=status.HTTP_201_CREATED)
def add_subproject_service(
    subproject_id: str,
    payload: schemas.SubProjectServiceIn,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_subproject = _visible_subproject(db, subproject_id, current_user)
    if payload.service_id is None:
        raise HTTPException(status_code=400, detail="Service ID is required")
    db_line = subproject_repo.add_subproject_service(
        db, db_subproject.subproject_id, payload.service_id, payload.quantity
    )
    return ok(schemas.SubProjectService, db_line)


@router.delete("/{subproject_id}/services/{service_id}")
def remove_subproject_service(
    subproject_id: str,
    service_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_subproject = _visible_subproject(db, subproject_id, current_user)
    if not subproject_repo.remove_subproject_service(db, db_subproject.subproject_id, parse_id(service_id)):
        raise HTTPException(status_code=404, detail="Service not found in subproject")
    return success(message="Service removed from subproject")
