"""
Projects API endpoints.

CRUD plus product/service line items and secondary manager assignments.
A project outside the caller's visible set answers 404 on every route.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.errors import DuplicateError
from bizcrm.db.repositories import projects as project_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import ok, parse_id, success

router = APIRouter(prefix="/projects", tags=["projects"])

NOT_FOUND = "Project not found"


def _visible_project(db: Session, project_id: str, current_user):
    db_project = project_repo.get_project(db, parse_id(project_id), current_user=current_user)
    if db_project is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return db_project


@router.get("")
def list_projects(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    return ok(schemas.ProjectListItem, project_repo.get_projects(db, current_user=current_user))


@router.get("/{project_id}")
def get_project(project_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    return ok(schemas.ProjectDetail, _visible_project(db, project_id, current_user))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_project(
    project: schemas.ProjectCreate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    return ok(schemas.ProjectDetail, project_repo.create_project(db, project, current_user))


@router.put("/{project_id}")
def update_project(
    project_id: str,
    project: schemas.ProjectUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_project = project_repo.update_project(db, parse_id(project_id), project, current_user=current_user)
    if db_project is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ok(schemas.ProjectDetail, db_project)


@router.delete("/{project_id}")
def delete_project(project_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    if not project_repo.delete_project(db, parse_id(project_id), current_user=current_user):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return success(message="Project deleted successfully")


# Products

@router.get("/{project_id}/products")
def list_project_products(project_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    db_project = _visible_project(db, project_id, current_user)
    return ok(schemas.ProjectProduct, project_repo.get_project_products(db, db_project.project_id))


@router.post("/{project_id}/products", status_code=status.HTTP_201_CREATED)
def add_project_product(
    project_id: str,
    payload: schemas.ProjectProductIn,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_project = _visible_project(db, project_id, current_user)
    if payload.product_id is None or payload.quantity is None:
        raise HTTPException(status_code=400, detail="Invalid payload")
    db_line = project_repo.add_project_product(db, db_project.project_id, payload.product_id, payload.quantity)
    return ok(schemas.ProjectProduct, db_line)


@router.delete("/{project_id}/products/{project_product_id}")
def remove_project_product(
    project_id: str,
    project_product_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_project = _visible_project(db, project_id, current_user)
    if not project_repo.remove_project_product(db, db_project.project_id, parse_id(project_product_id)):
        raise HTTPException(status_code=404, detail="Project product not found")
    return success(message="Product removed from project")


# Services

@router.post("/{project_id}/services", status_code=status.HTTP_201_CREATED)
def add_project_service(
    project_id: str,
    payload: schemas.ProjectServiceIn,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_project = _visible_project(db, project_id, current_user)
    if payload.service_id is None:
        raise HTTPException(status_code=400, detail="Invalid payload")
    db_line = project_repo.add_project_service(db, db_project.project_id, payload.service_id, payload.quantity)
    return ok(schemas.ProjectService, db_line)


@router.delete("/{project_id}/services/by-service/{service_id}")
def remove_project_service_by_service(
    project_id: str,
    service_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_project = _visible_project(db, project_id, current_user)
    if not project_repo.remove_project_service_by_service(db, db_project.project_id, parse_id(service_id)):
        raise HTTPException(status_code=404, detail="Project service not found")
    return success(message="Service removed from project")


@router.delete("/{project_id}/services/{project_service_id}")
def remove_project_service(
    project_id: str,
    project_service_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_project = _visible_project(db, project_id, current_user)
    if not project_repo.remove_project_service(db, db_project.project_id, parse_id(project_service_id)):
        raise HTTPException(status_code=404, detail="Project service not found")
    return success(message="Service removed from project")


# Secondary managers

@router.post("/{project_id}/managers", status_code=status.HTTP_201_CREATED)
def add_project_manager(
    project_id: str,
    payload: schemas.ManagerAssign,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_project = _visible_project(db, project_id, current_user)
    if payload.manager_id is None:
        raise HTTPException(status_code=400, detail="Invalid manager ID")
    manager_id = parse_id(payload.manager_id, "Invalid manager ID")
    try:
        project_repo.add_project_manager(db, db_project.project_id, manager_id)
    except DuplicateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return ok(schemas.ProjectDetail, project_repo.get_project(db, db_project.project_id))


@router.delete("/{project_id}/managers/{manager_id}")
def remove_project_manager(
    project_id: str,
    manager_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_project = _visible_project(db, project_id, current_user)
    if not project_repo.remove_project_manager(db, db_project.project_id, parse_id(manager_id, "Invalid manager ID")):
        raise HTTPException(status_code=404, detail="Manager assignment not found")
    return success(message="Manager removed from project")
