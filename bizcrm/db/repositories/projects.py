"""
Project repository functions.

A project is visible to a caller when its main responsible manager or any
of its secondary responsible managers is in the caller's visible set.
Also maintains the project's product/service line items and secondary
manager assignments.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from sqlalchemy.orm import Session

from bizcrm.db import models, schemas, visibility
from bizcrm.db.errors import DuplicateError, NotFoundError
from .common import apply_updates, delete_row


def _scoped(db: Session, current_user: Optional[Dict[str, Any]]):
    query = db.query(models.Project)
    if current_user is None:
        return query
    return visibility.apply_project_filter(query, visibility.visible_manager_ids(db, current_user))


def get_projects(db: Session, current_user: Optional[Dict[str, Any]] = None):
    return _scoped(db, current_user).order_by(models.Project.created_at.desc(), models.Project.project_id.desc()).all()


def get_project(db: Session, project_id: int, current_user: Optional[Dict[str, Any]] = None):
    return _scoped(db, current_user).filter(models.Project.project_id == project_id).first()


def _replace_secondary_managers(db: Session, project_id: int, manager_ids: Iterable[int]):
    db.query(models.ProjectManager).filter(models.ProjectManager.project_id == project_id).delete()
    for manager_id in dict.fromkeys(manager_ids):
        db.add(models.ProjectManager(project_id=project_id, manager_id=manager_id))


def create_project(db: Session, project: schemas.ProjectCreate, current_user: Dict[str, Any]):
    data = project.model_dump(exclude={"secondary_responsible_manager_ids"})
    if data.get("main_responsible_manager_id") is None:
        data["main_responsible_manager_id"] = current_user.get("id")
    db_project = models.Project(**data)
    db.add(db_project)
    db.flush()
    _replace_secondary_managers(db, db_project.project_id, project.secondary_responsible_manager_ids)
    db.commit()
    db.refresh(db_project)
    return db_project


def update_project(
    db: Session,
    project_id: int,
    project: schemas.ProjectUpdate,
    current_user: Optional[Dict[str, Any]] = None,
):
    db_project = get_project(db, project_id, current_user)
    if db_project is None:
        return None
    apply_updates(db_project, project, exclude=("secondary_responsible_manager_ids",))
    if project.secondary_responsible_manager_ids is not None:
        _replace_secondary_managers(db, project_id, project.secondary_responsible_manager_ids)
    db.commit()
    db.refresh(db_project)
    return db_project


def delete_project(db: Session, project_id: int, current_user: Optional[Dict[str, Any]] = None) -> bool:
    db_project = get_project(db, project_id, current_user)
    if db_project is None:
        return False
    db.query(models.ProjectManager).filter(models.ProjectManager.project_id == project_id).delete()
    return delete_row(db, db_project, "Project")


# Line items

def get_project_products(db: Session, project_id: int):
    return (
        db.query(models.ProjectProduct)
        .filter(models.ProjectProduct.project_id == project_id)
        .order_by(models.ProjectProduct.project_product_id)
        .all()
    )


def add_project_product(db: Session, project_id: int, product_id: int, quantity: int):
    if db.get(models.Product, product_id) is None:
        raise NotFoundError("Product not found")
    db_line = models.ProjectProduct(project_id=project_id, product_id=product_id, quantity=quantity)
    db.add(db_line)
    db.commit()
    db.refresh(db_line)
    return db_line


def remove_project_product(db: Session, project_id: int, project_product_id: int) -> bool:
    db_line = (
        db.query(models.ProjectProduct)
        .filter(
            models.ProjectProduct.project_id == project_id,
            models.ProjectProduct.project_product_id == project_product_id,
        )
        .first()
    )
    return delete_row(db, db_line, "Project product")


def add_project_service(db: Session, project_id: int, service_id: int, quantity: float = 1):
    if db.get(models.Service, service_id) is None:
        raise NotFoundError("Service not found")
    db_line = models.ProjectService(project_id=project_id, service_id=service_id, quantity=quantity)
    db.add(db_line)
    db.commit()
    db.refresh(db_line)
    return db_line


def remove_project_service(db: Session, project_id: int, project_service_id: int) -> bool:
    db_line = (
        db.query(models.ProjectService)
        .filter(
            models.ProjectService.project_id == project_id,
            models.ProjectService.project_service_id == project_service_id,
        )
        .first()
    )
    return delete_row(db, db_line, "Project service")


def remove_project_service_by_service(db: Session, project_id: int, service_id: int) -> bool:
    """Remove every line of ``service_id`` from the project."""
    deleted = (
        db.query(models.ProjectService)
        .filter(
            models.ProjectService.project_id == project_id,
            models.ProjectService.service_id == service_id,
        )
        .delete()
    )
    db.commit()
    return deleted > 0


# Secondary managers

def add_project_manager(db: Session, project_id: int, manager_id: int):
    if db.get(models.Manager, manager_id) is None:
        raise NotFoundError("Manager not found")
    existing = db.get(models.ProjectManager, (project_id, manager_id))
    if existing is not None:
        raise DuplicateError("Manager is already assigned to this project")
    db_link = models.ProjectManager(project_id=project_id, manager_id=manager_id)
    db.add(db_link)
    db.commit()
    db.refresh(db_link)
    return db_link


def remove_project_manager(db: Session, project_id: int, manager_id: int) -> bool:
    return delete_row(db, db.get(models.ProjectManager, (project_id, manager_id)), "Manager assignment")
