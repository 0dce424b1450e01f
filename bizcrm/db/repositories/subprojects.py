"""
Subproject repository functions.

Subprojects hang off a project or off another subproject. Nested
subprojects copy the root project id so visibility always follows the
project.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from bizcrm.db import models, schemas, visibility
from bizcrm.db.errors import NotFoundError
from .common import apply_updates, delete_row
from .projects import get_project


def _scoped(db: Session, current_user: Optional[Dict[str, Any]]):
    query = db.query(models.SubProject)
    if current_user is None:
        return query
    return visibility.apply_subproject_filter(query, visibility.visible_manager_ids(db, current_user))


def get_subprojects(
    db: Session,
    current_user: Optional[Dict[str, Any]] = None,
    project_id: Optional[int] = None,
):
    query = _scoped(db, current_user)
    if project_id is not None:
        query = query.filter(models.SubProject.project_id == project_id)
    return query.order_by(models.SubProject.created_at, models.SubProject.subproject_id).all()


def get_subproject(db: Session, subproject_id: int, current_user: Optional[Dict[str, Any]] = None):
    return _scoped(db, current_user).filter(models.SubProject.subproject_id == subproject_id).first()


def create_subproject(db: Session, subproject: schemas.SubProjectCreate, current_user: Optional[Dict[str, Any]] = None):
    if subproject.project_id is None and subproject.parent_subproject_id is None:
        raise ValueError("Subproject must be attached to either project or another subproject")
    if subproject.project_id is not None and subproject.parent_subproject_id is not None:
        raise ValueError("Subproject cannot be attached to both project and subproject")

    data = subproject.model_dump()
    if subproject.parent_subproject_id is not None:
        parent = get_subproject(db, subproject.parent_subproject_id, current_user)
        if parent is None:
            raise NotFoundError("Parent subproject not found")
        data["project_id"] = parent.project_id
    elif get_project(db, subproject.project_id, current_user) is None:
        raise NotFoundError("Project not found")

    db_subproject = models.SubProject(**data)
    db.add(db_subproject)
    db.commit()
    db.refresh(db_subproject)
    return db_subproject


def update_subproject(
    db: Session,
    subproject_id: int,
    subproject: schemas.SubProjectUpdate,
    current_user: Optional[Dict[str, Any]] = None,
):
    db_subproject = get_subproject(db, subproject_id, current_user)
    if db_subproject:
        apply_updates(db_subproject, subproject)
        db.commit()
        db.refresh(db_subproject)
    return db_subproject


def delete_subproject(db: Session, subproject_id: int, current_user: Optional[Dict[str, Any]] = None) -> bool:
    return delete_row(db, get_subproject(db, subproject_id, current_user), "Subproject")


# Line items

def add_subproject_product(db: Session, subproject_id: int, product_id: int, quantity: int = 1):
    if db.get(models.Product, product_id) is None:
        raise NotFoundError("Product not found")
    db_line = models.SubProjectProduct(subproject_id=subproject_id, product_id=product_id, quantity=quantity)
    db.add(db_line)
    db.commit()
    db.refresh(db_line)
    return db_line


def remove_subproject_product(db: Session, subproject_id: int, product_id: int) -> bool:
    deleted = (
        db.query(models.SubProjectProduct)
        .filter(
            models.SubProjectProduct.subproject_id == subproject_id,
            models.SubProjectProduct.product_id == product_id,
        )
        .delete()
    )
    db.commit()
    return deleted > 0


def add_subproject_service(db: Session, subproject_id: int, service_id: int, quantity: float = 1):
    if db.get(models.Service, service_id) is None:
        raise NotFoundError("Service not found")
    db_line = models.SubProjectService(subproject_id=subproject_id, service_id=service_id, quantity=quantity)
    db.add(db_line)
    db.commit()
    db.refresh(db_line)
    return db_line


def remove_subproject_service(db: Session, subproject_id: int, service_id: int) -> bool:
    deleted = (
        db.query(models.SubProjectService)
        .filter(
            models.SubProjectService.subproject_id == subproject_id,
            models.SubProjectService.service_id == service_id,
        )
        .delete()
    )
    db.commit()
    return deleted > 0
