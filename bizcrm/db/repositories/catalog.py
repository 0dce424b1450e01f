"""
Shared catalogue repositories: services, units, warehouses and status types.

These rows are not owned by any manager, so no visibility filter applies.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from bizcrm.db import models, schemas
from .common import apply_updates, delete_row


# Services

def get_services(db: Session):
    return db.query(models.Service).order_by(models.Service.name).all()


def get_service(db: Session, service_id: int):
    return db.query(models.Service).filter(models.Service.service_id == service_id).first()


def create_service(db: Session, service: schemas.ServiceCreate):
    db_service = models.Service(**service.model_dump())
    db.add(db_service)
    db.commit()
    db.refresh(db_service)
    return db_service


def update_service(db: Session, service_id: int, service: schemas.ServiceUpdate):
    db_service = get_service(db, service_id)
    if db_service:
        apply_updates(db_service, service)
        db.commit()
        db.refresh(db_service)
    return db_service


def delete_service(db: Session, service_id: int) -> bool:
    return delete_row(db, get_service(db, service_id), "Service")


# Units

def get_units(db: Session):
    return db.query(models.Unit).order_by(models.Unit.name).all()


def get_unit(db: Session, unit_id: int):
    return db.query(models.Unit).filter(models.Unit.unit_id == unit_id).first()


def create_unit(db: Session, unit: schemas.UnitCreate):
    db_unit = models.Unit(name=unit.name)
    db.add(db_unit)
    db.commit()
    db.refresh(db_unit)
    return db_unit


def update_unit(db: Session, unit_id: int, unit: schemas.UnitUpdate):
    db_unit = get_unit(db, unit_id)
    if db_unit:
        apply_updates(db_unit, unit)
        db.commit()
        db.refresh(db_unit)
    return db_unit


def delete_unit(db: Session, unit_id: int) -> bool:
    return delete_row(db, get_unit(db, unit_id), "Unit")


# Warehouses

def get_warehouses(db: Session):
    return db.query(models.Warehouse).order_by(models.Warehouse.warehouse_id).all()


def get_warehouse(db: Session, warehouse_id: int):
    return db.query(models.Warehouse).filter(models.Warehouse.warehouse_id == warehouse_id).first()


def create_warehouse(db: Session, warehouse: schemas.WarehouseCreate):
    db_warehouse = models.Warehouse(**warehouse.model_dump())
    db.add(db_warehouse)
    db.commit()
    db.refresh(db_warehouse)
    return db_warehouse


def update_warehouse(db: Session, warehouse_id: int, warehouse: schemas.WarehouseUpdate):
    db_warehouse = get_warehouse(db, warehouse_id)
    if db_warehouse:
        apply_updates(db_warehouse, warehouse)
        db.commit()
        db.refresh(db_warehouse)
    return db_warehouse


def delete_warehouse(db: Session, warehouse_id: int) -> bool:
    return delete_row(db, get_warehouse(db, warehouse_id), "Warehouse")


# Status types. Both tables share the same shape, so the model is a parameter.

STATUS_MODELS = {
    "sale": (models.SaleStatusType, models.SaleStatusType.sale_status_id),
    "subproject": (models.SubProjectStatusType, models.SubProjectStatusType.sub_project_status_id),
}


def get_status_types(db: Session, kind: str):
    model, _ = STATUS_MODELS[kind]
    return db.query(model).order_by(model.created_at, model.name).all()


def get_status_type(db: Session, kind: str, status_id: int):
    model, pk = STATUS_MODELS[kind]
    return db.query(model).filter(pk == status_id).first()


def create_status_type(db: Session, kind: str, status: schemas.StatusTypeCreate):
    model, _ = STATUS_MODELS[kind]
    db_status = model(name=status.name)
    db.add(db_status)
    db.commit()
    db.refresh(db_status)
    return db_status


def update_status_type(db: Session, kind: str, status_id: int, status: schemas.StatusTypeUpdate):
    db_status = get_status_type(db, kind, status_id)
    if db_status:
        apply_updates(db_status, status)
        db.commit()
        db.refresh(db_status)
    return db_status


def delete_status_type(db: Session, kind: str, status_id: int) -> bool:
    return delete_row(db, get_status_type(db, kind, status_id), "Status type")
