"""
Catalogue API endpoints: services, units and warehouses.

Shared reference data; every authenticated manager may read and edit it.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import catalog as catalog_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import ok, parse_id, success

services_router = APIRouter(prefix="/services", tags=["services"])
units_router = APIRouter(prefix="/units", tags=["units"])
warehouses_router = APIRouter(prefix="/warehouses", tags=["warehouses"])


# Services

@services_router.get("")
def list_services(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    return ok(schemas.Service, catalog_repo.get_services(db))


@services_router.get("/{service_id}")
def get_service(service_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    db_service = catalog_repo.get_service(db, parse_id(service_id))
    if db_service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return ok(schemas.Service, db_service)


@services_router.post("", status_code=status.HTTP_201_CREATED)
def create_service(
    service: schemas.ServiceCreate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    return ok(schemas.Service, catalog_repo.create_service(db, service))


@services_router.put("/{service_id}")
def update_service(
    service_id: str,
    service: schemas.ServiceUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    db_service = catalog_repo.update_service(db, parse_id(service_id), service)
    if db_service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return ok(schemas.Service, db_service)


@services_router.delete("/{service_id}")
def delete_service(service_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    if not catalog_repo.delete_service(db, parse_id(service_id)):
        raise HTTPException(status_code=404, detail="Service not found")
    return success(message="Service deleted successfully")


# Units

@units_router.get("")
def list_units(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    return ok(schemas.Unit, catalog_repo.get_units(db))


@units_router.get("/{unit_id}")
def get_unit(unit_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    db_unit = catalog_repo.get_unit(db, parse_id(unit_id))
    if db_unit is None:
        raise HTTPException(status_code=404, detail="Unit not found")
    return ok(schemas.Unit, db_unit)


@units_router.post("", status_code=status.HTTP_201_CREATED)
def create_unit(unit: schemas.UnitCreate, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    return ok(schemas.Unit, catalog_repo.create_unit(db, unit))


@units_router.put("/{unit_id}")
def update_unit(
    unit_id: str,
    unit: schemas.UnitUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    db_unit = catalog_repo.update_unit(db, parse_id(unit_id), unit)
    if db_unit is None:
        raise HTTPException(status_code=404, detail="Unit not found")
    return ok(schemas.Unit, db_unit)


@units_router.delete("/{unit_id}")
def delete_unit(unit_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    if not catalog_repo.delete_unit(db, parse_id(unit_id)):
        raise HTTPException(status_code=404, detail="Unit not found")
    return success(message="Unit deleted successfully")


# Warehouses

@warehouses_router.get("")
def list_warehouses(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    return ok(schemas.Warehouse, catalog_repo.get_warehouses(db))


@warehouses_router.get("/{warehouse_id}")
def get_warehouse(warehouse_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    db_warehouse = catalog_repo.get_warehouse(db, parse_id(warehouse_id))
    if db_warehouse is None:
        raise HTTPException(status_code=404, detail="Warehouse not found")
    return ok(schemas.Warehouse, db_warehouse)


@warehouses_router.post("", status_code=status.HTTP_201_CREATED)
def create_warehouse(
    warehouse: schemas.WarehouseCreate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    return ok(schemas.Warehouse, catalog_repo.create_warehouse(db, warehouse))


@warehouses_router.put("/{warehouse_id}")
def update_warehouse(
    warehouse_id: str,
    warehouse: schemas.WarehouseUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    db_warehouse = catalog_repo.update_warehouse(db, parse_id(warehouse_id), warehouse)
    if db_warehouse is None:
        raise HTTPException(status_code=404, detail="Warehouse not found")
    return ok(schemas.Warehouse, db_warehouse)


@warehouses_router.delete("/{warehouse_id}")
def delete_warehouse(warehouse_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    if not catalog_repo.delete_warehouse(db, parse_id(warehouse_id)):
        raise HTTPException(status_code=404, detail="Warehouse not found")
    return success(message="Warehouse deleted successfully")
