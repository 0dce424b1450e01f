"""
Sale repository functions.

Sales are owned through ``responsible_manager_id``. Creating a sale records
its product and service lines and takes the sold quantities out of the
default warehouse.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from bizcrm.db import models, schemas, visibility
from bizcrm.utils import config
from .common import apply_updates, delete_row

logger = logging.getLogger(__name__)


def _scoped(db: Session, current_user: Optional[Dict[str, Any]]):
    query = db.query(models.Sale)
    if current_user is None:
        return query
    visible = visibility.visible_manager_ids(db, current_user)
    return visibility.apply_owner_filter(query, visible, models.Sale.responsible_manager_id)


def get_sales(db: Session, current_user: Optional[Dict[str, Any]] = None):
    return _scoped(db, current_user).order_by(models.Sale.sale_date.desc(), models.Sale.sale_id.desc()).all()


def get_sale(db: Session, sale_id: int, current_user: Optional[Dict[str, Any]] = None):
    return _scoped(db, current_user).filter(models.Sale.sale_id == sale_id).first()


def _add_lines(
    db: Session,
    sale_id: int,
    products: List[schemas.SaleProductLine],
    services: List[schemas.SaleServiceLine],
):
    for line in products:
        db.add(models.SaleProduct(sale_id=sale_id, product_id=line.product_id, quantity=line.quantity))
    for line in services:
        db.add(models.SaleService(sale_id=sale_id, service_id=line.service_id))


def _decrement_stock(db: Session, products: List[schemas.SaleProductLine]):
    warehouse_id = config.get_default_warehouse_id()
    for line in products:
        db_stock = (
            db.query(models.ProductStock)
            .filter(
                models.ProductStock.product_id == line.product_id,
                models.ProductStock.warehouse_id == warehouse_id,
            )
            .first()
        )
        if db_stock is None:
            logger.debug(f"No stock row for product {line.product_id} in warehouse {warehouse_id}")
            continue
        db_stock.quantity = db_stock.quantity - line.quantity


def create_sale(db: Session, sale: schemas.SaleCreate, current_user: Dict[str, Any]):
    data = sale.model_dump(exclude={"products", "services"}, exclude_none=True)
    data.setdefault("responsible_manager_id", current_user.get("id"))
    db_sale = models.Sale(**data)
    db.add(db_sale)
    db.flush()
    _add_lines(db, db_sale.sale_id, sale.products, sale.services)
    _decrement_stock(db, sale.products)
    db.commit()
    db.refresh(db_sale)
    return db_sale


def update_sale(
    db: Session,
    sale_id: int,
    sale: schemas.SaleUpdate,
    current_user: Optional[Dict[str, Any]] = None,
):
    db_sale = get_sale(db, sale_id, current_user)
    if db_sale is None:
        return None
    apply_updates(db_sale, sale, exclude=("products", "services"))
    # Line items are replaced only when the key is supplied
    if sale.products is not None:
        db.query(models.SaleProduct).filter(models.SaleProduct.sale_id == sale_id).delete()
        _add_lines(db, sale_id, sale.products, [])
    if sale.services is not None:
        db.query(models.SaleService).filter(models.SaleService.sale_id == sale_id).delete()
        _add_lines(db, sale_id, [], sale.services)
    db.commit()
    db.refresh(db_sale)
    return db_sale


def delete_sale(db: Session, sale_id: int, current_user: Optional[Dict[str, Any]] = None) -> bool:
    return delete_row(db, get_sale(db, sale_id, current_user), "Sale")
