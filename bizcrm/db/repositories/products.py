"""
Product repository functions.

Implements product CRUD with case-insensitive search, SKU uniqueness and
per-warehouse stock upserts.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from bizcrm.db import models, schemas
from bizcrm.db.errors import DuplicateError
from .common import apply_updates, delete_row

SKU_TAKEN = "Product with this SKU already exists"


def get_products(db: Session, search: Optional[str] = None):
    query = db.query(models.Product)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(models.Product.name.ilike(pattern), models.Product.sku.ilike(pattern)))
    return query.order_by(models.Product.name).all()


def get_product(db: Session, product_id: int):
    return db.query(models.Product).filter(models.Product.product_id == product_id).first()


def _ensure_sku_free(db: Session, sku: Optional[str], own_id: Optional[int] = None):
    if not sku:
        return
    existing = db.query(models.Product).filter(models.Product.sku == sku).first()
    if existing is not None and existing.product_id != own_id:
        raise DuplicateError(SKU_TAKEN)


def create_product(db: Session, product: schemas.ProductCreate):
    _ensure_sku_free(db, product.sku)
    db_product = models.Product(**product.model_dump())
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product


def update_product(db: Session, product_id: int, product: schemas.ProductUpdate):
    db_product = get_product(db, product_id)
    if db_product:
        if product.sku is not None:
            _ensure_sku_free(db, product.sku, own_id=product_id)
        apply_updates(db_product, product)
        db.commit()
        db.refresh(db_product)
    return db_product


def delete_product(db: Session, product_id: int) -> bool:
    return delete_row(db, get_product(db, product_id), "Product")


def get_product_stocks(db: Session, product_id: int):
    return (
        db.query(models.ProductStock)
        .filter(models.ProductStock.product_id == product_id)
        .order_by(models.ProductStock.warehouse_id)
        .all()
    )


def upsert_product_stocks(db: Session, product_id: int, entries: List[schemas.StockEntry]):
    """Set the stock quantity of a product in each listed warehouse."""
    for entry in entries:
        db_stock = (
            db.query(models.ProductStock)
            .filter(
                models.ProductStock.product_id == product_id,
                models.ProductStock.warehouse_id == entry.warehouse_id,
            )
            .first()
        )
        if db_stock is None:
            db_stock = models.ProductStock(product_id=product_id, warehouse_id=entry.warehouse_id)
            db.add(db_stock)
        db_stock.quantity = entry.quantity
        # Two entries for the same warehouse must resolve to one row
        db.flush()
    db.commit()
    return get_product_stocks(db, product_id)
