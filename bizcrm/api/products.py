"""
Products API endpoints.

CRUD with name/SKU search plus per-warehouse stock management.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import products as product_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import ok, parse_id, success

router = APIRouter(prefix="/products", tags=["products"])

NOT_FOUND = "Product not found"


@router.get("")
def list_products(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    return ok(schemas.Product, product_repo.get_products(db, search=search))


@router.get("/{product_id}")
def get_product(product_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    db_product = product_repo.get_product(db, parse_id(product_id))
    if db_product is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ok(schemas.Product, db_product)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    product: schemas.ProductCreate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    return ok(schemas.Product, product_repo.create_product(db, product))


@router.put("/{product_id}")
def update_product(
    product_id: str,
    product: schemas.ProductUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    db_product = product_repo.update_product(db, parse_id(product_id), product)
    if db_product is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ok(schemas.Product, db_product)


@router.delete("/{product_id}")
def delete_product(product_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    if not product_repo.delete_product(db, parse_id(product_id)):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return success(message="Product deleted successfully")


@router.get("/{product_id}/stock")
def get_product_stock(product_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    pid = parse_id(product_id)
    if product_repo.get_product(db, pid) is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ok(schemas.ProductStock, product_repo.get_product_stocks(db, pid))


@router.post("/{product_id}/stock")
def update_product_stock(
    product_id: str,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    pid = parse_id(product_id)
    stocks = payload.get("stocks")
    if not isinstance(stocks, list):
        raise HTTPException(status_code=400, detail="Stocks must be an array")
    try:
        entries = [schemas.StockEntry.model_validate(item) for item in stocks]
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors()[0].get("msg", "Invalid stock entry"))
    if product_repo.get_product(db, pid) is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ok(schemas.ProductStock, product_repo.upsert_product_stocks(db, pid, entries))
