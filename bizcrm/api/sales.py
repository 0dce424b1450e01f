"""
Sales API endpoints.

Responses embed the line items and the computed ``total_price``.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import sales as sale_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import ok, parse_id, success

router = APIRouter(prefix="/sales", tags=["sales"])

NOT_FOUND = "Sale not found"


@router.get("")
def list_sales(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    return ok(schemas.Sale, sale_repo.get_sales(db, current_user=current_user))


@router.get("/{sale_id}")
def get_sale(sale_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    db_sale = sale_repo.get_sale(db, parse_id(sale_id), current_user=current_user)
    if db_sale is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ok(schemas.Sale, db_sale)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_sale(sale: schemas.SaleCreate, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    return ok(schemas.Sale, sale_repo.create_sale(db, sale, current_user))


@router.put("/{sale_id}")
def update_sale(
    sale_id: str,
    sale: schemas.SaleUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_sale = sale_repo.update_sale(db, parse_id(sale_id), sale, current_user=current_user)
    if db_sale is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ok(schemas.Sale, db_sale)


@router.delete("/{sale_id}")
def delete_sale(sale_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    if not sale_repo.delete_sale(db, parse_id(sale_id), current_user=current_user):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return success(message="Sale deleted successfully")
