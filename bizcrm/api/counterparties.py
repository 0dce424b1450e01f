"""
Counterparties API endpoints.

Rows outside the caller's visible set are reported as missing.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import counterparties as counterparty_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import ok, parse_id, success

router = APIRouter(prefix="/counterparties", tags=["counterparties"])

NOT_FOUND = "Counterparty not found"


@router.get("")
def list_counterparties(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    return ok(schemas.Counterparty, counterparty_repo.get_counterparties(db, current_user=current_user))


@router.get("/{counterparty_id}")
def get_counterparty(
    counterparty_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_counterparty = counterparty_repo.get_counterparty(db, parse_id(counterparty_id), current_user=current_user)
    if db_counterparty is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ok(schemas.Counterparty, db_counterparty)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_counterparty(
    counterparty: schemas.CounterpartyCreate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    return ok(schemas.Counterparty, counterparty_repo.create_counterparty(db, counterparty, current_user))


@router.put("/{counterparty_id}")
def update_counterparty(
    counterparty_id: str,
    counterparty: schemas.CounterpartyUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    db_counterparty = counterparty_repo.update_counterparty(
        db, parse_id(counterparty_id), counterparty, current_user=current_user
    )
    if db_counterparty is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return ok(schemas.Counterparty, db_counterparty)


@router.delete("/{counterparty_id}")
def delete_counterparty(
    counterparty_id: str,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    _, current_user = user_context
    if not counterparty_repo.delete_counterparty(db, parse_id(counterparty_id), current_user=current_user):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return success(message="Counterparty deleted successfully")
