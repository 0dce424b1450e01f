"""
Counterparty repository functions.

Counterparties are owned through ``responsible_manager_id``.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from bizcrm.db import models, schemas, visibility
from .common import apply_updates, delete_row


def _scoped(db: Session, current_user: Optional[Dict[str, Any]]):
    query = db.query(models.Counterparty)
    if current_user is None:
        return query
    visible = visibility.visible_manager_ids(db, current_user)
    return visibility.apply_owner_filter(query, visible, models.Counterparty.responsible_manager_id)


def get_counterparties(db: Session, current_user: Optional[Dict[str, Any]] = None):
    return _scoped(db, current_user).order_by(models.Counterparty.name).all()


def get_counterparty(db: Session, counterparty_id: int, current_user: Optional[Dict[str, Any]] = None):
    return _scoped(db, current_user).filter(models.Counterparty.counterparty_id == counterparty_id).first()


def create_counterparty(db: Session, counterparty: schemas.CounterpartyCreate, current_user: Dict[str, Any]):
    responsible_id = counterparty.responsible_manager_id
    if responsible_id is None:
        responsible_id = current_user.get("id")
    db_counterparty = models.Counterparty(
        name=counterparty.name,
        counterparty_type=counterparty.counterparty_type.value,
        responsible_manager_id=responsible_id,
        phone=counterparty.phone,
        email=counterparty.email,
    )
    db.add(db_counterparty)
    db.commit()
    db.refresh(db_counterparty)
    return db_counterparty


def update_counterparty(
    db: Session,
    counterparty_id: int,
    counterparty: schemas.CounterpartyUpdate,
    current_user: Optional[Dict[str, Any]] = None,
):
    db_counterparty = get_counterparty(db, counterparty_id, current_user)
    if db_counterparty:
        apply_updates(db_counterparty, counterparty, exclude=("counterparty_type",))
        if counterparty.counterparty_type is not None:
            db_counterparty.counterparty_type = counterparty.counterparty_type.value
        db.commit()
        db.refresh(db_counterparty)
    return db_counterparty


def delete_counterparty(db: Session, counterparty_id: int, current_user: Optional[Dict[str, Any]] = None) -> bool:
    return delete_row(db, get_counterparty(db, counterparty_id, current_user), "Counterparty")
