"""Small helpers shared by the repository modules."""
from __future__ import annotations

from typing import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bizcrm.db.errors import ConflictError


def apply_updates(db_obj, payload, exclude: Iterable[str] = ()):
    """Copy explicitly-set fields of a pydantic payload onto an ORM row."""
    skip = set(exclude)
    update_data = payload.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if key in skip:
            continue
        setattr(db_obj, key, value)
    return db_obj


def delete_row(db: Session, db_obj, label: str) -> bool:
    """Delete a row, reporting FK violations as ``ConflictError``."""
    if db_obj is None:
        return False
    try:
        db.delete(db_obj)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"{label} is still referenced by other records") from e
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete {label.lower()}: {str(e)}")
    return True
