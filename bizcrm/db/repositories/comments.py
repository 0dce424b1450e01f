"""
Comment repository functions for project and subproject threads.

Deleting a comment only sets ``is_deleted``; deleted comments are invisible
to every read function here.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from bizcrm.db import models, schemas

logger = logging.getLogger(__name__)

# kind -> (comment model, parent foreign key column name)
COMMENT_KINDS = {
    "project": (models.ProjectComment, "project_id"),
    "subproject": (models.SubProjectComment, "subproject_id"),
}


def get_comments(db: Session, kind: str, parent_id: int):
    model, parent_field = COMMENT_KINDS[kind]
    return (
        db.query(model)
        .filter(getattr(model, parent_field) == parent_id, model.is_deleted.is_(False))
        .order_by(model.created_at, model.comment_id)
        .all()
    )


def get_comment(db: Session, kind: str, comment_id: int, parent_id: Optional[int] = None):
    model, parent_field = COMMENT_KINDS[kind]
    query = db.query(model).filter(model.comment_id == comment_id, model.is_deleted.is_(False))
    if parent_id is not None:
        query = query.filter(getattr(model, parent_field) == parent_id)
    return query.first()


def find_comment(db: Session, comment_id: int):
    """Look the id up among project comments first, then subproject comments."""
    for kind in ("project", "subproject"):
        db_comment = get_comment(db, kind, comment_id)
        if db_comment is not None:
            return db_comment
    return None


def _apply_file(db_comment, file: Optional[schemas.CommentFile]):
    if file is None:
        return
    db_comment.file_name = file.name
    db_comment.file_type = file.type
    db_comment.file_url = file.url


def create_comment(db: Session, kind: str, parent_id: int, manager_id: int, comment: schemas.CommentCreate):
    model, parent_field = COMMENT_KINDS[kind]
    db_comment = model(**{parent_field: parent_id}, manager_id=manager_id, content=comment.content or "")
    _apply_file(db_comment, comment.file)
    db.add(db_comment)
    db.commit()
    db.refresh(db_comment)
    return db_comment


def update_comment(db: Session, db_comment, comment: schemas.CommentUpdate):
    if comment.content is not None:
        db_comment.content = comment.content
    _apply_file(db_comment, comment.file)
    db.commit()
    db.refresh(db_comment)
    return db_comment


def soft_delete_comment(db: Session, db_comment) -> bool:
    db_comment.is_deleted = True
    db.commit()
    logger.info(f"Comment {db_comment.comment_id} marked as deleted")
    return True
