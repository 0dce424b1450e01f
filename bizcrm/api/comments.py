"""
Comment API endpoints for project and subproject threads.

Only the author may edit or delete a comment. Deletion is soft.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import comments as comment_repo
from bizcrm.db.repositories import projects as project_repo
from bizcrm.db.repositories import subprojects as subproject_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.permissions import is_comment_author
from bizcrm.api.responses import ok, parse_id, success

logger = logging.getLogger("bizcrm.comments")

router = APIRouter(prefix="/comments", tags=["comments"])

COMMENT_NOT_FOUND = "Comment not found"


def _register_thread(kind: str, path: str, schema, parent_label: str, get_parent):
    """Attach list/get/create/update/delete routes for one comment thread."""
    invalid_parent = f"Invalid {parent_label.lower()} ID"
    parent_not_found = f"{parent_label} not found"

    def _parent_id(db: Session, raw_id: str, current_user) -> int:
        parent_id = parse_id(raw_id, invalid_parent)
        if get_parent(db, parent_id, current_user=current_user) is None:
            raise HTTPException(status_code=404, detail=parent_not_found)
        return parent_id

    def _comment(db: Session, parent_id: int, raw_id: str):
        db_comment = comment_repo.get_comment(db, kind, parse_id(raw_id, "Invalid comment ID"), parent_id=parent_id)
        if db_comment is None:
            raise HTTPException(status_code=404, detail=COMMENT_NOT_FOUND)
        return db_comment

    @router.get(f"/{path}/{{parent_id}}", name=f"list_{kind}_comments")
    def list_comments(parent_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
        _, current_user = user_context
        pid = _parent_id(db, parent_id, current_user)
        return ok(schema, comment_repo.get_comments(db, kind, pid))

    @router.get(f"/{path}/{{parent_id}}/{{comment_id}}", name=f"get_{kind}_comment")
    def get_comment(
        parent_id: str,
        comment_id: str,
        db: Session = Depends(get_db),
        user_context=Depends(get_current_user_context),
    ):
        _, current_user = user_context
        pid = _parent_id(db, parent_id, current_user)
        return ok(schema, _comment(db, pid, comment_id))

    @router.post(f"/{path}/{{parent_id}}", status_code=status.HTTP_201_CREATED, name=f"create_{kind}_comment")
    def create_comment(
        parent_id: str,
        comment: schemas.CommentCreate,
        db: Session = Depends(get_db),
        user_context=Depends(get_current_user_context),
    ):
        _, current_user = user_context
        pid = parse_id(parent_id, invalid_parent)
        if not (comment.content and comment.content.strip()) and comment.file is None:
            raise HTTPException(status_code=400, detail="Content or file required")
        if get_parent(db, pid, current_user=current_user) is None:
            raise HTTPException(status_code=404, detail=parent_not_found)
        db_comment = comment_repo.create_comment(db, kind, pid, current_user["id"], comment)
        return ok(schema, db_comment)

    @router.put(f"/{path}/{{parent_id}}/{{comment_id}}", name=f"update_{kind}_comment")
    def update_comment(
        parent_id: str,
        comment_id: str,
        comment: schemas.CommentUpdate,
        db: Session = Depends(get_db),
        user_context=Depends(get_current_user_context),
    ):
        _, current_user = user_context
        pid = _parent_id(db, parent_id, current_user)
        db_comment = _comment(db, pid, comment_id)
        if not is_comment_author(db_comment, current_user):
            raise HTTPException(status_code=403, detail="You can only edit your own comments")
        return ok(schema, comment_repo.update_comment(db, db_comment, comment))

    @router.delete(f"/{path}/{{parent_id}}/{{comment_id}}", name=f"delete_{kind}_comment")
    def delete_comment(
        parent_id: str,
        comment_id: str,
        db: Session = Depends(get_db),
        user_context=Depends(get_current_user_context),
    ):
        _, current_user = user_context
        pid = _parent_id(db, parent_id, current_user)
        db_comment = _comment(db, pid, comment_id)
        if not is_comment_author(db_comment, current_user):
            raise HTTPException(status_code=403, detail="You can only delete your own comments")
        comment_repo.soft_delete_comment(db, db_comment)
        return success(message="Comment deleted successfully")


_register_thread("project", "projects", schemas.ProjectComment, "Project", project_repo.get_project)
_register_thread("subproject", "subprojects", schemas.SubProjectComment, "Subproject", subproject_repo.get_subproject)


@router.delete("/{comment_id}")
def delete_any_comment(comment_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    _, current_user = user_context
    db_comment = comment_repo.find_comment(db, parse_id(comment_id, "Invalid comment ID"))
    if db_comment is None:
        raise HTTPException(status_code=404, detail=COMMENT_NOT_FOUND)
    if not is_comment_author(db_comment, current_user):
        logger.info(f"Manager {current_user.get('id')} denied deleting comment {db_comment.comment_id}")
        raise HTTPException(status_code=403, detail="You can only delete your own comments")
    comment_repo.soft_delete_comment(db, db_comment)
    return success(message="Comment deleted successfully")
