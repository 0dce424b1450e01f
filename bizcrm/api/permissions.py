"""
Permission checks for row-level edits.

Key helpers:
- is_admin(current_user)
- can_edit_task(task, current_user)
- can_patch_task(task, current_user)
- can_change_task_status(task, current_user)
- is_comment_author(comment, current_user)
"""
from typing import Any, Dict, Optional

from bizcrm.utils.roles import role_sees_everything


def is_admin(current_user: Optional[Dict[str, Any]]) -> bool:
    return bool(current_user) and role_sees_everything(current_user.get("role"))


def _user_id(current_user: Optional[Dict[str, Any]]):
    return (current_user or {}).get("id")


def can_edit_task(task, current_user: Optional[Dict[str, Any]]) -> bool:
    """Full replacement is reserved for the creator (or an admin).

    A task whose creator account is gone is open to anyone who can see it.
    """
    if task is None or not current_user:
        return False
    if is_admin(current_user) or task.creator_manager_id is None:
        return True
    return task.creator_manager_id == _user_id(current_user)


def can_patch_task(task, current_user: Optional[Dict[str, Any]]) -> bool:
    """Partial edits are open to the creator and the assignee."""
    if task is None or not current_user:
        return False
    uid = _user_id(current_user)
    return is_admin(current_user) or uid in (task.creator_manager_id, task.responsible_manager_id)


def can_change_task_status(task, current_user: Optional[Dict[str, Any]]) -> bool:
    return can_patch_task(task, current_user)


def is_comment_author(comment, current_user: Optional[Dict[str, Any]]) -> bool:
    if comment is None or not current_user:
        return False
    return comment.manager_id == _user_id(current_user)
