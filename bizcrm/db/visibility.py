"""
Hierarchy-based row visibility for database queries.

A manager's visible set is derived from their role:

- admin sees every row (no filter is applied);
- head sees rows owned by themself or by anyone below them in the
  supervisor graph;
- manager sees only their own rows.

The helpers here compute that set once per call and widen a query's WHERE
clause with ``column IN (...)`` conditions.
"""
from collections import deque
from typing import Any, Dict, List, Optional, Set

from sqlalchemy import or_, false
from sqlalchemy.orm import Session

from bizcrm.utils.roles import (
    VISIBILITY_ALL,
    VISIBILITY_HIERARCHY,
    get_role_visibility,
)
from . import models


def get_subordinate_ids(db: Session, manager_id: int) -> List[int]:
    """Return ids of every manager below ``manager_id`` in the hierarchy.

    Breadth-first over supervisor -> subordinate edges. The starting manager
    is never included and cycles in the graph terminate the walk.
    """
    seen: Set[int] = {manager_id}
    ordered: List[int] = []
    frontier = deque([manager_id])
    table = models.manager_hierarchy
    while frontier:
        # Expand one level per query
        level = list(frontier)
        frontier.clear()
        rows = db.query(table.c.subordinate_id).filter(table.c.supervisor_id.in_(level)).all()
        for (subordinate_id,) in rows:
            if subordinate_id in seen:
                continue
            seen.add(subordinate_id)
            ordered.append(subordinate_id)
            frontier.append(subordinate_id)
    return ordered


def visible_manager_ids(db: Session, current_user: Optional[Dict[str, Any]]) -> Optional[Set[int]]:
    """Return the manager ids whose rows the user may see, or None for "all".

    A missing user or unknown role sees nothing.
    """
    if not current_user:
        return set()
    try:
        policy = get_role_visibility(current_user.get("role"))
    except ValueError:
        return set()
    if policy == VISIBILITY_ALL:
        return None
    user_id = current_user.get("id")
    if user_id is None:
        return set()
    if policy == VISIBILITY_HIERARCHY:
        return {user_id, *get_subordinate_ids(db, user_id)}
    return {user_id}


def owner_clause(visible: Optional[Set[int]], *columns):
    """Build ``col1 IN visible OR col2 IN visible ...`` (None when unrestricted)."""
    if visible is None:
        return None
    if not visible:
        return false()
    ids = sorted(visible)
    return or_(*[column.in_(ids) for column in columns])


def project_clause(visible: Optional[Set[int]]):
    """Projects are visible through their main manager or any secondary manager."""
    if visible is None:
        return None
    if not visible:
        return false()
    ids = sorted(visible)
    return or_(
        models.Project.main_responsible_manager_id.in_(ids),
        models.Project.manager_links.any(models.ProjectManager.manager_id.in_(ids)),
    )


def subproject_clause(visible: Optional[Set[int]]):
    """Subprojects follow the visibility of their project."""
    clause = project_clause(visible)
    if clause is None:
        return None
    return models.SubProject.project.has(clause)


def apply_owner_filter(query, visible: Optional[Set[int]], *columns):
    """Apply ``owner_clause`` to a query when the user is restricted."""
    clause = owner_clause(visible, *columns)
    return query if clause is None else query.filter(clause)


def apply_project_filter(query, visible: Optional[Set[int]]):
    clause = project_clause(visible)
    return query if clause is None else query.filter(clause)


def apply_subproject_filter(query, visible: Optional[Set[int]]):
    clause = subproject_clause(visible)
    return query if clause is None else query.filter(clause)
