"""
Manager roles and the row-visibility policy attached to each of them.

Keep role names here so schemas, guards and the visibility filter agree on
the same vocabulary.
"""

from typing import FrozenSet
from enum import Enum


ROLE_ADMIN = "admin"
ROLE_HEAD = "head"
ROLE_MANAGER = "manager"

# Row visibility for each role:
#   all          - no filter
#   hierarchy    - own rows plus rows of every subordinate
#   own          - own rows only
VISIBILITY_ALL = "all"
VISIBILITY_HIERARCHY = "hierarchy"
VISIBILITY_OWN = "own"

ROLE_VISIBILITY = {
    ROLE_ADMIN: VISIBILITY_ALL,
    ROLE_HEAD: VISIBILITY_HIERARCHY,
    ROLE_MANAGER: VISIBILITY_OWN,
}

# Roles allowed to create, edit and delete manager accounts
MANAGE_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN})


class RoleEnum(str, Enum):
    """Enum for manager roles used in schemas and validation."""
    admin = ROLE_ADMIN
    head = ROLE_HEAD
    manager = ROLE_MANAGER


def get_role_visibility(role: str) -> str:
    """
    Get the visibility policy for a given role.

    Args:
        role: The role name (admin, head, manager)

    Returns:
        One of VISIBILITY_ALL, VISIBILITY_HIERARCHY, VISIBILITY_OWN

    Raises:
        ValueError: If role is not recognized
    """
    if role not in ROLE_VISIBILITY:
        raise ValueError(f"Unknown role: {role}. Allowed roles: {sorted(ROLE_VISIBILITY.keys())}")
    return ROLE_VISIBILITY[role]


def role_sees_everything(role: str | None) -> bool:
    return role == ROLE_ADMIN

