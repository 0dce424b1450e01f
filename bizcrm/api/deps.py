"""
API dependency helpers.

Resolves the bearer token into the calling manager and provides role
guards for routes.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import models
from bizcrm.db.database import get_db
from bizcrm.utils.security import InvalidTokenError, decode_access_token

logger = logging.getLogger("bizcrm.auth")

# Contract:
# Returns (sqlalchemy Manager model, current_user_context_dict)
# Raises 401 when no token is supplied, 403 when it does not verify.


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def build_user_context(manager: models.Manager) -> Dict[str, Any]:
    # Role comes from the stored row so demotions apply to live tokens
    return {
        "id": manager.manager_id,
        "email": manager.email,
        "role": manager.role,
        "first_name": manager.first_name,
        "last_name": manager.last_name,
    }


def get_current_user_context(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None),
) -> Tuple[models.Manager, Dict[str, Any]]:
    token = extract_bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required")
    try:
        claims = decode_access_token(token)
    except InvalidTokenError as e:
        logger.info(f"Rejected access token: {e}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")
    manager = db.get(models.Manager, claims.manager_id)
    if manager is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account not found")
    return manager, build_user_context(manager)


def require_roles(*roles: str):
    """Dependency factory admitting only callers whose role is in ``roles``."""
    allowed = frozenset(roles)

    def _dependency(user_context=Depends(get_current_user_context)):
        _, current_user = user_context
        if current_user.get("role") not in allowed:
            logger.info(
                f"Permission denied for manager {current_user.get('id')} (role={current_user.get('role')})"
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user_context

    return _dependency
