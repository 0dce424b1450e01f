"""
Response envelope helpers.

Every endpoint answers ``{"success": true, "data": ...}`` (or ``message``
for deletes); errors are rendered by the handlers in ``main.py`` as
``{"success": false, "error": ...}``.
"""
from typing import Any, Dict, Optional, Type

from fastapi import HTTPException, status
from pydantic import BaseModel


def dump(schema: Type[BaseModel], obj: Any):
    """Validate ORM rows through ``schema`` and return JSON-ready data."""
    if obj is None:
        return None
    if isinstance(obj, (list, tuple)):
        return [dump(schema, item) for item in obj]
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)


def success(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body


def ok(schema: Type[BaseModel], obj: Any, message: Optional[str] = None) -> Dict[str, Any]:
    return success(dump(schema, obj), message)


def error_body(message: Any) -> Dict[str, Any]:
    return {"success": False, "error": message}


def parse_id(value: Any, message: str = "Invalid ID") -> int:
    """Parse a path/body id, raising 400 ``message`` when it is not an integer."""
    if isinstance(value, bool):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
