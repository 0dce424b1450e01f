"""
Status type API endpoints for sales and subprojects.

Both resources have the same shape, so one builder wires each router.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import catalog as catalog_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import ok, parse_id, success


def build_status_router(kind: str, prefix: str, schema, label: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])
    not_found = f"{label} not found"

    @router.get("")
    def list_status_types(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
        return ok(schema, catalog_repo.get_status_types(db, kind))

    @router.get("/{status_id}")
    def get_status_type(status_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
        db_status = catalog_repo.get_status_type(db, kind, parse_id(status_id))
        if db_status is None:
            raise HTTPException(status_code=404, detail=not_found)
        return ok(schema, db_status)

    @router.post("", status_code=status.HTTP_201_CREATED)
    def create_status_type(
        payload: schemas.StatusTypeCreate,
        db: Session = Depends(get_db),
        user_context=Depends(get_current_user_context),
    ):
        return ok(schema, catalog_repo.create_status_type(db, kind, payload))

    @router.put("/{status_id}")
    def update_status_type(
        status_id: str,
        payload: schemas.StatusTypeUpdate,
        db: Session = Depends(get_db),
        user_context=Depends(get_current_user_context),
    ):
        db_status = catalog_repo.update_status_type(db, kind, parse_id(status_id), payload)
        if db_status is None:
            raise HTTPException(status_code=404, detail=not_found)
        return ok(schema, db_status)

    @router.delete("/{status_id}")
    def delete_status_type(status_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
        if not catalog_repo.delete_status_type(db, kind, parse_id(status_id)):
            raise HTTPException(status_code=404, detail=not_found)
        return success(message=f"{label} deleted successfully")

    return router


sale_status_router = build_status_router("sale", "/sale-status-types", schemas.SaleStatusType, "Sale status type")
subproject_status_router = build_status_router(
    "subproject", "/subproject-status-types", schemas.SubProjectStatusType, "Sub-project status type"
)
