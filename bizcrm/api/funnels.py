"""
Funnel API endpoints for projects (``/funnels``) and subprojects
(``/subproject-funnels``), including their stages.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from bizcrm.db import schemas
from bizcrm.db.database import get_db
from bizcrm.db.repositories import funnels as funnel_repo
from bizcrm.api.deps import get_current_user_context
from bizcrm.api.responses import ok, parse_id, success

router = APIRouter(prefix="/funnels", tags=["funnels"])
subproject_router = APIRouter(prefix="/subproject-funnels", tags=["subproject-funnels"])


# Project funnel stages

@router.get("/stages/all")
def list_funnel_stages(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    return ok(schemas.FunnelStageWithFunnel, funnel_repo.get_funnel_stages(db))


@router.get("/stages/{stage_id}")
def get_funnel_stage(stage_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    db_stage = funnel_repo.get_funnel_stage(db, parse_id(stage_id))
    if db_stage is None:
        raise HTTPException(status_code=404, detail="Funnel stage not found")
    return ok(schemas.FunnelStageWithFunnel, db_stage)


@router.post("/stages", status_code=status.HTTP_201_CREATED)
def create_funnel_stage(
    stage: schemas.FunnelStageCreate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    if funnel_repo.get_funnel(db, stage.funnel_id) is None:
        raise HTTPException(status_code=404, detail="Funnel not found")
    return ok(schemas.FunnelStageWithFunnel, funnel_repo.create_funnel_stage(db, stage))


@router.put("/stages/{stage_id}")
def update_funnel_stage(
    stage_id: str,
    stage: schemas.FunnelStageUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    db_stage = funnel_repo.update_funnel_stage(db, parse_id(stage_id), stage)
    if db_stage is None:
        raise HTTPException(status_code=404, detail="Funnel stage not found")
    return ok(schemas.FunnelStageWithFunnel, db_stage)


@router.delete("/stages/{stage_id}")
def delete_funnel_stage(stage_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    if not funnel_repo.delete_funnel_stage(db, parse_id(stage_id)):
        raise HTTPException(status_code=404, detail="Funnel stage not found")
    return success(message="Funnel stage deleted successfully")


# Project funnels

@router.get("")
def list_funnels(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    return ok(schemas.Funnel, funnel_repo.get_funnels(db))


@router.get("/{funnel_id}")
def get_funnel(funnel_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    db_funnel = funnel_repo.get_funnel(db, parse_id(funnel_id))
    if db_funnel is None:
        raise HTTPException(status_code=404, detail="Funnel not found")
    return ok(schemas.Funnel, db_funnel)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_funnel(funnel: schemas.FunnelCreate, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    return ok(schemas.Funnel, funnel_repo.create_funnel(db, funnel))


@router.put("/{funnel_id}")
def update_funnel(
    funnel_id: str,
    funnel: schemas.FunnelUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    db_funnel = funnel_repo.update_funnel(db, parse_id(funnel_id), funnel)
    if db_funnel is None:
        raise HTTPException(status_code=404, detail="Funnel not found")
    return ok(schemas.Funnel, db_funnel)


@router.delete("/{funnel_id}")
def delete_funnel(funnel_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    if not funnel_repo.delete_funnel(db, parse_id(funnel_id)):
        raise HTTPException(status_code=404, detail="Funnel not found")
    return success(message="Funnel deleted successfully")


# Subproject funnel stages

@subproject_router.get("/stages/all")
def list_subproject_funnel_stages(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    return ok(schemas.SubProjectFunnelStageWithFunnel, funnel_repo.get_subproject_funnel_stages(db))


@subproject_router.get("/stages/{stage_id}")
def get_subproject_funnel_stage(stage_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    db_stage = funnel_repo.get_subproject_funnel_stage(db, parse_id(stage_id))
    if db_stage is None:
        raise HTTPException(status_code=404, detail="Sub-project funnel stage not found")
    return ok(schemas.SubProjectFunnelStageWithFunnel, db_stage)


@subproject_router.post("/stages", status_code=status.HTTP_201_CREATED)
def create_subproject_funnel_stage(
    stage: schemas.SubProjectFunnelStageCreate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    if funnel_repo.get_subproject_funnel(db, stage.sub_project_funnel_id) is None:
        raise HTTPException(status_code=404, detail="Sub-project funnel not found")
    return ok(schemas.SubProjectFunnelStageWithFunnel, funnel_repo.create_subproject_funnel_stage(db, stage))


@subproject_router.put("/stages/{stage_id}")
def update_subproject_funnel_stage(
    stage_id: str,
    stage: schemas.SubProjectFunnelStageUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    db_stage = funnel_repo.update_subproject_funnel_stage(db, parse_id(stage_id), stage)
    if db_stage is None:
        raise HTTPException(status_code=404, detail="Sub-project funnel stage not found")
    return ok(schemas.SubProjectFunnelStageWithFunnel, db_stage)


@subproject_router.delete("/stages/{stage_id}")
def delete_subproject_funnel_stage(stage_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    if not funnel_repo.delete_subproject_funnel_stage(db, parse_id(stage_id)):
        raise HTTPException(status_code=404, detail="Sub-project funnel stage not found")
    return success(message="Sub-project funnel stage deleted successfully")


# Subproject funnels

@subproject_router.get("")
def list_subproject_funnels(db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    return ok(schemas.SubProjectFunnel, funnel_repo.get_subproject_funnels(db))


@subproject_router.get("/{funnel_id}")
def get_subproject_funnel(funnel_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    db_funnel = funnel_repo.get_subproject_funnel(db, parse_id(funnel_id))
    if db_funnel is None:
        raise HTTPException(status_code=404, detail="Sub-project funnel not found")
    return ok(schemas.SubProjectFunnel, db_funnel)


@subproject_router.post("", status_code=status.HTTP_201_CREATED)
def create_subproject_funnel(
    funnel: schemas.FunnelCreate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    return ok(schemas.SubProjectFunnel, funnel_repo.create_subproject_funnel(db, funnel))


@subproject_router.put("/{funnel_id}")
def update_subproject_funnel(
    funnel_id: str,
    funnel: schemas.FunnelUpdate,
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    db_funnel = funnel_repo.update_subproject_funnel(db, parse_id(funnel_id), funnel)
    if db_funnel is None:
        raise HTTPException(status_code=404, detail="Sub-project funnel not found")
    return ok(schemas.SubProjectFunnel, db_funnel)


@subproject_router.delete("/{funnel_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subproject_funnel(funnel_id: str, db: Session = Depends(get_db), user_context=Depends(get_current_user_context)):
    if not funnel_repo.delete_subproject_funnel(db, parse_id(funnel_id)):
        raise HTTPException(status_code=404, detail="Sub-project funnel not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@subproject_router.put("/{funnel_id}/reorder-stages")
def reorder_subproject_funnel_stages(
    funnel_id: str,
    orders: List[schemas.StageOrder],
    db: Session = Depends(get_db),
    user_context=Depends(get_current_user_context),
):
    fid = parse_id(funnel_id)
    if funnel_repo.get_subproject_funnel(db, fid) is None:
        raise HTTPException(status_code=404, detail="Sub-project funnel not found")
    try:
        stages = funnel_repo.reorder_subproject_funnel_stages(db, fid, orders)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ok(schemas.SubProjectFunnelStageWithFunnel, stages)
