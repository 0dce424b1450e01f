"""
Funnel repository functions.

Covers project funnels and subproject funnels together with their ordered
stages. Funnels are shared configuration and are not row-filtered.
"""
from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from bizcrm.db import models, schemas
from .common import apply_updates, delete_row


# Project funnels

def get_funnels(db: Session):
    return db.query(models.Funnel).order_by(models.Funnel.funnel_id).all()


def get_funnel(db: Session, funnel_id: int):
    return db.query(models.Funnel).filter(models.Funnel.funnel_id == funnel_id).first()


def create_funnel(db: Session, funnel: schemas.FunnelCreate):
    db_funnel = models.Funnel(name=funnel.name)
    db.add(db_funnel)
    db.commit()
    db.refresh(db_funnel)
    return db_funnel


def update_funnel(db: Session, funnel_id: int, funnel: schemas.FunnelUpdate):
    db_funnel = get_funnel(db, funnel_id)
    if db_funnel:
        apply_updates(db_funnel, funnel)
        db.commit()
        db.refresh(db_funnel)
    return db_funnel


def delete_funnel(db: Session, funnel_id: int) -> bool:
    return delete_row(db, get_funnel(db, funnel_id), "Funnel")


def get_funnel_stages(db: Session):
    return (
        db.query(models.FunnelStage)
        .order_by(models.FunnelStage.funnel_id, models.FunnelStage.order)
        .all()
    )


def get_funnel_stage(db: Session, stage_id: int):
    return db.query(models.FunnelStage).filter(models.FunnelStage.funnel_stage_id == stage_id).first()


def create_funnel_stage(db: Session, stage: schemas.FunnelStageCreate):
    db_stage = models.FunnelStage(**stage.model_dump())
    db.add(db_stage)
    db.commit()
    db.refresh(db_stage)
    return db_stage


def update_funnel_stage(db: Session, stage_id: int, stage: schemas.FunnelStageUpdate):
    db_stage = get_funnel_stage(db, stage_id)
    if db_stage:
        apply_updates(db_stage, stage)
        db.commit()
        db.refresh(db_stage)
    return db_stage


def delete_funnel_stage(db: Session, stage_id: int) -> bool:
    return delete_row(db, get_funnel_stage(db, stage_id), "Funnel stage")


# Subproject funnels

def get_subproject_funnels(db: Session):
    return db.query(models.SubProjectFunnel).order_by(models.SubProjectFunnel.sub_project_funnel_id).all()


def get_subproject_funnel(db: Session, funnel_id: int):
    return (
        db.query(models.SubProjectFunnel)
        .filter(models.SubProjectFunnel.sub_project_funnel_id == funnel_id)
        .first()
    )


def create_subproject_funnel(db: Session, funnel: schemas.FunnelCreate):
    db_funnel = models.SubProjectFunnel(name=funnel.name)
    db.add(db_funnel)
    db.commit()
    db.refresh(db_funnel)
    return db_funnel


def update_subproject_funnel(db: Session, funnel_id: int, funnel: schemas.FunnelUpdate):
    db_funnel = get_subproject_funnel(db, funnel_id)
    if db_funnel:
        apply_updates(db_funnel, funnel)
        db.commit()
        db.refresh(db_funnel)
    return db_funnel


def delete_subproject_funnel(db: Session, funnel_id: int) -> bool:
    return delete_row(db, get_subproject_funnel(db, funnel_id), "Sub-project funnel")


def get_subproject_funnel_stages(db: Session, funnel_id: int | None = None):
    query = db.query(models.SubProjectFunnelStage)
    if funnel_id is not None:
        query = query.filter(models.SubProjectFunnelStage.sub_project_funnel_id == funnel_id)
    return query.order_by(
        models.SubProjectFunnelStage.sub_project_funnel_id,
        models.SubProjectFunnelStage.order,
    ).all()


def get_subproject_funnel_stage(db: Session, stage_id: int):
    return (
        db.query(models.SubProjectFunnelStage)
        .filter(models.SubProjectFunnelStage.sub_project_funnel_stage_id == stage_id)
        .first()
    )


def create_subproject_funnel_stage(db: Session, stage: schemas.SubProjectFunnelStageCreate):
    db_stage = models.SubProjectFunnelStage(**stage.model_dump())
    db.add(db_stage)
    db.commit()
    db.refresh(db_stage)
    return db_stage


def update_subproject_funnel_stage(db: Session, stage_id: int, stage: schemas.SubProjectFunnelStageUpdate):
    db_stage = get_subproject_funnel_stage(db, stage_id)
    if db_stage:
        apply_updates(db_stage, stage)
        db.commit()
        db.refresh(db_stage)
    return db_stage


def delete_subproject_funnel_stage(db: Session, stage_id: int) -> bool:
    return delete_row(db, get_subproject_funnel_stage(db, stage_id), "Sub-project funnel stage")


def reorder_subproject_funnel_stages(db: Session, funnel_id: int, orders: List[schemas.StageOrder]):
    """Apply new ``order`` values to stages of one funnel.

    All stages are validated before anything is written, so a stage from a
    different funnel leaves the whole funnel untouched.
    """
    stage_ids = [item.stage_id for item in orders]
    stages = {
        s.sub_project_funnel_stage_id: s
        for s in db.query(models.SubProjectFunnelStage)
        .filter(models.SubProjectFunnelStage.sub_project_funnel_stage_id.in_(stage_ids))
        .all()
    } if stage_ids else {}
    for item in orders:
        db_stage = stages.get(item.stage_id)
        if db_stage is None or db_stage.sub_project_funnel_id != funnel_id:
            raise ValueError(f"Stage {item.stage_id} does not belong to this funnel")
    for item in orders:
        stages[item.stage_id].order = item.order
    db.commit()
    return get_subproject_funnel_stages(db, funnel_id)
