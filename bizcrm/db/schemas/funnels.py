from datetime import datetime
from pydantic import BaseModel, ConfigDict

from .common import FunnelSummary


class FunnelStageBase(BaseModel):
    name: str
    funnel_id: int
    order: int = 0


class FunnelStageCreate(FunnelStageBase):
    pass


class FunnelStageUpdate(BaseModel):
    name: str | None = None
    funnel_id: int | None = None
    order: int | None = None


class FunnelStage(FunnelStageBase):
    funnel_stage_id: int
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class FunnelStageWithFunnel(FunnelStage):
    funnel: FunnelSummary | None = None


class FunnelCreate(BaseModel):
    name: str


class FunnelUpdate(BaseModel):
    name: str | None = None


class Funnel(BaseModel):
    funnel_id: int
    name: str
    created_at: datetime | None = None
    stages: list[FunnelStage] = []
    model_config = ConfigDict(from_attributes=True)


class SubProjectFunnelSummary(BaseModel):
    sub_project_funnel_id: int
    name: str
    model_config = ConfigDict(from_attributes=True)


class SubProjectFunnelStageBase(BaseModel):
    name: str
    sub_project_funnel_id: int
    order: int = 0


class SubProjectFunnelStageCreate(SubProjectFunnelStageBase):
    pass


class SubProjectFunnelStageUpdate(BaseModel):
    name: str | None = None
    sub_project_funnel_id: int | None = None
    order: int | None = None


class SubProjectFunnelStage(SubProjectFunnelStageBase):
    sub_project_funnel_stage_id: int
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class SubProjectFunnelStageWithFunnel(SubProjectFunnelStage):
    funnel: SubProjectFunnelSummary | None = None


class SubProjectFunnel(BaseModel):
    sub_project_funnel_id: int
    name: str
    created_at: datetime | None = None
    stages: list[SubProjectFunnelStage] = []
    model_config = ConfigDict(from_attributes=True)


class StageOrder(BaseModel):
    stage_id: int
    order: int
