"""Compact nested representations embedded in larger payloads."""
from pydantic import BaseModel, ConfigDict


class ManagerSummary(BaseModel):
    manager_id: int
    first_name: str
    last_name: str
    email: str
    role: str
    model_config = ConfigDict(from_attributes=True)


class CounterpartySummary(BaseModel):
    counterparty_id: int
    name: str
    counterparty_type: str
    model_config = ConfigDict(from_attributes=True)


class ProjectSummary(BaseModel):
    project_id: int
    name: str
    main_responsible_manager_id: int | None = None
    model_config = ConfigDict(from_attributes=True)


class SubProjectSummary(BaseModel):
    subproject_id: int
    name: str
    project_id: int | None = None
    model_config = ConfigDict(from_attributes=True)


class FunnelSummary(BaseModel):
    funnel_id: int
    name: str
    model_config = ConfigDict(from_attributes=True)


class FunnelStageSummary(BaseModel):
    funnel_stage_id: int
    name: str
    order: int
    model_config = ConfigDict(from_attributes=True)
