from datetime import datetime
from decimal import Decimal
from typing import Any
from pydantic import BaseModel, ConfigDict, Field

from .catalog import ProductSummary, Service
from .comments import ProjectComment
from .common import CounterpartySummary, FunnelSummary, FunnelStageSummary, ManagerSummary
from .sales import Sale
from .subprojects import SubProject
from .tasks import Task


class ProjectBase(BaseModel):
    name: str
    description: str | None = None
    main_responsible_manager_id: int | None = None
    counterparty_id: int | None = None
    funnel_id: int | None = None
    funnel_stage_id: int | None = None
    forecast_amount: Decimal = Field(default=Decimal("0"), ge=0)


class ProjectCreate(ProjectBase):
    secondary_responsible_manager_ids: list[int] = []


class ProjectUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    main_responsible_manager_id: int | None = None
    counterparty_id: int | None = None
    funnel_id: int | None = None
    funnel_stage_id: int | None = None
    forecast_amount: Decimal | None = Field(default=None, ge=0)
    secondary_responsible_manager_ids: list[int] | None = None


class ProjectCounts(BaseModel):
    subprojects: int = 0
    tasks: int = 0
    sales: int = 0
    comments: int = 0


class Project(BaseModel):
    project_id: int
    name: str
    description: str | None = None
    main_responsible_manager_id: int | None = None
    counterparty_id: int | None = None
    funnel_id: int | None = None
    funnel_stage_id: int | None = None
    forecast_amount: float = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class ProjectListItem(Project):
    main_responsible_manager: ManagerSummary | None = None
    secondary_responsible_managers: list[ManagerSummary] = []
    counterparty: CounterpartySummary | None = None
    funnel: FunnelSummary | None = None
    funnel_stage: FunnelStageSummary | None = None
    counts: ProjectCounts = Field(default_factory=ProjectCounts, serialization_alias="_count")


class ProjectProductIn(BaseModel):
    product_id: int | None = None
    quantity: int | None = Field(default=None, gt=0)


class ProjectServiceIn(BaseModel):
    service_id: int | None = None
    quantity: float = Field(default=1, gt=0)


class ProjectProduct(BaseModel):
    project_product_id: int
    project_id: int
    product_id: int
    quantity: int
    created_at: datetime | None = None
    product: ProductSummary | None = None
    model_config = ConfigDict(from_attributes=True)


class ProjectService(BaseModel):
    project_service_id: int
    project_id: int
    service_id: int
    quantity: float
    created_at: datetime | None = None
    service: Service | None = None
    model_config = ConfigDict(from_attributes=True)


class ProjectDetail(ProjectListItem):
    subprojects: list[SubProject] = []
    tasks: list[Task] = []
    sales: list[Sale] = []
    products: list[ProjectProduct] = []
    services: list[ProjectService] = []
    comments: list[ProjectComment] = Field(default=[], validation_alias="active_comments")


class ManagerAssign(BaseModel):
    # Accepts numeric strings; the router rejects anything that is not an id
    manager_id: Any = None
