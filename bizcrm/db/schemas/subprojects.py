from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

from .catalog import ProductSummary, Service
from .comments import SubProjectComment
from .common import ProjectSummary
from .funnels import SubProjectFunnelSummary, SubProjectFunnelStage
from .tasks import Task


class SubProjectBase(BaseModel):
    name: str
    description: str | None = None
    status: str | None = None
    cost: Decimal = Field(default=Decimal("0"), ge=0)
    sub_project_funnel_id: int | None = None
    sub_project_funnel_stage_id: int | None = None


class SubProjectCreate(SubProjectBase):
    project_id: int | None = None
    parent_subproject_id: int | None = None


class SubProjectUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    status: str | None = None
    cost: Decimal | None = Field(default=None, ge=0)
    sub_project_funnel_id: int | None = None
    sub_project_funnel_stage_id: int | None = None


class SubProjectCounts(BaseModel):
    tasks: int = 0
    products: int = 0
    services: int = 0


class SubProject(BaseModel):
    subproject_id: int
    name: str
    description: str | None = None
    project_id: int | None = None
    parent_subproject_id: int | None = None
    status: str | None = None
    cost: float = 0
    sub_project_funnel_id: int | None = None
    sub_project_funnel_stage_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class SubProjectListItem(SubProject):
    project: ProjectSummary | None = None
    funnel: SubProjectFunnelSummary | None = None
    funnel_stage: SubProjectFunnelStage | None = None
    counts: SubProjectCounts = Field(default_factory=SubProjectCounts, serialization_alias="_count")


class SubProjectProductIn(BaseModel):
    product_id: int | None = None
    quantity: int = Field(default=1, gt=0)


class SubProjectServiceIn(BaseModel):
    service_id: int | None = None
    quantity: float = Field(default=1, gt=0)


class SubProjectProduct(BaseModel):
    id: int
    product_id: int
    quantity: int
    product: ProductSummary | None = None
    model_config = ConfigDict(from_attributes=True)


class SubProjectService(BaseModel):
    id: int
    service_id: int
    quantity: float
    service: Service | None = None
    model_config = ConfigDict(from_attributes=True)


class SubProjectDetail(SubProjectListItem):
    children: list[SubProject] = []
    products: list[SubProjectProduct] = []
    services: list[SubProjectService] = []
    tasks: list[Task] = []
    comments: list[SubProjectComment] = Field(default=[], validation_alias="active_comments")
