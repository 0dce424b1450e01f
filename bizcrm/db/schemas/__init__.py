"""
Domain-split Pydantic schemas with a single aggregator.

Import order matters: summaries and catalogue types come first so the
larger payloads that embed them can be built.
"""

from .common import (
    ManagerSummary,
    CounterpartySummary,
    ProjectSummary,
    SubProjectSummary,
    FunnelSummary,
    FunnelStageSummary,
)
from .managers import normalize_email, ManagerBase, ManagerCreate, ManagerUpdate, Manager, ManagerDetail
from .auth import LoginRequest, LoginResponse, ProfileUpdate, PasswordChange
from .catalog import (
    Unit,
    UnitCreate,
    UnitUpdate,
    WarehouseBase,
    WarehouseCreate,
    WarehouseUpdate,
    Warehouse,
    ServiceBase,
    ServiceCreate,
    ServiceUpdate,
    Service,
    StockEntry,
    ProductStock,
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductSummary,
    Product,
    StatusTypeCreate,
    StatusTypeUpdate,
    SaleStatusType,
    SubProjectStatusType,
    CounterpartyType,
    CounterpartyBase,
    CounterpartyCreate,
    CounterpartyUpdate,
    Counterparty,
)
from .funnels import (
    FunnelStageBase,
    FunnelStageCreate,
    FunnelStageUpdate,
    FunnelStage,
    FunnelStageWithFunnel,
    FunnelCreate,
    FunnelUpdate,
    Funnel,
    SubProjectFunnelSummary,
    SubProjectFunnelStageBase,
    SubProjectFunnelStageCreate,
    SubProjectFunnelStageUpdate,
    SubProjectFunnelStage,
    SubProjectFunnelStageWithFunnel,
    SubProjectFunnel,
    StageOrder,
)
from .tasks import TaskStatus, TASK_STATUSES, TaskBase, TaskCreate, TaskUpdate, TaskStatusUpdate, Task, TaskDetail
from .comments import CommentFile, CommentCreate, CommentUpdate, Comment, ProjectComment, SubProjectComment
from .sales import (
    SaleProductLine,
    SaleServiceLine,
    SaleBase,
    SaleCreate,
    SaleUpdate,
    SaleProduct,
    SaleService,
    Sale,
)
from .subprojects import (
    SubProjectBase,
    SubProjectCreate,
    SubProjectUpdate,
    SubProjectCounts,
    SubProject,
    SubProjectListItem,
    SubProjectProductIn,
    SubProjectServiceIn,
    SubProjectProduct,
    SubProjectService,
    SubProjectDetail,
)
from .projects import (
    ProjectBase,
    ProjectCreate,
    ProjectUpdate,
    ProjectCounts,
    Project,
    ProjectListItem,
    ProjectProductIn,
    ProjectServiceIn,
    ProjectProduct,
    ProjectService,
    ProjectDetail,
    ManagerAssign,
)
