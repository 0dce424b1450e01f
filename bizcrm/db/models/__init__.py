"""
Domain-split SQLAlchemy models with a single aggregator.

Import models from here (`from bizcrm.db import models`) so that every
mapper is registered before relationships are resolved.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .managers import Manager, manager_hierarchy
from .catalog import (
    Unit,
    Warehouse,
    Product,
    ProductStock,
    Service,
    SaleStatusType,
    SubProjectStatusType,
    Counterparty,
)
from .funnels import Funnel, FunnelStage, SubProjectFunnel, SubProjectFunnelStage
from .projects import (
    Project,
    ProjectManager,
    ProjectProduct,
    ProjectService,
    SubProject,
    SubProjectProduct,
    SubProjectService,
)
from .tasks import Task
from .sales import Sale, SaleProduct, SaleService
from .comments import ProjectComment, SubProjectComment

__all__ = [
    # base
    "Base",
    "now_utc",
    # people
    "Manager",
    "manager_hierarchy",
    # catalogue
    "Unit",
    "Warehouse",
    "Product",
    "ProductStock",
    "Service",
    "SaleStatusType",
    "SubProjectStatusType",
    "Counterparty",
    # funnels
    "Funnel",
    "FunnelStage",
    "SubProjectFunnel",
    "SubProjectFunnelStage",
    # projects
    "Project",
    "ProjectManager",
    "ProjectProduct",
    "ProjectService",
    "SubProject",
    "SubProjectProduct",
    "SubProjectService",
    # work
    "Task",
    "Sale",
    "SaleProduct",
    "SaleService",
    # comments
    "ProjectComment",
    "SubProjectComment",
]
