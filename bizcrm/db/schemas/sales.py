from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from .catalog import ProductSummary, Service
from .common import CounterpartySummary, ManagerSummary, ProjectSummary


class SaleProductLine(BaseModel):
    product_id: int
    quantity: int = Field(default=1, gt=0)


class SaleServiceLine(BaseModel):
    service_id: int


class SaleBase(BaseModel):
    counterparty_id: int
    responsible_manager_id: int | None = None
    sale_date: datetime | None = None
    status: str
    deferred_payment_date: datetime | None = None
    project_id: int | None = None


class SaleCreate(SaleBase):
    products: list[SaleProductLine] = []
    services: list[SaleServiceLine] = []


class SaleUpdate(BaseModel):
    counterparty_id: int | None = None
    responsible_manager_id: int | None = None
    sale_date: datetime | None = None
    status: str | None = None
    deferred_payment_date: datetime | None = None
    project_id: int | None = None
    products: list[SaleProductLine] | None = None
    services: list[SaleServiceLine] | None = None


class SaleProduct(BaseModel):
    product_id: int
    quantity: int
    product: ProductSummary | None = None
    model_config = ConfigDict(from_attributes=True)


class SaleService(BaseModel):
    service_id: int
    service: Service | None = None
    model_config = ConfigDict(from_attributes=True)


class Sale(BaseModel):
    sale_id: int
    counterparty_id: int
    responsible_manager_id: int
    sale_date: datetime
    status: str
    deferred_payment_date: datetime | None = None
    project_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    counterparty: CounterpartySummary | None = None
    responsible_manager: ManagerSummary | None = None
    project: ProjectSummary | None = None
    products: list[SaleProduct] = []
    services: list[SaleService] = []
    total_price: float = 0
    model_config = ConfigDict(from_attributes=True)
