from datetime import datetime
from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from .common import ManagerSummary


class Unit(BaseModel):
    unit_id: int
    name: str
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class UnitCreate(BaseModel):
    name: str


class UnitUpdate(BaseModel):
    name: str | None = None


class WarehouseBase(BaseModel):
    name: str
    location: str | None = None


class WarehouseCreate(WarehouseBase):
    pass


class WarehouseUpdate(BaseModel):
    name: str | None = None
    location: str | None = None


class Warehouse(WarehouseBase):
    warehouse_id: int
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class ServiceBase(BaseModel):
    name: str
    description: str | None = None
    price: Decimal = Field(default=Decimal("0"), ge=0)


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0)


class Service(BaseModel):
    service_id: int
    name: str
    description: str | None = None
    price: float
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class StockEntry(BaseModel):
    warehouse_id: int
    quantity: int = Field(ge=0)


class ProductStock(BaseModel):
    product_stock_id: int
    product_id: int
    warehouse_id: int
    quantity: int
    warehouse: Warehouse | None = None
    model_config = ConfigDict(from_attributes=True)


class ProductBase(BaseModel):
    name: str
    sku: str | None = None
    description: str | None = None
    price: Decimal = Field(default=Decimal("0"), ge=0)
    unit_id: int | None = None


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: str | None = None
    sku: str | None = None
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    unit_id: int | None = None


class ProductSummary(BaseModel):
    product_id: int
    name: str
    sku: str | None = None
    price: float
    unit: Unit | None = None
    model_config = ConfigDict(from_attributes=True)


class Product(ProductSummary):
    description: str | None = None
    unit_id: int | None = None
    stocks: list[ProductStock] = []
    total_stock: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StatusTypeCreate(BaseModel):
    name: str


class StatusTypeUpdate(BaseModel):
    name: str | None = None


class SaleStatusType(BaseModel):
    sale_status_id: int
    name: str
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class SubProjectStatusType(BaseModel):
    sub_project_status_id: int
    name: str
    created_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class CounterpartyType(str, Enum):
    individual = "INDIVIDUAL"
    legal_entity = "LEGAL_ENTITY"


class CounterpartyBase(BaseModel):
    name: str
    counterparty_type: CounterpartyType = CounterpartyType.legal_entity
    responsible_manager_id: int | None = None
    phone: str | None = None
    email: str | None = None


class CounterpartyCreate(CounterpartyBase):
    pass


class CounterpartyUpdate(BaseModel):
    name: str | None = None
    counterparty_type: CounterpartyType | None = None
    responsible_manager_id: int | None = None
    phone: str | None = None
    email: str | None = None


class Counterparty(BaseModel):
    counterparty_id: int
    name: str
    counterparty_type: str
    responsible_manager_id: int | None = None
    phone: str | None = None
    email: str | None = None
    responsible_manager: ManagerSummary | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)
