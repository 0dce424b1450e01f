from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, UniqueConstraint, Index, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, Money, now_utc


class Unit(Base):
    __tablename__ = 'units'
    unit_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)


class Warehouse(Base):
    __tablename__ = 'warehouses'
    warehouse_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    location = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    stocks = relationship("ProductStock", back_populates="warehouse", cascade="all, delete")


class Product(Base):
    __tablename__ = 'products'
    product_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    sku = Column(String(100), nullable=True, unique=True)
    description = Column(Text, nullable=True)
    price = Column(Money, nullable=False, default=0)
    unit_id = Column(Integer, ForeignKey('units.unit_id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    unit = relationship("Unit")
    stocks = relationship(
        "ProductStock",
        back_populates="product",
        cascade="all, delete",
        order_by="ProductStock.warehouse_id",
    )

    @property
    def total_stock(self) -> int:
        return sum(s.quantity or 0 for s in self.stocks)


class ProductStock(Base):
    __tablename__ = 'product_stocks'
    product_stock_id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey('products.product_id', ondelete='CASCADE'), nullable=False)
    warehouse_id = Column(Integer, ForeignKey('warehouses.warehouse_id', ondelete='CASCADE'), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    product = relationship("Product", back_populates="stocks")
    warehouse = relationship("Warehouse", back_populates="stocks")

    __table_args__ = (
        UniqueConstraint('product_id', 'warehouse_id', name='uq_product_stocks_product_warehouse'),
    )


class Service(Base):
    __tablename__ = 'services'
    service_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Money, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class SaleStatusType(Base):
    __tablename__ = 'sale_status_types'
    sale_status_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)


class SubProjectStatusType(Base):
    __tablename__ = 'subproject_status_types'
    sub_project_status_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)


class Counterparty(Base):
    __tablename__ = 'counterparties'
    counterparty_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    counterparty_type = Column(String(20), nullable=False, default='LEGAL_ENTITY')
    responsible_manager_id = Column(Integer, ForeignKey('managers.manager_id', ondelete='SET NULL'), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    responsible_manager = relationship("Manager")

    __table_args__ = (
        Index('idx_counterparties_responsible_manager_id', 'responsible_manager_id'),
        CheckConstraint("counterparty_type in ('INDIVIDUAL','LEGAL_ENTITY')", name='ck_counterparties_type'),
    )
