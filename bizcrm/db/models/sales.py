from decimal import Decimal

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Sale(Base):
    __tablename__ = 'sales'
    sale_id = Column(Integer, primary_key=True, autoincrement=True)
    counterparty_id = Column(Integer, ForeignKey('counterparties.counterparty_id'), nullable=False)
    responsible_manager_id = Column(Integer, ForeignKey('managers.manager_id'), nullable=False)
    sale_date = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    status = Column(String(100), nullable=False)
    deferred_payment_date = Column(DateTime(timezone=True), nullable=True)
    project_id = Column(Integer, ForeignKey('projects.project_id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    counterparty = relationship("Counterparty")
    responsible_manager = relationship("Manager")
    project = relationship("Project", back_populates="sales")
    products = relationship("SaleProduct", back_populates="sale", cascade="all, delete")
    services = relationship("SaleService", back_populates="sale", cascade="all, delete")

    @property
    def total_price(self) -> Decimal:
        products_total = sum(
            (Decimal(item.product.price or 0) * item.quantity for item in self.products if item.product is not None),
            Decimal("0"),
        )
        services_total = sum(
            (Decimal(item.service.price or 0) for item in self.services if item.service is not None),
            Decimal("0"),
        )
        return products_total + services_total

    __table_args__ = (
        Index('idx_sales_responsible_manager_id', 'responsible_manager_id'),
    )


class SaleProduct(Base):
    __tablename__ = 'sale_products'
    id = Column(Integer, primary_key=True, autoincrement=True)
    sale_id = Column(Integer, ForeignKey('sales.sale_id', ondelete='CASCADE'), nullable=False)
    product_id = Column(Integer, ForeignKey('products.product_id'), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    sale = relationship("Sale", back_populates="products")
    product = relationship("Product")


class SaleService(Base):
    __tablename__ = 'sale_services'
    id = Column(Integer, primary_key=True, autoincrement=True)
    sale_id = Column(Integer, ForeignKey('sales.sale_id', ondelete='CASCADE'), nullable=False)
    service_id = Column(Integer, ForeignKey('services.service_id'), nullable=False)

    sale = relationship("Sale", back_populates="services")
    service = relationship("Service")
