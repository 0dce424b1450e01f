from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index, Float
from sqlalchemy.orm import relationship
from .base import Base, Money, now_utc


class Project(Base):
    __tablename__ = 'projects'
    project_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    main_responsible_manager_id = Column(Integer, ForeignKey('managers.manager_id', ondelete='SET NULL'), nullable=True)
    counterparty_id = Column(Integer, ForeignKey('counterparties.counterparty_id', ondelete='SET NULL'), nullable=True)
    funnel_id = Column(Integer, ForeignKey('funnels.funnel_id', ondelete='SET NULL'), nullable=True)
    funnel_stage_id = Column(Integer, ForeignKey('funnel_stages.funnel_stage_id', ondelete='SET NULL'), nullable=True)
    forecast_amount = Column(Money, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    main_responsible_manager = relationship("Manager", foreign_keys=[main_responsible_manager_id])
    counterparty = relationship("Counterparty")
    funnel = relationship("Funnel")
    funnel_stage = relationship("FunnelStage")
    manager_links = relationship("ProjectManager", back_populates="project", cascade="all, delete")
    products = relationship("ProjectProduct", back_populates="project", cascade="all, delete")
    services = relationship("ProjectService", back_populates="project", cascade="all, delete")
    subprojects = relationship("SubProject", back_populates="project", cascade="all, delete")
    tasks = relationship("Task", back_populates="project")
    sales = relationship("Sale", back_populates="project")
    comments = relationship(
        "ProjectComment",
        back_populates="project",
        cascade="all, delete",
        order_by="ProjectComment.created_at",
    )

    @property
    def secondary_responsible_managers(self):
        return [link.manager for link in self.manager_links if link.manager is not None]

    @property
    def active_comments(self):
        return [c for c in self.comments if not c.is_deleted]

    @property
    def counts(self):
        return {
            "subprojects": len(self.subprojects),
            "tasks": len(self.tasks),
            "sales": len(self.sales),
            "comments": len(self.active_comments),
        }

    __table_args__ = (
        Index('idx_projects_main_manager_id', 'main_responsible_manager_id'),
    )


class ProjectManager(Base):
    """Secondary responsible manager assignment."""
    __tablename__ = 'project_managers'
    project_id = Column(Integer, ForeignKey('projects.project_id', ondelete='CASCADE'), primary_key=True)
    manager_id = Column(Integer, ForeignKey('managers.manager_id', ondelete='CASCADE'), primary_key=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    project = relationship("Project", back_populates="manager_links")
    manager = relationship("Manager")


class ProjectProduct(Base):
    __tablename__ = 'project_products'
    project_product_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.project_id', ondelete='CASCADE'), nullable=False)
    product_id = Column(Integer, ForeignKey('products.product_id', ondelete='CASCADE'), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    project = relationship("Project", back_populates="products")
    product = relationship("Product")


class ProjectService(Base):
    __tablename__ = 'project_services'
    project_service_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.project_id', ondelete='CASCADE'), nullable=False)
    service_id = Column(Integer, ForeignKey('services.service_id', ondelete='CASCADE'), nullable=False)
    quantity = Column(Float, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    project = relationship("Project", back_populates="services")
    service = relationship("Service")


class SubProject(Base):
    __tablename__ = 'subprojects'
    subproject_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Nested subprojects inherit the root project's id so visibility follows it
    project_id = Column(Integer, ForeignKey('projects.project_id', ondelete='CASCADE'), nullable=True)
    parent_subproject_id = Column(Integer, ForeignKey('subprojects.subproject_id', ondelete='CASCADE'), nullable=True)
    status = Column(String(100), nullable=True)
    cost = Column(Money, nullable=False, default=0)
    sub_project_funnel_id = Column(
        Integer, ForeignKey('subproject_funnels.sub_project_funnel_id', ondelete='SET NULL'), nullable=True
    )
    sub_project_funnel_stage_id = Column(
        Integer, ForeignKey('subproject_funnel_stages.sub_project_funnel_stage_id', ondelete='SET NULL'), nullable=True
    )
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    project = relationship("Project", back_populates="subprojects")
    parent = relationship("SubProject", remote_side=[subproject_id], back_populates="children")
    children = relationship("SubProject", back_populates="parent", cascade="all, delete")
    funnel = relationship("SubProjectFunnel")
    funnel_stage = relationship("SubProjectFunnelStage")
    products = relationship("SubProjectProduct", back_populates="subproject", cascade="all, delete")
    services = relationship("SubProjectService", back_populates="subproject", cascade="all, delete")
    tasks = relationship("Task", back_populates="subproject")
    comments = relationship(
        "SubProjectComment",
        back_populates="subproject",
        cascade="all, delete",
        order_by="SubProjectComment.created_at",
    )

    @property
    def active_comments(self):
        return [c for c in self.comments if not c.is_deleted]

    @property
    def counts(self):
        return {
            "tasks": len(self.tasks),
            "products": len(self.products),
            "services": len(self.services),
        }

    __table_args__ = (
        Index('idx_subprojects_project_id', 'project_id'),
        Index('idx_subprojects_parent_id', 'parent_subproject_id'),
    )


class SubProjectProduct(Base):
    __tablename__ = 'subproject_products'
    id = Column(Integer, primary_key=True, autoincrement=True)
    subproject_id = Column(Integer, ForeignKey('subprojects.subproject_id', ondelete='CASCADE'), nullable=False)
    product_id = Column(Integer, ForeignKey('products.product_id', ondelete='CASCADE'), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    subproject = relationship("SubProject", back_populates="products")
    product = relationship("Product")


class SubProjectService(Base):
    __tablename__ = 'subproject_services'
    id = Column(Integer, primary_key=True, autoincrement=True)
    subproject_id = Column(Integer, ForeignKey('subprojects.subproject_id', ondelete='CASCADE'), nullable=False)
    service_id = Column(Integer, ForeignKey('services.service_id', ondelete='CASCADE'), nullable=False)
    quantity = Column(Float, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    subproject = relationship("SubProject", back_populates="services")
    service = relationship("Service")
