from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Funnel(Base):
    __tablename__ = 'funnels'
    funnel_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    stages = relationship(
        "FunnelStage",
        back_populates="funnel",
        cascade="all, delete",
        order_by="FunnelStage.order",
    )


class FunnelStage(Base):
    __tablename__ = 'funnel_stages'
    funnel_stage_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    funnel_id = Column(Integer, ForeignKey('funnels.funnel_id', ondelete='CASCADE'), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    funnel = relationship("Funnel", back_populates="stages")

    __table_args__ = (
        Index('idx_funnel_stages_funnel_id', 'funnel_id'),
    )


class SubProjectFunnel(Base):
    __tablename__ = 'subproject_funnels'
    sub_project_funnel_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    stages = relationship(
        "SubProjectFunnelStage",
        back_populates="funnel",
        cascade="all, delete",
        order_by="SubProjectFunnelStage.order",
    )


class SubProjectFunnelStage(Base):
    __tablename__ = 'subproject_funnel_stages'
    sub_project_funnel_stage_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    sub_project_funnel_id = Column(
        Integer, ForeignKey('subproject_funnels.sub_project_funnel_id', ondelete='CASCADE'), nullable=False
    )
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    funnel = relationship("SubProjectFunnel", back_populates="stages")

    __table_args__ = (
        Index('idx_subproject_funnel_stages_funnel_id', 'sub_project_funnel_id'),
    )
