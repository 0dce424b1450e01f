from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Task(Base):
    __tablename__ = 'tasks'
    task_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Status values: 'new'|'in_progress'|'blocked'|'done'|'cancelled'
    status = Column(String(20), nullable=False, default='new')
    priority = Column(String(20), nullable=True)
    responsible_manager_id = Column(Integer, ForeignKey('managers.manager_id', ondelete='SET NULL'), nullable=True)
    creator_manager_id = Column(Integer, ForeignKey('managers.manager_id', ondelete='SET NULL'), nullable=True)
    project_id = Column(Integer, ForeignKey('projects.project_id', ondelete='SET NULL'), nullable=True)
    subproject_id = Column(Integer, ForeignKey('subprojects.subproject_id', ondelete='SET NULL'), nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    responsible_manager = relationship("Manager", foreign_keys=[responsible_manager_id])
    creator_manager = relationship("Manager", foreign_keys=[creator_manager_id])
    project = relationship("Project", back_populates="tasks")
    subproject = relationship("SubProject", back_populates="tasks")

    __table_args__ = (
        Index('idx_tasks_responsible_manager_id', 'responsible_manager_id'),
        Index('idx_tasks_creator_manager_id', 'creator_manager_id'),
        CheckConstraint("status in ('new','in_progress','blocked','done','cancelled')", name='ck_tasks_status'),
    )
