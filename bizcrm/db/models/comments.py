from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean, Index
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class ProjectComment(Base):
    __tablename__ = 'project_comments'
    comment_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.project_id', ondelete='CASCADE'), nullable=False)
    manager_id = Column(Integer, ForeignKey('managers.manager_id', ondelete='CASCADE'), nullable=False)
    content = Column(Text, nullable=False, default='')
    file_name = Column(String(255), nullable=True)
    file_type = Column(String(255), nullable=True)
    file_url = Column(String(1024), nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    project = relationship("Project", back_populates="comments")
    manager = relationship("Manager")

    __table_args__ = (
        Index('idx_project_comments_project_id_created_at', 'project_id', 'created_at'),
    )


class SubProjectComment(Base):
    __tablename__ = 'subproject_comments'
    comment_id = Column(Integer, primary_key=True, autoincrement=True)
    subproject_id = Column(Integer, ForeignKey('subprojects.subproject_id', ondelete='CASCADE'), nullable=False)
    manager_id = Column(Integer, ForeignKey('managers.manager_id', ondelete='CASCADE'), nullable=False)
    content = Column(Text, nullable=False, default='')
    file_name = Column(String(255), nullable=True)
    file_type = Column(String(255), nullable=True)
    file_url = Column(String(1024), nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    subproject = relationship("SubProject", back_populates="comments")
    manager = relationship("Manager")

    __table_args__ = (
        Index('idx_subproject_comments_subproject_id_created_at', 'subproject_id', 'created_at'),
    )
