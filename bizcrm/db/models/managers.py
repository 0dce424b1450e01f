from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, now_utc


# Supervisor -> subordinate edges. A manager may report to several supervisors.
manager_hierarchy = Table(
    'manager_hierarchy',
    Base.metadata,
    Column('supervisor_id', Integer, ForeignKey('managers.manager_id', ondelete='CASCADE'), primary_key=True),
    Column('subordinate_id', Integer, ForeignKey('managers.manager_id', ondelete='CASCADE'), primary_key=True),
)


class Manager(Base):
    __tablename__ = 'managers'
    manager_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone_number = Column(String(50), nullable=True)
    role = Column(String(20), nullable=False, default='manager')
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    supervisors = relationship(
        "Manager",
        secondary=manager_hierarchy,
        primaryjoin=lambda: Manager.manager_id == manager_hierarchy.c.subordinate_id,
        secondaryjoin=lambda: Manager.manager_id == manager_hierarchy.c.supervisor_id,
        back_populates="subordinates",
    )
    subordinates = relationship(
        "Manager",
        secondary=manager_hierarchy,
        primaryjoin=lambda: Manager.manager_id == manager_hierarchy.c.supervisor_id,
        secondaryjoin=lambda: Manager.manager_id == manager_hierarchy.c.subordinate_id,
        back_populates="supervisors",
    )

    __table_args__ = (
        CheckConstraint("role in ('admin','head','manager')", name='ck_managers_role'),
    )
