import itertools
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from bizcrm.db import models
from bizcrm.utils.security import hash_password

DEFAULT_PASSWORD = "secret123"

_seq = itertools.count(1)


@pytest.fixture
def manager_factory(db_session: Session):
    def _create(role: str = "manager", email: str = None, password: str = DEFAULT_PASSWORD, supervisors=()):
        n = next(_seq)
        manager = models.Manager(
            first_name=f"First{n}",
            last_name=f"Last{n}",
            email=email or f"manager{n}@example.com",
            role=role,
            password_hash=hash_password(password),
        )
        manager.supervisors = list(supervisors)
        db_session.add(manager)
        db_session.commit()
        db_session.refresh(manager)
        return manager
    return _create


@pytest.fixture
def admin(manager_factory):
    return manager_factory("admin", email="admin@example.com")


@pytest.fixture
def counterparty_factory(db_session: Session):
    def _create(owner, name: str = "Acme"):
        counterparty = models.Counterparty(name=name, responsible_manager_id=owner.manager_id)
        db_session.add(counterparty)
        db_session.commit()
        db_session.refresh(counterparty)
        return counterparty
    return _create


@pytest.fixture
def project_factory(db_session: Session):
    def _create(owner, name: str = "Project", secondary=()):
        project = models.Project(name=name, main_responsible_manager_id=owner.manager_id)
        db_session.add(project)
        db_session.flush()
        for manager in secondary:
            db_session.add(models.ProjectManager(project_id=project.project_id, manager_id=manager.manager_id))
        db_session.commit()
        db_session.refresh(project)
        return project
    return _create


@pytest.fixture
def product_factory(db_session: Session):
    def _create(name: str = "Widget", sku: str = None, price: str = "10.00"):
        product = models.Product(name=name, sku=sku, price=Decimal(price))
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product
    return _create


@pytest.fixture
def service_factory(db_session: Session):
    def _create(name: str = "Setup", price: str = "50.00"):
        service = models.Service(name=name, price=Decimal(price))
        db_session.add(service)
        db_session.commit()
        db_session.refresh(service)
        return service
    return _create


@pytest.fixture
def warehouse_factory(db_session: Session):
    def _create(name: str = "Main"):
        warehouse = models.Warehouse(name=name)
        db_session.add(warehouse)
        db_session.commit()
        db_session.refresh(warehouse)
        return warehouse
    return _create
