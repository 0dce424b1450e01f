"""Populate an empty database with demo managers, catalogue rows and a sample project."""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import suppress
from decimal import Decimal

from bizcrm.db import database, models, schemas
from bizcrm.db.repositories import catalog as catalog_repo
from bizcrm.db.repositories import counterparties as counterparty_repo
from bizcrm.db.repositories import funnels as funnel_repo
from bizcrm.db.repositories import managers as manager_repo
from bizcrm.db.repositories import products as product_repo
from bizcrm.db.repositories import projects as project_repo
from bizcrm.db.repositories import subprojects as subproject_repo
from bizcrm.db.repositories import tasks as task_repo
from bizcrm.api.deps import build_user_context


logger = logging.getLogger("bizcrm.scripts.seed")


# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()

ADMIN_EMAIL = "admin@example.com"

SALE_STATUSES = ("New", "Paid", "Shipped", "Cancelled")
SUBPROJECT_STATUSES = ("Planned", "In progress", "Done")
FUNNEL_STAGES = ("Lead", "Negotiation", "Contract", "Won")
SUBPROJECT_FUNNEL_STAGES = ("Backlog", "Work", "Acceptance")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the CRM database with demo data")
    parser.add_argument(
        "--password",
        default="password123",
        help="Password assigned to every demo manager (default: password123)",
    )
    return parser.parse_args(argv)


def _manager(session, email: str, role: str, first: str, last: str, password: str, supervisors=()):
    return manager_repo.create_manager(
        session,
        schemas.ManagerCreate(
            first_name=first,
            last_name=last,
            email=email,
            role=role,
            password=password,
            supervisor_ids=[s.manager_id for s in supervisors],
        ),
    )


def seed(session, password: str) -> dict:
    """Create the demo rows and return a name -> id map of the main ones."""
    admin = _manager(session, ADMIN_EMAIL, "admin", "Ada", "Admin", password)
    head = _manager(session, "head@example.com", "head", "Harper", "Head", password)
    sales_rep = _manager(session, "manager@example.com", "manager", "Max", "Manager", password, supervisors=[head])
    logger.info("Seeded managers admin=%s head=%s manager=%s", admin.manager_id, head.manager_id, sales_rep.manager_id)

    piece = catalog_repo.create_unit(session, schemas.UnitCreate(name="pcs"))
    catalog_repo.create_unit(session, schemas.UnitCreate(name="hour"))
    warehouse = catalog_repo.create_warehouse(session, schemas.WarehouseCreate(name="Main warehouse", location="HQ"))

    laptop = product_repo.create_product(
        session,
        schemas.ProductCreate(name="Laptop", sku="LAP-001", price=Decimal("1200.00"), unit_id=piece.unit_id),
    )
    monitor = product_repo.create_product(
        session,
        schemas.ProductCreate(name="Monitor", sku="MON-001", price=Decimal("300.00"), unit_id=piece.unit_id),
    )
    for product in (laptop, monitor):
        product_repo.upsert_product_stocks(
            session,
            product.product_id,
            [schemas.StockEntry(warehouse_id=warehouse.warehouse_id, quantity=25)],
        )
    setup = catalog_repo.create_service(
        session, schemas.ServiceCreate(name="Setup", description="On-site installation", price=Decimal("150.00"))
    )

    for name in SALE_STATUSES:
        catalog_repo.create_status_type(session, "sale", schemas.StatusTypeCreate(name=name))
    for name in SUBPROJECT_STATUSES:
        catalog_repo.create_status_type(session, "subproject", schemas.StatusTypeCreate(name=name))

    funnel = funnel_repo.create_funnel(session, schemas.FunnelCreate(name="Sales pipeline"))
    stages = [
        funnel_repo.create_funnel_stage(
            session, schemas.FunnelStageCreate(name=name, funnel_id=funnel.funnel_id, order=i)
        )
        for i, name in enumerate(FUNNEL_STAGES)
    ]
    sp_funnel = funnel_repo.create_subproject_funnel(session, schemas.FunnelCreate(name="Delivery"))
    for i, name in enumerate(SUBPROJECT_FUNNEL_STAGES):
        funnel_repo.create_subproject_funnel_stage(
            session,
            schemas.SubProjectFunnelStageCreate(name=name, sub_project_funnel_id=sp_funnel.sub_project_funnel_id, order=i),
        )

    rep_user = build_user_context(sales_rep)
    client = counterparty_repo.create_counterparty(
        session,
        schemas.CounterpartyCreate(name="Acme LLC", email="office@acme.example", phone="+10000000000"),
        current_user=rep_user,
    )
    project = project_repo.create_project(
        session,
        schemas.ProjectCreate(
            name="Acme office refresh",
            description="Replace workstations in the Acme office",
            counterparty_id=client.counterparty_id,
            funnel_id=funnel.funnel_id,
            funnel_stage_id=stages[0].funnel_stage_id,
            forecast_amount=Decimal("15000.00"),
            secondary_responsible_manager_ids=[head.manager_id],
        ),
        current_user=rep_user,
    )
    project_repo.add_project_product(session, project.project_id, laptop.product_id, 10)
    project_repo.add_project_service(session, project.project_id, setup.service_id, 1)
    subproject = subproject_repo.create_subproject(
        session,
        schemas.SubProjectCreate(
            name="Phase 1",
            project_id=project.project_id,
            sub_project_funnel_id=sp_funnel.sub_project_funnel_id,
        ),
        current_user=rep_user,
    )
    task_repo.create_task(
        session,
        schemas.TaskCreate(
            title="Collect workstation inventory",
            project_id=project.project_id,
            subproject_id=subproject.subproject_id,
        ),
        current_user=rep_user,
    )
    logger.info("Seeded project %s with subproject %s", project.project_id, subproject.subproject_id)
    return {
        "admin": admin.manager_id,
        "head": head.manager_id,
        "manager": sales_rep.manager_id,
        "warehouse": warehouse.warehouse_id,
        "project": project.project_id,
    }


def run(password: str) -> int:
    session = SessionLocal()
    try:
        existing = session.query(models.Manager).filter(models.Manager.email == ADMIN_EMAIL).first()
        if existing is not None:
            print(f"Demo admin {ADMIN_EMAIL} already exists; nothing to do.")
            logger.info("Seed skipped: demo admin present")
            return 0
        created = seed(session, password)
        print(f"Seeded demo data: {created}")
        return 0
    finally:
        with suppress(Exception):
            session.close()


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    return run(password=args.password)


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
