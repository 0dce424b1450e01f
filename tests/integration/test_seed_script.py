from __future__ import annotations

import runpy
from pathlib import Path

from bizcrm.db import database, models


SCRIPT_GLOBALS = runpy.run_path(
    Path(__file__).resolve().parents[2] / "scripts" / "seed.py"
)
MAIN = SCRIPT_GLOBALS["main"]


def test_seed_populates_and_is_idempotent(capsys, client):
    assert MAIN(["--password", "demo-pass"]) == 0
    assert "Seeded demo data" in capsys.readouterr().out

    session = database.SessionLocal()
    try:
        assert session.query(models.Manager).count() == 3
        manager = session.query(models.Manager).filter_by(email="manager@example.com").one()
        assert [s.email for s in manager.supervisors] == ["head@example.com"]
        assert session.query(models.Project).count() == 1
        assert session.query(models.Task).count() == 1
    finally:
        session.close()

    r = client.post("/api/auth/login", json={"email": "head@example.com", "password": "demo-pass"})
    assert r.status_code == 200
    headers = {"Authorization": f"Bearer {r.json()['data']['token']}"}
    # The head sees the subordinate's project through the hierarchy
    assert len(client.get("/api/projects", headers=headers).json()["data"]) == 1

    assert MAIN([]) == 0
    assert "already exists" in capsys.readouterr().out
    session = database.SessionLocal()
    try:
        assert session.query(models.Manager).count() == 3
    finally:
        session.close()
