def test_create_defaults_owner_to_caller(client, manager_factory, auth_headers):
    rep = manager_factory()
    r = client.post("/api/counterparties", json={"name": "Acme"}, headers=auth_headers(rep))
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["responsible_manager_id"] == rep.manager_id
    assert data["counterparty_type"] == "LEGAL_ENTITY"


def test_invalid_type_rejected(client, manager_factory, auth_headers):
    rep = manager_factory()
    r = client.post(
        "/api/counterparties", json={"name": "Acme", "counterparty_type": "ROBOT"}, headers=auth_headers(rep)
    )
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_visibility_by_hierarchy(client, admin, manager_factory, counterparty_factory, auth_headers):
    head = manager_factory("head")
    rep = manager_factory("manager", supervisors=[head])
    peer = manager_factory("manager")
    mine = counterparty_factory(rep, "Mine")
    theirs = counterparty_factory(peer, "Theirs")

    names = lambda who: [c["name"] for c in client.get("/api/counterparties", headers=auth_headers(who)).json()["data"]]
    assert names(rep) == ["Mine"]
    assert names(head) == ["Mine"]
    assert names(admin) == ["Mine", "Theirs"]

    # Invisible rows behave as missing
    headers = auth_headers(rep)
    assert client.get(f"/api/counterparties/{theirs.counterparty_id}", headers=headers).status_code == 404
    assert client.put(f"/api/counterparties/{theirs.counterparty_id}", json={"name": "X"}, headers=headers).status_code == 404
    assert client.delete(f"/api/counterparties/{theirs.counterparty_id}", headers=headers).status_code == 404

    r = client.put(
        f"/api/counterparties/{mine.counterparty_id}",
        json={"counterparty_type": "INDIVIDUAL", "phone": "555"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["data"]["counterparty_type"] == "INDIVIDUAL"
    assert r.json()["data"]["phone"] == "555"


def test_delete_then_404(client, manager_factory, counterparty_factory, auth_headers):
    rep = manager_factory()
    cp = counterparty_factory(rep)
    headers = auth_headers(rep)
    r = client.delete(f"/api/counterparties/{cp.counterparty_id}", headers=headers)
    assert r.json()["message"] == "Counterparty deleted successfully"
    assert client.get(f"/api/counterparties/{cp.counterparty_id}", headers=headers).status_code == 404
