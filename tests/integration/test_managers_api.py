def _payload(**overrides):
    body = {
        "first_name": "New",
        "last_name": "Hire",
        "email": "new.hire@example.com",
        "password": "welcome1",
        "role": "manager",
    }
    body.update(overrides)
    return body


def test_admin_creates_manager_with_hierarchy(client, admin, manager_factory, auth_headers):
    head = manager_factory("head")
    r = client.post("/api/managers", json=_payload(supervisor_ids=[head.manager_id]), headers=auth_headers(admin))
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert data["email"] == "new.hire@example.com"
    assert "password_hash" not in data
    assert [s["manager_id"] for s in data["supervisors"]] == [head.manager_id]

    login = client.post("/api/auth/login", json={"email": "new.hire@example.com", "password": "welcome1"})
    assert login.status_code == 200


def test_non_admin_cannot_manage_accounts(client, manager_factory, auth_headers):
    head = manager_factory("head")
    headers = auth_headers(head)
    assert client.post("/api/managers", json=_payload(), headers=headers).status_code == 403
    assert client.put(f"/api/managers/{head.manager_id}", json={"role": "admin"}, headers=headers).status_code == 403
    assert client.delete(f"/api/managers/{head.manager_id}", headers=headers).status_code == 403


def test_duplicate_email_rejected(client, admin, auth_headers):
    r = client.post("/api/managers", json=_payload(email="ADMIN@example.com"), headers=auth_headers(admin))
    assert r.status_code == 400
    assert r.json()["error"] == "Email already in use"


def test_unknown_supervisor_is_404(client, admin, auth_headers):
    r = client.post("/api/managers", json=_payload(supervisor_ids=[9999]), headers=auth_headers(admin))
    assert r.status_code == 404


def test_list_is_visibility_filtered(client, admin, manager_factory, auth_headers):
    head = manager_factory("head")
    rep = manager_factory("manager", supervisors=[head])
    other = manager_factory("manager")

    ids = lambda r: {m["manager_id"] for m in r.json()["data"]}
    assert ids(client.get("/api/managers", headers=auth_headers(head))) == {head.manager_id, rep.manager_id}
    assert ids(client.get("/api/managers", headers=auth_headers(rep))) == {rep.manager_id}
    assert other.manager_id in ids(client.get("/api/managers", headers=auth_headers(admin)))

    r = client.get(f"/api/managers/{other.manager_id}", headers=auth_headers(head))
    assert r.status_code == 404


def test_update_replaces_links_only_when_present(client, admin, manager_factory, auth_headers):
    head = manager_factory("head")
    rep = manager_factory("manager", supervisors=[head])
    headers = auth_headers(admin)

    r = client.put(f"/api/managers/{rep.manager_id}", json={"phone_number": "123"}, headers=headers)
    assert r.status_code == 200
    assert [s["manager_id"] for s in r.json()["data"]["supervisors"]] == [head.manager_id]

    r = client.put(f"/api/managers/{rep.manager_id}", json={"supervisor_ids": []}, headers=headers)
    assert r.json()["data"]["supervisors"] == []


def test_update_password_and_role(client, admin, manager_factory, auth_headers):
    rep = manager_factory("manager", email="rep@example.com")
    r = client.put(
        f"/api/managers/{rep.manager_id}",
        json={"role": "head", "password": "changed1"},
        headers=auth_headers(admin),
    )
    assert r.json()["data"]["role"] == "head"
    login = client.post("/api/auth/login", json={"email": "rep@example.com", "password": "changed1"})
    assert login.status_code == 200


def test_delete_and_invalid_id(client, admin, manager_factory, auth_headers):
    rep = manager_factory()
    headers = auth_headers(admin)
    assert client.get("/api/managers/abc", headers=headers).json() == {"success": False, "error": "Invalid ID"}
    r = client.delete(f"/api/managers/{rep.manager_id}", headers=headers)
    assert r.json() == {"success": True, "message": "Manager deleted successfully"}
    assert client.get(f"/api/managers/{rep.manager_id}", headers=headers).status_code == 404
