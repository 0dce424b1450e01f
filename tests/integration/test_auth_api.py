from bizcrm.utils.security import create_access_token


def test_login_returns_token_and_user(client, manager_factory):
    manager_factory("head", email="boss@example.com", password="letmein1")
    r = client.post("/api/auth/login", json={"email": "  BOSS@example.com ", "password": "letmein1"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["data"]["user"]["email"] == "boss@example.com"
    assert body["data"]["user"]["role"] == "head"
    assert "password_hash" not in body["data"]["user"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['data']['token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "boss@example.com"


def test_login_requires_both_fields(client):
    r = client.post("/api/auth/login", json={"email": "x@example.com"})
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Email and password are required"}


def test_login_bad_credentials(client, manager_factory):
    manager_factory(email="rep@example.com", password="right-one")
    for payload in (
        {"email": "rep@example.com", "password": "wrong-one"},
        {"email": "nobody@example.com", "password": "right-one"},
    ):
        r = client.post("/api/auth/login", json=payload)
        assert r.status_code == 401
        assert r.json()["error"] == "Invalid credentials"


def test_logout(client):
    r = client.post("/api/auth/logout")
    assert r.json() == {"success": True, "message": "Logged out successfully"}


def test_missing_and_invalid_tokens(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json()["error"] == "Access token required"

    r = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
    assert r.status_code == 403
    assert r.json()["error"] == "Invalid or expired token"


def test_expired_token(client, manager_factory):
    manager = manager_factory()
    token = create_access_token(
        manager_id=manager.manager_id, email=manager.email, role=manager.role, expires_in=1, now=1_000_000
    )
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403


def test_token_of_deleted_manager(client, db_session, manager_factory, auth_headers):
    manager = manager_factory()
    headers = auth_headers(manager)
    db_session.delete(manager)
    db_session.commit()

    r = client.get("/api/auth/me", headers=headers)
    assert r.status_code == 401
    assert r.json()["error"] == "Account not found"


def test_role_comes_from_stored_row(client, db_session, manager_factory, auth_headers):
    manager = manager_factory("admin")
    headers = auth_headers(manager)
    manager.role = "manager"
    db_session.commit()

    r = client.post(
        "/api/managers",
        json={"first_name": "N", "last_name": "M", "email": "n@example.com", "password": "secret1"},
        headers=headers,
    )
    assert r.status_code == 403
    assert r.json()["error"] == "Insufficient permissions"
