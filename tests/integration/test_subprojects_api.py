def test_attach_rules(client, manager_factory, project_factory, auth_headers):
    rep = manager_factory()
    headers = auth_headers(rep)
    project = project_factory(rep)

    r = client.post("/api/subprojects", json={"name": "Orphan"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Subproject must be attached to either project or another subproject"

    parent = client.post(
        "/api/subprojects", json={"name": "Parent", "project_id": project.project_id}, headers=headers
    ).json()["data"]
    r = client.post(
        "/api/subprojects",
        json={"name": "Both", "project_id": project.project_id, "parent_subproject_id": parent["subproject_id"]},
        headers=headers,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Subproject cannot be attached to both project and subproject"

    r = client.post("/api/subprojects", json={"name": "Lost", "project_id": 9999}, headers=headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Project not found"
    r = client.post("/api/subprojects", json={"name": "Lost", "parent_subproject_id": 9999}, headers=headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Parent subproject not found"


def test_nested_subproject_inherits_project_visibility(client, manager_factory, project_factory, auth_headers):
    rep = manager_factory()
    stranger = manager_factory()
    headers = auth_headers(rep)
    project = project_factory(rep)
    parent = client.post(
        "/api/subprojects", json={"name": "Parent", "project_id": project.project_id}, headers=headers
    ).json()["data"]

    r = client.post(
        "/api/subprojects", json={"name": "Child", "parent_subproject_id": parent["subproject_id"]}, headers=headers
    )
    assert r.status_code == 201, r.text
    child = r.json()["data"]
    assert child["project_id"] == project.project_id
    assert child["parent_subproject_id"] == parent["subproject_id"]

    detail = client.get(f"/api/subprojects/{parent['subproject_id']}", headers=headers).json()["data"]
    assert [c["name"] for c in detail["children"]] == ["Child"]

    other = auth_headers(stranger)
    assert client.get(f"/api/subprojects/{child['subproject_id']}", headers=other).status_code == 404
    assert client.get("/api/subprojects", headers=other).json()["data"] == []
    r = client.post(
        "/api/subprojects", json={"name": "Sneaky", "parent_subproject_id": parent["subproject_id"]}, headers=other
    )
    assert r.status_code == 404


def test_list_filtered_by_project(client, manager_factory, project_factory, auth_headers):
    rep = manager_factory()
    headers = auth_headers(rep)
    first = project_factory(rep, "First")
    second = project_factory(rep, "Second")
    client.post("/api/subprojects", json={"name": "A", "project_id": first.project_id}, headers=headers)
    client.post("/api/subprojects", json={"name": "B", "project_id": second.project_id}, headers=headers)

    rows = client.get("/api/subprojects", params={"project_id": second.project_id}, headers=headers).json()["data"]
    assert [s["name"] for s in rows] == ["B"]
    assert rows[0]["project"]["name"] == "Second"
    assert rows[0]["_count"] == {"tasks": 0, "products": 0, "services": 0}
    assert client.get("/api/subprojects", params={"project_id": "x"}, headers=headers).json()["error"] == "Invalid project ID"


def test_update_and_delete(client, manager_factory, project_factory, auth_headers):
    rep = manager_factory()
    headers = auth_headers(rep)
    project = project_factory(rep)
    sp = client.post("/api/subprojects", json={"name": "Draft", "project_id": project.project_id}, headers=headers).json()["data"]
    url = f"/api/subprojects/{sp['subproject_id']}"

    r = client.put(url, json={"name": "Final", "cost": "99.90", "status": "Done"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Final"
    assert r.json()["data"]["cost"] == 99.9

    assert client.delete(url, headers=headers).json()["message"] == "Subproject deleted successfully"
    assert client.get(url, headers=headers).status_code == 404
    assert client.put(url, json={"name": "Ghost"}, headers=headers).status_code == 404


def test_line_items(client, manager_factory, project_factory, product_factory, service_factory, auth_headers):
    rep = manager_factory()
    headers = auth_headers(rep)
    project = project_factory(rep)
    product = product_factory()
    service = service_factory()
    sp = client.post("/api/subprojects", json={"name": "Work", "project_id": project.project_id}, headers=headers).json()["data"]
    base = f"/api/subprojects/{sp['subproject_id']}"

    assert client.post(f"{base}/products", json={}, headers=headers).json()["error"] == "Product ID is required"
    assert client.post(f"{base}/services", json={}, headers=headers).json()["error"] == "Service ID is required"

    r = client.post(f"{base}/products", json={"product_id": product.product_id}, headers=headers)
    assert r.status_code == 201
    assert r.json()["data"]["quantity"] == 1
    r = client.post(f"{base}/services", json={"service_id": service.service_id, "quantity": 2.5}, headers=headers)
    assert r.json()["data"]["quantity"] == 2.5

    detail = client.get(base, headers=headers).json()["data"]
    assert detail["_count"] == {"tasks": 0, "products": 1, "services": 1}

    assert client.delete(f"{base}/products/{product.product_id}", headers=headers).status_code == 200
    r = client.delete(f"{base}/products/{product.product_id}", headers=headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Product not found in subproject"
    assert client.delete(f"{base}/services/{service.service_id}", headers=headers).status_code == 200
    r = client.delete(f"{base}/services/{service.service_id}", headers=headers)
    assert r.json()["error"] == "Service not found in subproject"
