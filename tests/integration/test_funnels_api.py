def test_project_funnel_with_stages(client, manager_factory, auth_headers):
    headers = auth_headers(manager_factory())
    r = client.post("/api/funnels", json={"name": "Sales"}, headers=headers)
    assert r.status_code == 201
    funnel = r.json()["data"]
    fid = funnel["funnel_id"]

    for name, order in (("Won", 2), ("Lead", 0), ("Offer", 1)):
        r = client.post("/api/funnels/stages", json={"name": name, "funnel_id": fid, "order": order}, headers=headers)
        assert r.status_code == 201
        assert r.json()["data"]["funnel"]["name"] == "Sales"

    stages = client.get(f"/api/funnels/{fid}", headers=headers).json()["data"]["stages"]
    assert [s["name"] for s in stages] == ["Lead", "Offer", "Won"]
    assert len(client.get("/api/funnels/stages/all", headers=headers).json()["data"]) == 3

    r = client.post("/api/funnels/stages", json={"name": "X", "funnel_id": 9999}, headers=headers)
    assert r.status_code == 404

    stage_id = stages[0]["funnel_stage_id"]
    r = client.put(f"/api/funnels/stages/{stage_id}", json={"name": "Inbound"}, headers=headers)
    assert r.json()["data"]["name"] == "Inbound"
    assert client.delete(f"/api/funnels/stages/{stage_id}", headers=headers).status_code == 200
    assert client.get(f"/api/funnels/stages/{stage_id}", headers=headers).status_code == 404

    r = client.put(f"/api/funnels/{fid}", json={"name": "Pipeline"}, headers=headers)
    assert r.json()["data"]["name"] == "Pipeline"
    assert client.delete(f"/api/funnels/{fid}", headers=headers).json()["message"] == "Funnel deleted successfully"
    assert client.get(f"/api/funnels/{fid}", headers=headers).status_code == 404


def _subproject_funnel(client, headers, name, stage_names):
    fid = client.post("/api/subproject-funnels", json={"name": name}, headers=headers).json()["data"]["sub_project_funnel_id"]
    ids = []
    for i, stage in enumerate(stage_names):
        r = client.post(
            "/api/subproject-funnels/stages",
            json={"name": stage, "sub_project_funnel_id": fid, "order": i},
            headers=headers,
        )
        ids.append(r.json()["data"]["sub_project_funnel_stage_id"])
    return fid, ids


def test_reorder_subproject_funnel_stages(client, manager_factory, auth_headers):
    headers = auth_headers(manager_factory())
    fid, (a, b, c) = _subproject_funnel(client, headers, "Delivery", ["A", "B", "C"])

    r = client.put(
        f"/api/subproject-funnels/{fid}/reorder-stages",
        json=[{"stage_id": a, "order": 2}, {"stage_id": b, "order": 0}, {"stage_id": c, "order": 1}],
        headers=headers,
    )
    assert r.status_code == 200, r.text
    assert [s["name"] for s in r.json()["data"]] == ["B", "C", "A"]


def test_reorder_rejects_foreign_stage(client, manager_factory, auth_headers):
    headers = auth_headers(manager_factory())
    fid, (a, b) = _subproject_funnel(client, headers, "Delivery", ["A", "B"])
    _, (foreign,) = _subproject_funnel(client, headers, "Other", ["X"])

    r = client.put(
        f"/api/subproject-funnels/{fid}/reorder-stages",
        json=[{"stage_id": a, "order": 5}, {"stage_id": foreign, "order": 0}],
        headers=headers,
    )
    assert r.status_code == 400
    assert r.json()["error"] == f"Stage {foreign} does not belong to this funnel"

    # Nothing was written
    stages = client.get(f"/api/subproject-funnels/{fid}", headers=headers).json()["data"]["stages"]
    assert [(s["name"], s["order"]) for s in stages] == [("A", 0), ("B", 1)]

    r = client.put("/api/subproject-funnels/9999/reorder-stages", json=[], headers=headers)
    assert r.status_code == 404


def test_subproject_funnel_delete_is_204(client, manager_factory, auth_headers):
    headers = auth_headers(manager_factory())
    fid, _ = _subproject_funnel(client, headers, "Short", ["Only"])
    r = client.delete(f"/api/subproject-funnels/{fid}", headers=headers)
    assert r.status_code == 204
    assert r.content == b""
    assert client.get(f"/api/subproject-funnels/{fid}", headers=headers).status_code == 404
    assert client.get("/api/subproject-funnels/stages/all", headers=headers).json()["data"] == []
