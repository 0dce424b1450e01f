def _create(client, headers, **fields):
    body = {"title": "Follow up"}
    body.update(fields)
    r = client.post("/api/tasks", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_create_sets_creator_and_default_assignee(client, manager_factory, auth_headers):
    rep = manager_factory()
    task = _create(client, auth_headers(rep))
    assert task["creator_manager_id"] == rep.manager_id
    assert task["responsible_manager_id"] == rep.manager_id
    assert task["status"] == "new"
    assert task["creator_manager"]["manager_id"] == rep.manager_id


def test_visible_to_creator_and_assignee(client, manager_factory, auth_headers):
    creator = manager_factory()
    assignee = manager_factory()
    stranger = manager_factory()
    task = _create(client, auth_headers(creator), responsible_manager_id=assignee.manager_id)
    url = f"/api/tasks/{task['task_id']}"

    assert client.get(url, headers=auth_headers(creator)).status_code == 200
    assert client.get(url, headers=auth_headers(assignee)).status_code == 200
    assert client.get(url, headers=auth_headers(stranger)).status_code == 404
    assert [t["task_id"] for t in client.get("/api/tasks", headers=auth_headers(assignee)).json()["data"]] == [task["task_id"]]


def test_list_filters(client, manager_factory, project_factory, auth_headers):
    rep = manager_factory()
    headers = auth_headers(rep)
    project = project_factory(rep)
    _create(client, headers, title="In project", project_id=project.project_id)
    _create(client, headers, title="Done one", status="done")

    titles = lambda **params: [t["title"] for t in client.get("/api/tasks", params=params, headers=headers).json()["data"]]
    assert titles(project_id=project.project_id) == ["In project"]
    assert titles(status="done") == ["Done one"]
    assert client.get("/api/tasks", params={"project_id": "p"}, headers=headers).json()["error"] == "Invalid project ID"


def test_put_is_creator_only(client, admin, manager_factory, auth_headers):
    creator = manager_factory()
    assignee = manager_factory()
    task = _create(client, auth_headers(creator), responsible_manager_id=assignee.manager_id)
    url = f"/api/tasks/{task['task_id']}"

    r = client.put(url, json={"title": "Hijack"}, headers=auth_headers(assignee))
    assert r.status_code == 403
    assert r.json()["error"] == "Only the creator can edit this task"

    assert client.put(url, json={"title": "Renamed"}, headers=auth_headers(creator)).json()["data"]["title"] == "Renamed"
    assert client.put(url, json={"priority": "high"}, headers=auth_headers(admin)).status_code == 200


def test_put_allowed_once_creator_is_gone(client, db_session, manager_factory, auth_headers):
    from bizcrm.db import models

    creator = manager_factory()
    assignee = manager_factory()
    task = _create(client, auth_headers(creator), responsible_manager_id=assignee.manager_id)
    db_task = db_session.get(models.Task, task["task_id"])
    db_task.creator_manager_id = None
    db_session.commit()

    r = client.put(f"/api/tasks/{task['task_id']}", json={"title": "Taken over"}, headers=auth_headers(assignee))
    assert r.status_code == 200, r.text
    assert r.json()["data"]["title"] == "Taken over"


def test_patch_by_creator_or_assignee(client, manager_factory, auth_headers):
    head = manager_factory("head")
    creator = manager_factory("manager", supervisors=[head])
    assignee = manager_factory()
    task = _create(client, auth_headers(creator), responsible_manager_id=assignee.manager_id)
    url = f"/api/tasks/{task['task_id']}"

    r = client.patch(url, json={"description": "Notes"}, headers=auth_headers(assignee))
    assert r.status_code == 200
    assert r.json()["data"]["description"] == "Notes"

    # Seeing a task through the hierarchy does not grant edits
    r = client.patch(url, json={"description": "Boss notes"}, headers=auth_headers(head))
    assert r.status_code == 403
    assert r.json()["error"] == "You can only edit tasks you created or are assigned to"


def test_status_changes(client, manager_factory, auth_headers):
    head = manager_factory("head")
    creator = manager_factory("manager", supervisors=[head])
    assignee = manager_factory()
    task = _create(client, auth_headers(creator), responsible_manager_id=assignee.manager_id)
    url = f"/api/tasks/{task['task_id']}/status"

    assert client.patch(url, json={}, headers=auth_headers(assignee)).json()["error"] == "Missing status"
    assert client.patch(url, json={"status": "paused"}, headers=auth_headers(assignee)).json()["error"] == "Invalid status"
    assert client.patch("/api/tasks/9999/status", json={"status": "done"}, headers=auth_headers(assignee)).status_code == 404

    r = client.patch(url, json={"status": "done"}, headers=auth_headers(head))
    assert r.status_code == 403
    assert r.json()["error"] == "Only the assignee can change status"

    r = client.patch(url, json={"status": "in_progress"}, headers=auth_headers(assignee))
    assert r.json()["data"]["status"] == "in_progress"


def test_invalid_status_on_create(client, manager_factory, auth_headers):
    r = client.post("/api/tasks", json={"title": "X", "status": "someday"}, headers=auth_headers(manager_factory()))
    assert r.status_code == 400


def test_delete(client, manager_factory, auth_headers):
    rep = manager_factory()
    headers = auth_headers(rep)
    task = _create(client, headers)
    url = f"/api/tasks/{task['task_id']}"
    assert client.delete(url, headers=headers).json()["message"] == "Task deleted successfully"
    assert client.get(url, headers=headers).status_code == 404
    assert client.delete(url, headers=headers).status_code == 404
