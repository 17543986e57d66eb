import uuid

from tracker.core.security import create_access_token
from tracker.tests.factories import auth_headers, make_task

API = "/api/v1"


def test_health(client):
    r = client.get(f"{API}/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.json()["database"] == "ok"
    assert r.headers.get("X-Request-Id")


def test_request_id_is_echoed(client):
    r = client.get(f"{API}/health", headers={"X-Request-Id": "abc-123"})
    assert r.headers["X-Request-Id"] == "abc-123"
    assert r.json()["request_id"] == "abc-123"


def test_missing_token_is_unauthenticated(client):
    r = client.get(f"{API}/projects")
    assert r.status_code == 401
    assert r.json()["error"] == "Unauthenticated"


def test_garbage_token_is_unauthenticated(client):
    r = client.get(f"{API}/tasks", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_token_without_role_is_unauthenticated(client, worker):
    token = create_access_token(str(worker.id), "")
    r = client.get(f"{API}/tasks", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_expired_token_is_unauthenticated(client, worker):
    token = create_access_token(str(worker.id), worker.role, expires_minutes=-1)
    r = client.get(f"{API}/tasks", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_worker_cannot_create_project(client, worker):
    r = client.post(f"{API}/projects", json={"name": "Mine"}, headers=auth_headers(worker))
    assert r.status_code == 403
    assert r.json()["error"] == "RoleForbidden"


def test_manager_creates_project_task_installation(client, manager, worker):
    m = auth_headers(manager)

    r = client.post(f"{API}/projects", json={"name": "Depot"}, headers=m)
    assert r.status_code == 201
    project_id = r.json()["project"]["id"]

    r = client.post(
        f"{API}/tasks",
        json={"project_id": project_id, "title": "Pull cable", "assignee_id": str(worker.id)},
        headers=m,
    )
    assert r.status_code == 201
    assert r.json()["task"]["status"] == "new"

    r = client.post(
        f"{API}/installations",
        json={"project_id": project_id, "title": "Mount panel", "scheduled_at": "2026-11-02T09:00:00Z"},
        headers=m,
    )
    assert r.status_code == 201

    r = client.get(f"{API}/projects/{project_id}", headers=m)
    body = r.json()["project"]
    assert len(body["tasks"]) == 1
    assert len(body["installations"]) == 1


def test_missing_title_is_missing_field(client, manager, project):
    r = client.post(f"{API}/tasks", json={"project_id": str(project.id)}, headers=auth_headers(manager))
    assert r.status_code == 400
    assert r.json()["error"] == "MissingField"


def test_bad_payload_is_invalid_payload(client, manager):
    r = client.post(f"{API}/tasks", json={"project_id": "not-a-uuid", "title": "x"}, headers=auth_headers(manager))
    assert r.status_code == 400
    assert r.json()["error"] == "InvalidPayload"


def test_worker_updating_foreign_task_is_not_owner(client, db, project, worker, other_worker):
    t1 = make_task(db, project, assignee=worker)
    r = client.put(f"{API}/tasks/{t1.id}", json={"status": "done"}, headers=auth_headers(other_worker))
    assert r.status_code == 403
    assert r.json()["error"] == "NotOwner"


def test_worker_updates_own_task(client, worker, task):
    r = client.put(f"{API}/tasks/{task.id}", json={"status": "done"}, headers=auth_headers(worker))
    assert r.status_code == 200
    assert r.json()["task"]["status"] == "done"


def test_worker_lists_only_assigned_work(client, db, project, worker, other_worker, task, installation):
    make_task(db, project, assignee=other_worker, title="Not mine")
    w = auth_headers(worker)

    r = client.get(f"{API}/tasks", headers=w)
    assert [t["id"] for t in r.json()["tasks"]] == [str(task.id)]

    r = client.get(f"{API}/installations", headers=w)
    assert [i["id"] for i in r.json()["installations"]] == [str(installation.id)]

    r = client.get(f"{API}/projects", headers=auth_headers(other_worker))
    assert [p["id"] for p in r.json()["projects"]] == [str(project.id)]


def test_worker_cannot_delete_task(client, worker, task):
    r = client.delete(f"{API}/tasks/{task.id}", headers=auth_headers(worker))
    assert r.status_code == 403


def test_manager_deletes_project(client, manager, project, task):
    m = auth_headers(manager)
    r = client.delete(f"{API}/projects/{project.id}", headers=m)
    assert r.status_code == 200

    r = client.get(f"{API}/tasks/{task.id}", headers=m)
    assert r.status_code == 404


def test_unknown_assignee_on_create_is_not_found(client, manager, project):
    r = client.post(
        f"{API}/tasks",
        json={"project_id": str(project.id), "title": "X", "assignee_id": str(uuid.uuid4())},
        headers=auth_headers(manager),
    )
    assert r.status_code == 404
    assert r.json()["error"] == "NotFound"


def test_unknown_assignee_on_update_is_not_found(client, worker, task, installation):
    w = auth_headers(worker)
    r = client.put(f"{API}/tasks/{task.id}", json={"assignee_id": str(uuid.uuid4())}, headers=w)
    assert r.status_code == 404
    assert r.json()["error"] == "NotFound"

    r = client.put(
        f"{API}/installations/{installation.id}", json={"assignee_id": str(uuid.uuid4())}, headers=w
    )
    assert r.status_code == 404

    r = client.get(f"{API}/tasks/{task.id}", headers=w)
    assert r.json()["task"]["assignee_id"] == str(worker.id)


def test_reassign_to_existing_user(client, manager, other_worker, task):
    r = client.put(
        f"{API}/tasks/{task.id}", json={"assignee_id": str(other_worker.id)}, headers=auth_headers(manager)
    )
    assert r.status_code == 200
    assert r.json()["task"]["assignee_id"] == str(other_worker.id)


def test_blank_title_or_name_on_update_is_missing_field(client, manager, worker, project, task):
    r = client.put(f"{API}/tasks/{task.id}", json={"title": "   "}, headers=auth_headers(worker))
    assert r.status_code == 400
    assert r.json()["error"] == "MissingField"

    r = client.put(f"{API}/projects/{project.id}", json={"name": "  "}, headers=auth_headers(manager))
    assert r.status_code == 400
    assert r.json()["error"] == "MissingField"

    r = client.get(f"{API}/tasks/{task.id}", headers=auth_headers(manager))
    assert r.json()["task"]["title"] == "Pull cable"
