from tracker.tests.factories import auth_headers, make_purchase_request, make_task

API = "/api/v1"


def test_worker_request_flow_until_approval(client, manager, worker, task):
    w = auth_headers(worker)

    r = client.post(f"{API}/purchase-requests", json={"task_id": str(task.id)}, headers=w)
    assert r.status_code == 201
    pr = r.json()["purchase_request"]
    assert pr["status"] == "pending"
    assert pr["items"] == []

    r = client.post(
        f"{API}/purchase-requests/{pr['id']}/items",
        json={"name": "Cable", "quantity": 3, "unit": "m"},
        headers=w,
    )
    assert r.status_code == 201
    assert r.json()["item"]["quantity"] == 3

    r = client.put(
        f"{API}/purchase-requests/{pr['id']}/status",
        json={"status": "approved"},
        headers=auth_headers(manager),
    )
    assert r.status_code == 200
    assert r.json()["purchase_request"]["status"] == "approved"
    assert r.json()["purchase_request"]["approved_by"] == str(manager.id)

    r = client.post(
        f"{API}/purchase-requests/{pr['id']}/items",
        json={"name": "Ties", "quantity": 10, "unit": "pcs"},
        headers=w,
    )
    assert r.status_code == 403
    assert r.json()["error"] == "InvalidStateForMutation"

    r = client.get(f"{API}/purchase-requests/{pr['id']}", headers=w)
    assert [i["name"] for i in r.json()["purchase_request"]["items"]] == ["Cable"]


def test_re_rejecting_returns_conflict(client, db, manager, worker, task):
    pr = make_purchase_request(db, task, worker)
    m = auth_headers(manager)

    r = client.put(f"{API}/purchase-requests/{pr.id}/status", json={"status": "rejected"}, headers=m)
    assert r.status_code == 200

    r = client.put(f"{API}/purchase-requests/{pr.id}/status", json={"status": "rejected"}, headers=m)
    assert r.status_code == 409
    assert r.json()["error"] == "InvalidTransition"


def test_unknown_status_is_invalid_transition(client, db, manager, worker, task):
    pr = make_purchase_request(db, task, worker)
    r = client.put(
        f"{API}/purchase-requests/{pr.id}/status", json={"status": "pending"}, headers=auth_headers(manager)
    )
    assert r.status_code == 409


def test_create_with_items_and_bad_quantity(client, worker, task):
    w = auth_headers(worker)
    r = client.post(
        f"{API}/purchase-requests",
        json={"task_id": str(task.id), "items": [{"name": "Cable", "quantity": 2.5, "unit": "m"}]},
        headers=w,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "InvalidQuantity"

    r = client.post(
        f"{API}/purchase-requests",
        json={"task_id": str(task.id), "items": [{"name": "Cable", "quantity": 2, "unit": "m"}]},
        headers=w,
    )
    assert r.status_code == 201
    assert len(r.json()["purchase_request"]["items"]) == 1


def test_both_references_is_malformed(client, worker, task, installation):
    r = client.post(
        f"{API}/purchase-requests",
        json={"task_id": str(task.id), "installation_id": str(installation.id)},
        headers=auth_headers(worker),
    )
    assert r.status_code == 400
    assert r.json()["error"] == "MalformedReference"


def test_foreign_task_request_is_not_owner(client, db, project, worker, other_worker):
    foreign = make_task(db, project, assignee=other_worker)
    r = client.post(
        f"{API}/purchase-requests", json={"task_id": str(foreign.id)}, headers=auth_headers(worker)
    )
    assert r.status_code == 403
    assert r.json()["error"] == "NotOwner"


def test_worker_does_not_see_foreign_requests(client, db, project, worker, other_worker, task):
    foreign_task = make_task(db, project, assignee=other_worker)
    mine = make_purchase_request(db, task, worker)
    theirs = make_purchase_request(db, foreign_task, other_worker)
    w = auth_headers(worker)

    r = client.get(f"{API}/purchase-requests", headers=w)
    assert [p["id"] for p in r.json()["purchase_requests"]] == [str(mine.id)]

    r = client.get(f"{API}/purchase-requests/{theirs.id}", headers=w)
    assert r.status_code == 404
    assert r.json()["error"] == "NotFound"


def test_item_edit_and_delete(client, db, worker, task):
    pr = make_purchase_request(db, task, worker)
    w = auth_headers(worker)

    item = client.post(
        f"{API}/purchase-requests/{pr.id}/items",
        json={"name": "Cable", "quantity": 3, "unit": "m"},
        headers=w,
    ).json()["item"]

    r = client.put(f"{API}/purchase-requests/items/{item['id']}", json={"quantity": 4}, headers=w)
    assert r.status_code == 200
    assert r.json()["item"]["quantity"] == 4
    assert r.json()["item"]["unit"] == "m"

    r = client.delete(f"{API}/purchase-requests/items/{item['id']}", headers=w)
    assert r.status_code == 200

    r = client.get(f"{API}/purchase-requests/{pr.id}", headers=w)
    assert r.json()["purchase_request"]["items"] == []


def test_update_comment_and_delete(client, db, worker, task):
    pr = make_purchase_request(db, task, worker)
    w = auth_headers(worker)

    r = client.put(f"{API}/purchase-requests/{pr.id}", json={"comment": "urgent"}, headers=w)
    assert r.status_code == 200
    assert r.json()["purchase_request"]["comment"] == "urgent"

    r = client.delete(f"{API}/purchase-requests/{pr.id}", headers=w)
    assert r.status_code == 200

    r = client.get(f"{API}/purchase-requests/{pr.id}", headers=w)
    assert r.status_code == 404


def test_boolean_quantity_is_invalid_quantity(client, db, worker, task):
    w = auth_headers(worker)
    r = client.post(
        f"{API}/purchase-requests",
        json={"task_id": str(task.id), "items": [{"name": "Cable", "quantity": True, "unit": "m"}]},
        headers=w,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "InvalidQuantity"

    pr = make_purchase_request(db, task, worker)
    r = client.post(
        f"{API}/purchase-requests/{pr.id}/items",
        json={"name": "Cable", "quantity": True, "unit": "m"},
        headers=w,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "InvalidQuantity"


def test_numeric_string_quantity_is_invalid_quantity(client, db, worker, task):
    pr = make_purchase_request(db, task, worker)
    r = client.post(
        f"{API}/purchase-requests/{pr.id}/items",
        json={"name": "Cable", "quantity": "3", "unit": "m"},
        headers=auth_headers(worker),
    )
    assert r.status_code == 400
    assert r.json()["error"] == "InvalidQuantity"
