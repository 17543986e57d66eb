import uuid

import pytest

from tracker.core.errors import NotFound, PolicyDenied, Reason
from tracker.services.installations_service import InstallationsService
from tracker.services.projects_service import ProjectsService
from tracker.services.tasks_service import TasksService
from tracker.tests.factories import make_project, make_purchase_request, make_task, principal_of


def test_worker_creating_project_is_role_forbidden(db, worker):
    with pytest.raises(PolicyDenied) as exc:
        ProjectsService().create(db, principal_of(worker), {"name": "Mine"})
    assert exc.value.reason == Reason.ROLE_FORBIDDEN


def test_manager_project_crud(db, manager):
    svc = ProjectsService()
    m = principal_of(manager)

    p = svc.create(db, m, {"name": " Depot ", "description": "north wing"})
    assert p.name == "Depot"
    assert p.status == "active"

    p = svc.update(db, m, p.id, {"status": "archived", "name": None})
    assert p.status == "archived"
    assert p.name == "Depot"

    svc.delete(db, m, p.id)
    with pytest.raises(NotFound):
        svc.get(db, m, p.id)


def test_project_without_name_is_missing_field(db, manager):
    with pytest.raises(PolicyDenied) as exc:
        ProjectsService().create(db, principal_of(manager), {"name": ""})
    assert exc.value.reason == Reason.MISSING_FIELD


def test_worker_sees_projects_where_assigned(db, manager, worker, project, task):
    svc = ProjectsService()
    make_project(db, manager, name="Elsewhere")

    assert [p.id for p in svc.list(db, principal_of(worker))] == [project.id]
    assert len(svc.list(db, principal_of(manager))) == 2


def test_project_detail_filters_children(db, worker, other_worker, project, task, installation):
    make_task(db, project, assignee=other_worker, title="Not mine")

    p, tasks, installations = ProjectsService().get_detail(db, principal_of(worker), project.id)
    assert p.id == project.id
    assert [t.id for t in tasks] == [task.id]
    assert [i.id for i in installations] == [installation.id]


def test_worker_updating_foreign_task_is_not_owner(db, project, worker, other_worker):
    t1 = make_task(db, project, assignee=worker)
    with pytest.raises(PolicyDenied) as exc:
        TasksService().update(db, principal_of(other_worker), t1.id, {"status": "done"})
    assert exc.value.reason == Reason.NOT_OWNER


def test_worker_updates_own_task_status(db, worker, task):
    t = TasksService().update(db, principal_of(worker), task.id, {"status": "waiting_materials"})
    assert t.status == "waiting_materials"


def test_worker_cannot_delete_own_task(db, worker, task):
    with pytest.raises(PolicyDenied) as exc:
        TasksService().delete(db, principal_of(worker), task.id)
    assert exc.value.reason == Reason.ROLE_FORBIDDEN


def test_task_create_on_missing_project(db, manager):
    with pytest.raises(NotFound):
        TasksService().create(db, principal_of(manager), {"project_id": uuid.uuid4(), "title": "x"})


def test_unassign_with_explicit_null(db, manager, task):
    t = TasksService().update(db, principal_of(manager), task.id, {"assignee_id": None, "title": None})
    assert t.assignee_id is None
    assert t.title == "Pull cable"


def test_worker_reads_only_assigned_tasks(db, worker, other_worker, project, task):
    svc = TasksService()
    foreign = make_task(db, project, assignee=other_worker)

    assert [t.id for t in svc.list(db, principal_of(worker))] == [task.id]
    with pytest.raises(NotFound):
        svc.get(db, principal_of(worker), foreign.id)


def test_task_list_filters(db, manager, worker, project, task):
    make_task(db, project, assignee=None, status="new", title="Unassigned")
    svc = TasksService()
    m = principal_of(manager)

    assert [t.id for t in svc.list(db, m, assignee_id=worker.id)] == [task.id]
    assert [t.title for t in svc.list(db, m, status="new")] == ["Unassigned"]
    assert len(svc.list(db, m, project_id=project.id)) == 2


def test_task_detail_shows_visible_requests(db, manager, worker, task):
    mgr_pr = make_purchase_request(db, task, manager)
    own_pr = make_purchase_request(db, task, worker)

    _, requests = TasksService().get_detail(db, principal_of(worker), task.id)
    assert [r.id for r in requests] == [own_pr.id]

    _, requests = TasksService().get_detail(db, principal_of(manager), task.id)
    assert {r.id for r in requests} == {mgr_pr.id, own_pr.id}


def test_installation_create_and_worker_update(db, manager, worker, project):
    svc = InstallationsService()
    inst = svc.create(
        db,
        principal_of(manager),
        {"project_id": project.id, "title": "Mount panel", "assignee_id": worker.id, "address": "Main st 1"},
    )
    assert inst.status == "new"

    inst = svc.update(db, principal_of(worker), inst.id, {"status": "in_progress"})
    assert inst.status == "in_progress"
    assert inst.address == "Main st 1"


def test_unknown_assignee_is_rejected_before_commit(db, manager, project, task):
    svc = TasksService()
    with pytest.raises(NotFound):
        svc.create(db, principal_of(manager), {"project_id": project.id, "title": "x", "assignee_id": uuid.uuid4()})
    with pytest.raises(NotFound):
        svc.update(db, principal_of(manager), task.id, {"assignee_id": uuid.uuid4()})

    assert len(svc.list(db, principal_of(manager))) == 1
