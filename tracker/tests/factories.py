import uuid

from tracker.core.security import create_access_token
from tracker.models.enums import Role
from tracker.models.installation import Installation
from tracker.models.project import Project
from tracker.models.purchase_request import PurchaseRequest
from tracker.models.task import Task
from tracker.models.user import User
from tracker.policies.rbac import Principal


def make_user(db, role=Role.worker, name=None):
    uid = uuid.uuid4()
    u = User(
        id=uid,
        email=f"{uid.hex[:12]}@example.com",
        name=name or f"{role.value}-{uid.hex[:6]}",
        role=role.value,
        # direct rows skip bcrypt; login tests go through auth_service
        password_hash="not-a-real-hash",
        is_active=True,
    )
    db.add(u)
    db.commit()
    return u


def make_project(db, manager, name="Test Project"):
    p = Project(name=name, status="active", created_by=manager.id)
    db.add(p)
    db.commit()
    return p


def make_task(db, project, assignee=None, status="in_progress", title="Pull cable"):
    t = Task(
        project_id=project.id,
        title=title,
        assignee_id=assignee.id if assignee else None,
        status=status,
    )
    db.add(t)
    db.commit()
    return t


def make_installation(db, project, assignee=None, title="Mount panel"):
    i = Installation(
        project_id=project.id,
        title=title,
        assignee_id=assignee.id if assignee else None,
        status="planned",
    )
    db.add(i)
    db.commit()
    return i


def make_purchase_request(db, task, creator, status="pending"):
    pr = PurchaseRequest(task_id=task.id, created_by=creator.id, status=status)
    db.add(pr)
    db.commit()
    return pr


def principal_of(user) -> Principal:
    return Principal(user_id=str(user.id), role=Role(user.role), name=user.name, email=user.email)


def auth_headers(user) -> dict:
    token = create_access_token(str(user.id), user.role, name=user.name, email=user.email)
    return {"Authorization": f"Bearer {token}"}
