# tracker/services/projects_service.py
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from tracker.core.errors import NotFound
from tracker.models.installation import Installation
from tracker.models.project import Project
from tracker.models.task import Task
from tracker.policies.access_policy import Operation, Resource, can_mutate, visibility_filter
from tracker.policies.rbac import Principal
from tracker.policies.validation import validate_create, validate_update
from tracker.services.store import as_uuid, commit, get_or_404, now

UPDATABLE_FIELDS = ("name", "description", "status")


class ProjectsService:
    def list(
        self,
        db: Session,
        principal: Principal,
        *,
        status: Optional[str] = None,
    ) -> List[Project]:
        # workers see projects where they hold at least one assignment
        stmt = select(Project).where(
            visibility_filter(principal, Resource.PROJECT).clause(Project)
        )
        if status:
            stmt = stmt.where(Project.status == status)
        stmt = stmt.order_by(Project.created_at.desc())
        return list(db.execute(stmt).scalars().all())

    def get(self, db: Session, principal: Principal, project_id: uuid.UUID) -> Project:
        p = db.get(Project, project_id)
        if p is None or not visibility_filter(principal, Resource.PROJECT)(p):
            raise NotFound("Project not found.")
        return p

    def get_detail(
        self, db: Session, principal: Principal, project_id: uuid.UUID
    ) -> Tuple[Project, List[Task], List[Installation]]:
        p = self.get(db, principal, project_id)

        tasks = db.execute(
            select(Task)
            .where(
                Task.project_id == p.id,
                visibility_filter(principal, Resource.TASK).clause(Task),
            )
            .order_by(Task.created_at.desc())
        ).scalars().all()

        installations = db.execute(
            select(Installation)
            .where(
                Installation.project_id == p.id,
                visibility_filter(principal, Resource.INSTALLATION).clause(Installation),
            )
            .order_by(Installation.scheduled_at.asc())
        ).scalars().all()

        return p, list(tasks), list(installations)

    def create(self, db: Session, principal: Principal, payload: Dict[str, Any]) -> Project:
        can_mutate(principal, Resource.PROJECT, Operation.CREATE).enforce()
        validate_create(Resource.PROJECT, payload).enforce()

        p = Project(
            name=payload["name"].strip(),
            description=payload.get("description"),
            status="active",
            created_by=as_uuid(principal.user_id),
            created_at=now(),
            updated_at=now(),
        )
        db.add(p)
        commit(db)
        db.refresh(p)
        return p

    def update(
        self,
        db: Session,
        principal: Principal,
        project_id: uuid.UUID,
        changes: Dict[str, Any],
    ) -> Project:
        p = get_or_404(db, Project, project_id, "Project")
        can_mutate(principal, Resource.PROJECT, Operation.UPDATE, p).enforce()
        validate_update(Resource.PROJECT, changes).enforce()

        for field in UPDATABLE_FIELDS:
            if field in changes and changes[field] is not None:
                value = changes[field]
                setattr(p, field, getattr(value, "value", value))

        p.updated_at = now()
        commit(db)
        db.refresh(p)
        return p

    def delete(self, db: Session, principal: Principal, project_id: uuid.UUID) -> None:
        p = get_or_404(db, Project, project_id, "Project")
        can_mutate(principal, Resource.PROJECT, Operation.DELETE, p).enforce()

        db.delete(p)
        commit(db)
