# tracker/services/work_items_service.py
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from tracker.core.errors import NotFound
from tracker.models.project import Project
from tracker.models.purchase_request import PurchaseRequest
from tracker.models.user import User
from tracker.policies.access_policy import Operation, Resource, can_mutate, visibility_filter
from tracker.policies.rbac import Principal
from tracker.policies.validation import validate_create, validate_update
from tracker.services.store import as_uuid, commit, get_or_404, now


class WorkItemService:
    """
    Shared behaviour for assignable work rows (tasks, installations).

    Subclasses set:
    - model: mapped class with project_id / assignee_id / status
    - resource: policy Resource
    - label: human name used in NotFound messages
    - fields: columns accepted on create/update besides project_id
    - request_fk: PurchaseRequest column pointing at this model
    """

    model: Any = None
    resource: Resource = None
    label: str = ""
    fields: Tuple[str, ...] = ()
    request_fk: str = ""

    def _order_by(self):
        return self.model.created_at.desc()

    def _check_assignee(self, db: Session, assignee_id) -> None:
        # unknown ids answer 404 here rather than failing the FK at commit
        if assignee_id is not None:
            get_or_404(db, User, assignee_id, "Assignee")

    # ---------------------------
    # READS
    # ---------------------------

    def list(
        self,
        db: Session,
        principal: Principal,
        *,
        project_id: Optional[uuid.UUID] = None,
        assignee_id: Optional[uuid.UUID] = None,
        status: Optional[str] = None,
    ) -> List[Any]:
        stmt = select(self.model).where(
            visibility_filter(principal, self.resource).clause(self.model)
        )
        if project_id:
            stmt = stmt.where(self.model.project_id == project_id)
        if assignee_id:
            stmt = stmt.where(self.model.assignee_id == assignee_id)
        if status:
            stmt = stmt.where(self.model.status == status)
        stmt = stmt.order_by(self._order_by())
        return list(db.execute(stmt).scalars().all())

    def get(self, db: Session, principal: Principal, row_id: uuid.UUID) -> Any:
        row = db.get(self.model, row_id)
        if row is None or not visibility_filter(principal, self.resource)(row):
            raise NotFound(f"{self.label} not found.")
        return row

    def get_detail(
        self, db: Session, principal: Principal, row_id: uuid.UUID
    ) -> Tuple[Any, List[PurchaseRequest]]:
        """
        Row plus the purchase requests raised against it that the caller may see.
        """
        row = self.get(db, principal, row_id)
        requests = db.execute(
            select(PurchaseRequest)
            .options(selectinload(PurchaseRequest.items))
            .where(
                getattr(PurchaseRequest, self.request_fk) == row.id,
                visibility_filter(principal, Resource.PURCHASE_REQUEST).clause(PurchaseRequest),
            )
            .order_by(PurchaseRequest.created_at.desc())
        ).scalars().all()
        return row, list(requests)

    # ---------------------------
    # MUTATIONS
    # ---------------------------

    def create(self, db: Session, principal: Principal, payload: Dict[str, Any]) -> Any:
        can_mutate(principal, self.resource, Operation.CREATE).enforce()
        validate_create(self.resource, payload).enforce()

        project_id = as_uuid(payload["project_id"])
        get_or_404(db, Project, project_id, "Project")
        self._check_assignee(db, payload.get("assignee_id"))

        values = {f: payload.get(f) for f in self.fields if payload.get(f) is not None}
        if "status" in values:
            values["status"] = getattr(values["status"], "value", values["status"])
        values["title"] = payload["title"].strip()

        row = self.model(project_id=project_id, created_at=now(), updated_at=now(), **values)
        db.add(row)
        commit(db)
        db.refresh(row)
        return row

    def update(
        self,
        db: Session,
        principal: Principal,
        row_id: uuid.UUID,
        changes: Dict[str, Any],
    ) -> Any:
        row = get_or_404(db, self.model, row_id, self.label)
        can_mutate(principal, self.resource, Operation.UPDATE, row).enforce()
        validate_update(self.resource, changes).enforce()
        if "assignee_id" in changes:
            self._check_assignee(db, changes["assignee_id"])

        # explicit null is honoured for assignee_id (unassign); other fields ignore it
        for field in self.fields:
            if field not in changes:
                continue
            value = changes[field]
            if value is None and field != "assignee_id":
                continue
            setattr(row, field, getattr(value, "value", value))

        row.updated_at = now()
        commit(db)
        db.refresh(row)
        return row

    def delete(self, db: Session, principal: Principal, row_id: uuid.UUID) -> None:
        row = get_or_404(db, self.model, row_id, self.label)
        can_mutate(principal, self.resource, Operation.DELETE, row).enforce()

        db.delete(row)
        commit(db)
