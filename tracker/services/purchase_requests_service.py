# tracker/services/purchase_requests_service.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from tracker.core.errors import NotFound, StoreError
from tracker.models.installation import Installation
from tracker.models.purchase_request import PurchaseRequest, PurchaseRequestItem
from tracker.models.task import Task
from tracker.policies.access_policy import Operation, Resource, can_mutate, visibility_filter
from tracker.policies.purchase_request_policy import INITIAL_STATUS
from tracker.policies.rbac import Principal
from tracker.policies.validation import validate_create, validate_item_update
from tracker.services.store import as_uuid, commit, get_or_404, now

logger = logging.getLogger("tracker.purchase_requests")

ITEM_FIELDS = ("name", "quantity", "unit", "note")


class PurchaseRequestsService:
    """
    Purchase requests and their items.

    Public methods:
    - list / get (visibility-filtered)
    - create (request + optional items as one unit of work)
    - update (comment), set_status (manager decision), delete
    - add_item / update_item / delete_item
    """

    # ---------------------------
    # READS
    # ---------------------------

    def list(
        self,
        db: Session,
        principal: Principal,
        *,
        status: Optional[str] = None,
        project_id: Optional[uuid.UUID] = None,
        created_by: Optional[uuid.UUID] = None,
    ) -> List[PurchaseRequest]:
        stmt = (
            select(PurchaseRequest)
            .options(selectinload(PurchaseRequest.items))
            .where(visibility_filter(principal, Resource.PURCHASE_REQUEST).clause(PurchaseRequest))
        )
        if status:
            stmt = stmt.where(PurchaseRequest.status == status)
        if created_by:
            stmt = stmt.where(PurchaseRequest.created_by == created_by)
        if project_id:
            # a request belongs to a project through its task or installation
            stmt = stmt.where(
                or_(
                    PurchaseRequest.task.has(Task.project_id == project_id),
                    PurchaseRequest.installation.has(Installation.project_id == project_id),
                )
            )
        stmt = stmt.order_by(PurchaseRequest.created_at.desc())
        return list(db.execute(stmt).scalars().all())

    def get(self, db: Session, principal: Principal, request_id: uuid.UUID) -> PurchaseRequest:
        pr = db.get(PurchaseRequest, request_id)
        if pr is None or not visibility_filter(principal, Resource.PURCHASE_REQUEST)(pr):
            raise NotFound("Purchase request not found.")
        return pr

    # ---------------------------
    # CREATE
    # ---------------------------

    def _referenced_assignment(self, db: Session, payload: Dict[str, Any]):
        if payload.get("task_id") is not None:
            return get_or_404(db, Task, payload["task_id"], "Task")
        return get_or_404(db, Installation, payload["installation_id"], "Installation")

    def create(self, db: Session, principal: Principal, payload: Dict[str, Any]) -> PurchaseRequest:
        validate_create(Resource.PURCHASE_REQUEST, payload).enforce()

        parent = self._referenced_assignment(db, payload)
        can_mutate(
            principal, Resource.PURCHASE_REQUEST, Operation.CREATE, parent=parent
        ).enforce()

        return self._create_with_items(db, principal, payload)

    def _create_with_items(
        self, db: Session, principal: Principal, payload: Dict[str, Any]
    ) -> PurchaseRequest:
        """
        Parent row and items are one unit of work. If any item insert fails
        the whole session is rolled back so no request without its items is
        left behind.
        """
        pr = PurchaseRequest(
            task_id=as_uuid(payload.get("task_id")),
            installation_id=as_uuid(payload.get("installation_id")),
            created_by=as_uuid(principal.user_id),
            comment=payload.get("comment"),
            status=INITIAL_STATUS.value,
            created_at=now(),
            updated_at=now(),
        )
        try:
            db.add(pr)
            db.flush()
            self._insert_items(db, pr, payload.get("items") or [])
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                "purchase request create rolled back",
                extra={"created_by": principal.user_id, "error": str(e)},
            )
            raise StoreError() from e

        db.refresh(pr)
        return pr

    def _insert_items(
        self, db: Session, pr: PurchaseRequest, items: Iterable[Dict[str, Any]]
    ) -> None:
        for item in items:
            db.add(
                PurchaseRequestItem(
                    purchase_request_id=pr.id,
                    name=item["name"].strip(),
                    quantity=item["quantity"],
                    unit=item["unit"].strip(),
                    note=item.get("note"),
                    created_at=now(),
                    updated_at=now(),
                )
            )
        db.flush()

    # ---------------------------
    # MUTATIONS
    # ---------------------------

    def update(
        self,
        db: Session,
        principal: Principal,
        request_id: uuid.UUID,
        changes: Dict[str, Any],
    ) -> PurchaseRequest:
        pr = get_or_404(db, PurchaseRequest, request_id, "Purchase request")
        can_mutate(principal, Resource.PURCHASE_REQUEST, Operation.UPDATE, pr).enforce()

        if "comment" in changes:
            pr.comment = changes["comment"]
        pr.updated_at = now()
        commit(db)
        db.refresh(pr)
        return pr

    def set_status(
        self,
        db: Session,
        principal: Principal,
        request_id: uuid.UUID,
        *,
        status: str,
        comment: Optional[str] = None,
    ) -> PurchaseRequest:
        pr = get_or_404(db, PurchaseRequest, request_id, "Purchase request")
        can_mutate(
            principal,
            Resource.PURCHASE_REQUEST,
            Operation.SET_STATUS,
            pr,
            target_status=status,
        ).enforce()

        pr.status = status
        pr.approved_by = as_uuid(principal.user_id)
        if comment is not None:
            pr.comment = comment
        pr.updated_at = now()
        commit(db)
        db.refresh(pr)

        logger.info(
            "purchase request decided",
            extra={"purchase_request_id": str(pr.id), "status": pr.status, "by": principal.user_id},
        )
        return pr

    def delete(self, db: Session, principal: Principal, request_id: uuid.UUID) -> None:
        pr = get_or_404(db, PurchaseRequest, request_id, "Purchase request")
        can_mutate(principal, Resource.PURCHASE_REQUEST, Operation.DELETE, pr).enforce()

        db.delete(pr)
        commit(db)

    # ---------------------------
    # ITEMS
    # ---------------------------

    def add_item(
        self,
        db: Session,
        principal: Principal,
        request_id: uuid.UUID,
        payload: Dict[str, Any],
    ) -> PurchaseRequestItem:
        validate_create(Resource.PURCHASE_REQUEST_ITEM, payload).enforce()

        pr = get_or_404(db, PurchaseRequest, request_id, "Purchase request")
        can_mutate(principal, Resource.PURCHASE_REQUEST_ITEM, Operation.ADD_ITEM, pr).enforce()

        item = PurchaseRequestItem(
            purchase_request_id=pr.id,
            name=payload["name"].strip(),
            quantity=payload["quantity"],
            unit=payload["unit"].strip(),
            note=payload.get("note"),
            created_at=now(),
            updated_at=now(),
        )
        db.add(item)
        commit(db)
        db.refresh(item)
        return item

    def update_item(
        self,
        db: Session,
        principal: Principal,
        item_id: uuid.UUID,
        changes: Dict[str, Any],
    ) -> PurchaseRequestItem:
        item = get_or_404(db, PurchaseRequestItem, item_id, "Item")
        can_mutate(
            principal,
            Resource.PURCHASE_REQUEST_ITEM,
            Operation.UPDATE_ITEM,
            item.purchase_request,
        ).enforce()
        validate_item_update(changes).enforce()

        for field in ITEM_FIELDS:
            if field in changes and (changes[field] is not None or field == "note"):
                setattr(item, field, changes[field])

        item.updated_at = now()
        commit(db)
        db.refresh(item)
        return item

    def delete_item(self, db: Session, principal: Principal, item_id: uuid.UUID) -> None:
        item = get_or_404(db, PurchaseRequestItem, item_id, "Item")
        can_mutate(
            principal,
            Resource.PURCHASE_REQUEST_ITEM,
            Operation.DELETE_ITEM,
            item.purchase_request,
        ).enforce()

        db.delete(item)
        commit(db)
