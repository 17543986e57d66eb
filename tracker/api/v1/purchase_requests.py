# tracker/api/v1/purchase_requests.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tracker.core.auth_deps import get_current_principal
from tracker.db.session import get_db
from tracker.models.enums import PurchaseRequestStatus
from tracker.policies.rbac import Principal
from tracker.schemas.purchase_requests import (
    ItemCreateRequest,
    ItemOut,
    ItemResponse,
    ItemUpdateRequest,
    MessageResponse,
    PurchaseRequestCreateRequest,
    PurchaseRequestListResponse,
    PurchaseRequestOut,
    PurchaseRequestResponse,
    PurchaseRequestUpdateRequest,
    StatusUpdateRequest,
)
from tracker.services.purchase_requests_service import PurchaseRequestsService

router = APIRouter(prefix="/purchase-requests")


@router.get("", response_model=PurchaseRequestListResponse)
def list_purchase_requests(
    status: Optional[PurchaseRequestStatus] = Query(default=None),
    project_id: Optional[uuid.UUID] = Query(default=None),
    created_by: Optional[uuid.UUID] = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rows = PurchaseRequestsService().list(
        db,
        principal,
        status=status.value if status else None,
        project_id=project_id,
        created_by=created_by,
    )
    return {"purchase_requests": [PurchaseRequestOut.model_validate(r) for r in rows]}


# item routes are declared before /{request_id} so "items" is never read as an id
@router.put("/items/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: uuid.UUID,
    body: ItemUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    item = PurchaseRequestsService().update_item(
        db, principal, item_id, body.model_dump(exclude_unset=True)
    )
    return {"item": ItemOut.model_validate(item)}


@router.delete("/items/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    PurchaseRequestsService().delete_item(db, principal, item_id)
    return {"message": "Item deleted successfully"}


@router.get("/{request_id}", response_model=PurchaseRequestResponse)
def get_purchase_request(
    request_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    pr = PurchaseRequestsService().get(db, principal, request_id)
    return {"purchase_request": PurchaseRequestOut.model_validate(pr)}


@router.post("", response_model=PurchaseRequestResponse, status_code=201)
def create_purchase_request(
    body: PurchaseRequestCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    pr = PurchaseRequestsService().create(db, principal, body.model_dump())
    return {"purchase_request": PurchaseRequestOut.model_validate(pr)}


@router.put("/{request_id}/status", response_model=PurchaseRequestResponse)
def set_purchase_request_status(
    request_id: uuid.UUID,
    body: StatusUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    pr = PurchaseRequestsService().set_status(
        db, principal, request_id, status=body.status, comment=body.comment
    )
    return {"purchase_request": PurchaseRequestOut.model_validate(pr)}


@router.put("/{request_id}", response_model=PurchaseRequestResponse)
def update_purchase_request(
    request_id: uuid.UUID,
    body: PurchaseRequestUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    pr = PurchaseRequestsService().update(
        db, principal, request_id, body.model_dump(exclude_unset=True)
    )
    return {"purchase_request": PurchaseRequestOut.model_validate(pr)}


@router.delete("/{request_id}", response_model=MessageResponse)
def delete_purchase_request(
    request_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    PurchaseRequestsService().delete(db, principal, request_id)
    return {"message": "Purchase request deleted successfully"}


@router.post("/{request_id}/items", response_model=ItemResponse, status_code=201)
def add_item(
    request_id: uuid.UUID,
    body: ItemCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    item = PurchaseRequestsService().add_item(db, principal, request_id, body.model_dump())
    return {"item": ItemOut.model_validate(item)}
