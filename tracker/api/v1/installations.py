# tracker/api/v1/installations.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tracker.core.auth_deps import get_current_principal
from tracker.db.session import get_db
from tracker.models.enums import WorkStatus
from tracker.policies.rbac import Principal
from tracker.schemas.installations import (
    InstallationCreateRequest,
    InstallationDetailOut,
    InstallationDetailResponse,
    InstallationListResponse,
    InstallationOut,
    InstallationResponse,
    InstallationUpdateRequest,
)
from tracker.schemas.purchase_requests import MessageResponse, PurchaseRequestOut
from tracker.services.installations_service import InstallationsService

router = APIRouter(prefix="/installations")


@router.get("", response_model=InstallationListResponse)
def list_installations(
    project_id: Optional[uuid.UUID] = Query(default=None),
    assignee_id: Optional[uuid.UUID] = Query(default=None),
    status: Optional[WorkStatus] = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rows = InstallationsService().list(
        db,
        principal,
        project_id=project_id,
        assignee_id=assignee_id,
        status=status.value if status else None,
    )
    return {"installations": [InstallationOut.model_validate(i) for i in rows]}


@router.get("/{installation_id}", response_model=InstallationDetailResponse)
def get_installation(
    installation_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    inst, requests = InstallationsService().get_detail(db, principal, installation_id)
    detail = InstallationDetailOut(
        **InstallationOut.model_validate(inst).model_dump(),
        purchase_requests=[PurchaseRequestOut.model_validate(r) for r in requests],
    )
    return {"installation": detail}


@router.post("", response_model=InstallationResponse, status_code=201)
def create_installation(
    body: InstallationCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    inst = InstallationsService().create(db, principal, body.model_dump())
    return {"installation": InstallationOut.model_validate(inst)}


@router.put("/{installation_id}", response_model=InstallationResponse)
def update_installation(
    installation_id: uuid.UUID,
    body: InstallationUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    inst = InstallationsService().update(
        db, principal, installation_id, body.model_dump(exclude_unset=True)
    )
    return {"installation": InstallationOut.model_validate(inst)}


@router.delete("/{installation_id}", response_model=MessageResponse)
def delete_installation(
    installation_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    InstallationsService().delete(db, principal, installation_id)
    return {"message": "Installation deleted successfully"}
