# tracker/api/v1/projects.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tracker.core.auth_deps import get_current_principal
from tracker.db.session import get_db
from tracker.models.enums import ProjectStatus
from tracker.policies.rbac import Principal
from tracker.schemas.installations import InstallationOut
from tracker.schemas.projects import (
    ProjectCreateRequest,
    ProjectDetailOut,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectOut,
    ProjectResponse,
    ProjectUpdateRequest,
)
from tracker.schemas.purchase_requests import MessageResponse
from tracker.schemas.tasks import TaskOut
from tracker.services.projects_service import ProjectsService

router = APIRouter(prefix="/projects")


@router.get("", response_model=ProjectListResponse)
def list_projects(
    status: Optional[ProjectStatus] = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rows = ProjectsService().list(db, principal, status=status.value if status else None)
    return {"projects": [ProjectOut.model_validate(p) for p in rows]}


@router.get("/{project_id}", response_model=ProjectDetailResponse)
def get_project(
    project_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    p, tasks, installations = ProjectsService().get_detail(db, principal, project_id)
    detail = ProjectDetailOut(
        **ProjectOut.model_validate(p).model_dump(),
        tasks=[TaskOut.model_validate(t) for t in tasks],
        installations=[InstallationOut.model_validate(i) for i in installations],
    )
    return {"project": detail}


@router.post("", response_model=ProjectResponse, status_code=201)
def create_project(
    body: ProjectCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    p = ProjectsService().create(db, principal, body.model_dump())
    return {"project": ProjectOut.model_validate(p)}


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: uuid.UUID,
    body: ProjectUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    p = ProjectsService().update(db, principal, project_id, body.model_dump(exclude_unset=True))
    return {"project": ProjectOut.model_validate(p)}


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    ProjectsService().delete(db, principal, project_id)
    return {"message": "Project deleted successfully"}
