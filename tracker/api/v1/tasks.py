# tracker/api/v1/tasks.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tracker.core.auth_deps import get_current_principal
from tracker.db.session import get_db
from tracker.models.enums import WorkStatus
from tracker.policies.rbac import Principal
from tracker.schemas.purchase_requests import MessageResponse, PurchaseRequestOut
from tracker.schemas.tasks import (
    TaskCreateRequest,
    TaskDetailOut,
    TaskDetailResponse,
    TaskListResponse,
    TaskOut,
    TaskResponse,
    TaskUpdateRequest,
)
from tracker.services.tasks_service import TasksService

router = APIRouter(prefix="/tasks")


@router.get("", response_model=TaskListResponse)
def list_tasks(
    project_id: Optional[uuid.UUID] = Query(default=None),
    assignee_id: Optional[uuid.UUID] = Query(default=None),
    status: Optional[WorkStatus] = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rows = TasksService().list(
        db,
        principal,
        project_id=project_id,
        assignee_id=assignee_id,
        status=status.value if status else None,
    )
    return {"tasks": [TaskOut.model_validate(t) for t in rows]}


@router.get("/{task_id}", response_model=TaskDetailResponse)
def get_task(
    task_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    task, requests = TasksService().get_detail(db, principal, task_id)
    detail = TaskDetailOut(
        **TaskOut.model_validate(task).model_dump(),
        purchase_requests=[PurchaseRequestOut.model_validate(r) for r in requests],
    )
    return {"task": detail}


@router.post("", response_model=TaskResponse, status_code=201)
def create_task(
    body: TaskCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    task = TasksService().create(db, principal, body.model_dump())
    return {"task": TaskOut.model_validate(task)}


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: uuid.UUID,
    body: TaskUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    task = TasksService().update(db, principal, task_id, body.model_dump(exclude_unset=True))
    return {"task": TaskOut.model_validate(task)}


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    TasksService().delete(db, principal, task_id)
    return {"message": "Task deleted successfully"}
