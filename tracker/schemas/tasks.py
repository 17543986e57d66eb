#tracker/schemas/tasks.py
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tracker.models.enums import WorkStatus
from tracker.schemas.purchase_requests import PurchaseRequestOut


class TaskCreateRequest(BaseModel):
    project_id: Optional[uuid.UUID] = None
    title: Optional[str] = Field(default=None, max_length=256)
    description: Optional[str] = None
    assignee_id: Optional[uuid.UUID] = None
    status: WorkStatus = WorkStatus.new
    due_date: Optional[date] = None


class TaskUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=256)
    description: Optional[str] = None
    assignee_id: Optional[uuid.UUID] = None
    status: Optional[WorkStatus] = None
    due_date: Optional[date] = None


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    description: Optional[str] = None
    assignee_id: Optional[uuid.UUID] = None
    status: WorkStatus
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TaskDetailOut(TaskOut):
    purchase_requests: List[PurchaseRequestOut] = []


class TaskResponse(BaseModel):
    task: TaskOut


class TaskDetailResponse(BaseModel):
    task: TaskDetailOut


class TaskListResponse(BaseModel):
    tasks: List[TaskOut]
