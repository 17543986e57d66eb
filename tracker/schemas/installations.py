#tracker/schemas/installations.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tracker.models.enums import WorkStatus
from tracker.schemas.purchase_requests import PurchaseRequestOut


class InstallationCreateRequest(BaseModel):
    project_id: Optional[uuid.UUID] = None
    title: Optional[str] = Field(default=None, max_length=256)
    description: Optional[str] = None
    assignee_id: Optional[uuid.UUID] = None
    status: WorkStatus = WorkStatus.new
    scheduled_at: Optional[datetime] = None
    address: Optional[str] = Field(default=None, max_length=512)


class InstallationUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=256)
    description: Optional[str] = None
    assignee_id: Optional[uuid.UUID] = None
    status: Optional[WorkStatus] = None
    scheduled_at: Optional[datetime] = None
    address: Optional[str] = Field(default=None, max_length=512)


class InstallationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    description: Optional[str] = None
    assignee_id: Optional[uuid.UUID] = None
    status: WorkStatus
    scheduled_at: Optional[datetime] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class InstallationDetailOut(InstallationOut):
    purchase_requests: List[PurchaseRequestOut] = []


class InstallationResponse(BaseModel):
    installation: InstallationOut


class InstallationDetailResponse(BaseModel):
    installation: InstallationDetailOut


class InstallationListResponse(BaseModel):
    installations: List[InstallationOut]
