#tracker/schemas/projects.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tracker.models.enums import ProjectStatus
from tracker.schemas.installations import InstallationOut
from tracker.schemas.tasks import TaskOut


class ProjectCreateRequest(BaseModel):
    # presence is checked by the create validator, not here
    name: Optional[str] = Field(default=None, max_length=256)
    description: Optional[str] = None


class ProjectUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=256)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    status: ProjectStatus
    created_by: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectDetailOut(ProjectOut):
    tasks: List[TaskOut] = []
    installations: List[InstallationOut] = []


class ProjectResponse(BaseModel):
    project: ProjectOut


class ProjectDetailResponse(BaseModel):
    project: ProjectDetailOut


class ProjectListResponse(BaseModel):
    projects: List[ProjectOut]
