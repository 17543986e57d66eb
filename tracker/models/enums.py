# tracker/models/enums.py
from __future__ import annotations
from enum import Enum


class Role(str, Enum):
    manager = "manager"
    worker = "worker"


class ProjectStatus(str, Enum):
    active = "active"
    archived = "archived"


class WorkStatus(str, Enum):
    # shared by tasks and installations
    new = "new"
    planned = "planned"
    in_progress = "in_progress"
    waiting_materials = "waiting_materials"
    done = "done"
    postponed = "postponed"


class PurchaseRequestStatus(str, Enum):
    draft = "draft"
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
