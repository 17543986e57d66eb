# tracker/services/installations_service.py
from __future__ import annotations

from tracker.models.installation import Installation
from tracker.policies.access_policy import Resource
from tracker.services.work_items_service import WorkItemService


class InstallationsService(WorkItemService):
    model = Installation
    resource = Resource.INSTALLATION
    label = "Installation"
    fields = ("title", "description", "assignee_id", "status", "scheduled_at", "address")
    request_fk = "installation_id"

    def _order_by(self):
        # calendar order
        return Installation.scheduled_at.asc()
