# tracker/services/tasks_service.py
from __future__ import annotations

from tracker.models.task import Task
from tracker.policies.access_policy import Resource
from tracker.services.work_items_service import WorkItemService


class TasksService(WorkItemService):
    model = Task
    resource = Resource.TASK
    label = "Task"
    fields = ("title", "description", "assignee_id", "status", "due_date")
    request_fk = "task_id"
