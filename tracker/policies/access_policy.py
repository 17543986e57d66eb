# tracker/policies/access_policy.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy import or_, true

from tracker.core.errors import Reason
from tracker.policies.decision import ALLOW, Decision
from tracker.policies.purchase_request_policy import check_transition, is_mutable
from tracker.policies.rbac import Principal, same_user


class Resource(str, Enum):
    PROJECT = "project"
    TASK = "task"
    INSTALLATION = "installation"
    PURCHASE_REQUEST = "purchase_request"
    PURCHASE_REQUEST_ITEM = "purchase_request_item"
    MATERIAL = "material"


class Operation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ADD_ITEM = "add_item"
    UPDATE_ITEM = "update_item"
    DELETE_ITEM = "delete_item"
    SET_STATUS = "set_status"


# Worker visibility: a row is visible when ANY path ends at the caller's id.
# Hops through relationships; collection hops match if any element matches.
OWNER_PATHS: dict[Resource, Tuple[Tuple[str, ...], ...]] = {
    Resource.TASK: (("assignee_id",),),
    Resource.INSTALLATION: (("assignee_id",),),
    Resource.PURCHASE_REQUEST: (("created_by",),),
    Resource.PURCHASE_REQUEST_ITEM: (("purchase_request", "created_by"),),
    Resource.PROJECT: (("tasks", "assignee_id"), ("installations", "assignee_id")),
}

MANAGER_RESOURCES = {
    Resource.PROJECT,
    Resource.TASK,
    Resource.INSTALLATION,
    Resource.MATERIAL,
}
ASSIGNMENT_RESOURCES = {Resource.TASK, Resource.INSTALLATION}
REQUEST_RESOURCES = {Resource.PURCHASE_REQUEST, Resource.PURCHASE_REQUEST_ITEM}
REQUEST_MUTATIONS = {
    Operation.UPDATE,
    Operation.DELETE,
    Operation.ADD_ITEM,
    Operation.UPDATE_ITEM,
    Operation.DELETE_ITEM,
}


def _path_matches(value: Any, hops: Tuple[str, ...], user_id: str) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple, set)):
        return any(_path_matches(v, hops, user_id) for v in value)
    if not hops:
        return same_user(value, user_id)
    return _path_matches(getattr(value, hops[0], None), hops[1:], user_id)


def _path_clause(model, hops: Tuple[str, ...], user_id: uuid.UUID):
    attr = getattr(model, hops[0])
    if len(hops) == 1:
        return attr == user_id
    target = attr.property.mapper.class_
    inner = _path_clause(target, hops[1:], user_id)
    return attr.any(inner) if attr.property.uselist else attr.has(inner)


@dataclass(frozen=True)
class VisibilityFilter:
    """
    Row predicate for listing/reading.

    The same owner paths drive the in-memory check (``__call__``/``apply``)
    and the SQL WHERE clause (``clause``).
    """

    owner_paths: Tuple[Tuple[str, ...], ...] = ()
    user_id: Optional[str] = None

    @property
    def unrestricted(self) -> bool:
        return not self.owner_paths

    def __call__(self, row: Any) -> bool:
        if self.unrestricted:
            return True
        return any(
            _path_matches(getattr(row, path[0], None), path[1:], self.user_id)
            for path in self.owner_paths
        )

    def apply(self, rows: Iterable[Any]) -> List[Any]:
        return [r for r in rows if self(r)]

    def clause(self, model):
        if self.unrestricted:
            return true()
        uid = uuid.UUID(str(self.user_id))
        return or_(*(_path_clause(model, path, uid) for path in self.owner_paths))


def visibility_filter(principal: Principal, resource: Resource) -> VisibilityFilter:
    if principal.is_manager or resource not in OWNER_PATHS:
        return VisibilityFilter()
    return VisibilityFilter(owner_paths=OWNER_PATHS[resource], user_id=principal.user_id)


def can_mutate(
    principal: Principal,
    resource: Resource,
    operation: Operation,
    existing: Any = None,
    *,
    target_status: Optional[str] = None,
    parent: Any = None,
) -> Decision:
    """
    Decide whether ``principal`` may perform ``operation``.

    existing: the row being changed. For purchase-request item operations
        this is the owning purchase request, whose creator and status gate
        the change.
    target_status: requested status for SET_STATUS.
    parent: the referenced task/installation when creating a purchase request.

    Rules are checked in order and the first match wins.
    """
    if principal.is_manager:
        if resource in MANAGER_RESOURCES:
            return ALLOW
        if resource in REQUEST_RESOURCES:
            if operation == Operation.SET_STATUS:
                return check_transition(existing.status, target_status)
            if operation == Operation.CREATE:
                return ALLOW
            if operation in REQUEST_MUTATIONS:
                if not is_mutable(existing.status):
                    return Decision.deny(
                        Reason.INVALID_STATE_FOR_MUTATION,
                        f"Purchase request is {existing.status} and can no longer be changed.",
                    )
                return ALLOW
        return Decision.deny(Reason.ROLE_FORBIDDEN, "Operation not permitted.")

    if resource in MANAGER_RESOURCES:
        if operation == Operation.UPDATE and resource in ASSIGNMENT_RESOURCES:
            if not same_user(getattr(existing, "assignee_id", None), principal.user_id):
                return Decision.deny(
                    Reason.NOT_OWNER, f"You can only update your own {resource.value}s."
                )
            return ALLOW
        return Decision.deny(
            Reason.ROLE_FORBIDDEN, "Access denied. Manager role required."
        )

    if resource in REQUEST_RESOURCES:
        if operation == Operation.CREATE:
            if not same_user(getattr(parent, "assignee_id", None), principal.user_id):
                return Decision.deny(
                    Reason.NOT_OWNER,
                    "You can only create requests for your own tasks or installations.",
                )
            return ALLOW
        if operation in REQUEST_MUTATIONS:
            if not same_user(existing.created_by, principal.user_id):
                return Decision.deny(
                    Reason.NOT_OWNER, "You can only change your own requests."
                )
            if not is_mutable(existing.status):
                return Decision.deny(
                    Reason.INVALID_STATE_FOR_MUTATION,
                    "You can only change draft or pending requests.",
                )
            return ALLOW

    return Decision.deny(Reason.ROLE_FORBIDDEN, "Operation not permitted.")
