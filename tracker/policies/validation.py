# tracker/policies/validation.py
from __future__ import annotations

from typing import Any, Iterable, Mapping

from tracker.core.errors import Reason
from tracker.policies.access_policy import Resource
from tracker.policies.decision import ALLOW, Decision

REQUIRED_CREATE_FIELDS: dict[Resource, tuple[str, ...]] = {
    Resource.PROJECT: ("name",),
    Resource.TASK: ("project_id", "title"),
    Resource.INSTALLATION: ("project_id", "title"),
    Resource.MATERIAL: ("name", "category", "default_unit"),
    Resource.PURCHASE_REQUEST_ITEM: ("name", "quantity", "unit"),
}


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _missing(payload: Mapping[str, Any], fields: Iterable[str]) -> list[str]:
    return [f for f in fields if _blank(payload.get(f))]


def is_positive_int(value: Any) -> bool:
    # bool is an int subclass; True is not a quantity
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _validate_item(payload: Mapping[str, Any]) -> Decision:
    missing = _missing(payload, REQUIRED_CREATE_FIELDS[Resource.PURCHASE_REQUEST_ITEM])
    if missing:
        return Decision.deny(
            Reason.MISSING_FIELD, f"Name, quantity and unit are required (missing: {', '.join(missing)})."
        )
    if not is_positive_int(payload.get("quantity")):
        return Decision.deny(Reason.INVALID_QUANTITY, "Quantity must be a positive integer.")
    return ALLOW


def _validate_purchase_request(payload: Mapping[str, Any]) -> Decision:
    has_task = payload.get("task_id") is not None
    has_installation = payload.get("installation_id") is not None
    if has_task == has_installation:
        return Decision.deny(
            Reason.MALFORMED_REFERENCE,
            "Exactly one of task_id or installation_id is required.",
        )
    for item in payload.get("items") or []:
        decision = _validate_item(item)
        if not decision:
            return decision
    return ALLOW


def validate_create(resource: Resource, payload: Mapping[str, Any]) -> Decision:
    """
    Shape checks that precede any store call on create.
    """
    if resource == Resource.PURCHASE_REQUEST:
        return _validate_purchase_request(payload)
    if resource == Resource.PURCHASE_REQUEST_ITEM:
        return _validate_item(payload)

    missing = _missing(payload, REQUIRED_CREATE_FIELDS.get(resource, ()))
    if missing:
        return Decision.deny(
            Reason.MISSING_FIELD, f"Missing required field(s): {', '.join(missing)}."
        )
    return ALLOW


# fields that, once set, may be changed but never blanked
NON_BLANK_UPDATE_FIELDS: dict[Resource, tuple[str, ...]] = {
    Resource.PROJECT: ("name",),
    Resource.TASK: ("title",),
    Resource.INSTALLATION: ("title",),
    Resource.MATERIAL: ("name", "category", "default_unit"),
}


def validate_update(resource: Resource, payload: Mapping[str, Any]) -> Decision:
    """
    Partial update of a project, task, installation or material. Explicit
    nulls are ignored by the services; a provided blank string is not.
    """
    for field in NON_BLANK_UPDATE_FIELDS.get(resource, ()):
        value = payload.get(field)
        if isinstance(value, str) and not value.strip():
            return Decision.deny(Reason.MISSING_FIELD, f"{field} must not be empty.")
    return ALLOW


def validate_item_update(payload: Mapping[str, Any]) -> Decision:
    """
    Partial item update: only provided fields are checked.
    """
    for field in ("name", "unit"):
        if field in payload and _blank(payload[field]):
            return Decision.deny(Reason.MISSING_FIELD, f"{field} must not be empty.")
    if "quantity" in payload and not is_positive_int(payload["quantity"]):
        return Decision.deny(Reason.INVALID_QUANTITY, "Quantity must be a positive integer.")
    return ALLOW
