# tracker/policies/purchase_request_policy.py
from __future__ import annotations

from typing import Optional, Set

from tracker.core.errors import Reason
from tracker.models.enums import PurchaseRequestStatus
from tracker.policies.decision import ALLOW, Decision

# status -> statuses reachable from it (manager-only edges)
ALLOWED_STATUS_TRANSITIONS: dict[PurchaseRequestStatus, Set[PurchaseRequestStatus]] = {
    PurchaseRequestStatus.draft: set(),
    PurchaseRequestStatus.pending: {
        PurchaseRequestStatus.approved,
        PurchaseRequestStatus.rejected,
    },
    PurchaseRequestStatus.approved: set(),
    PurchaseRequestStatus.rejected: set(),
}

MUTABLE_STATUSES = {PurchaseRequestStatus.draft, PurchaseRequestStatus.pending}
TERMINAL_STATUSES = {PurchaseRequestStatus.approved, PurchaseRequestStatus.rejected}
DECISION_STATUSES = {PurchaseRequestStatus.approved, PurchaseRequestStatus.rejected}

INITIAL_STATUS = PurchaseRequestStatus.pending


def _coerce(status) -> Optional[PurchaseRequestStatus]:
    try:
        return PurchaseRequestStatus(status)
    except ValueError:
        return None


def is_mutable(status) -> bool:
    return _coerce(status) in MUTABLE_STATUSES


def check_transition(current, target) -> Decision:
    """
    Validate a purchase-request status change.

    Only pending -> approved and pending -> rejected exist. Re-applying a
    decision to an already decided request is a failure, not a no-op.
    """
    cur = _coerce(current)
    tgt = _coerce(target)

    if tgt not in DECISION_STATUSES:
        return Decision.deny(
            Reason.INVALID_TRANSITION, "Status must be approved or rejected."
        )
    if cur is None or tgt not in ALLOWED_STATUS_TRANSITIONS.get(cur, set()):
        return Decision.deny(
            Reason.INVALID_TRANSITION,
            f"Cannot move purchase request from {current} to {tgt.value}.",
        )
    return ALLOW
