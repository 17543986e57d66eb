# tracker/core/errors.py
from __future__ import annotations

from enum import Enum


class Reason(str, Enum):
    ROLE_FORBIDDEN = "RoleForbidden"
    NOT_OWNER = "NotOwner"
    INVALID_STATE_FOR_MUTATION = "InvalidStateForMutation"
    INVALID_TRANSITION = "InvalidTransition"
    MALFORMED_REFERENCE = "MalformedReference"
    MISSING_FIELD = "MissingField"
    INVALID_QUANTITY = "InvalidQuantity"
    INVALID_PAYLOAD = "InvalidPayload"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    UNAUTHENTICATED = "Unauthenticated"
    INTERNAL_ERROR = "InternalError"


REASON_STATUS: dict[Reason, int] = {
    Reason.ROLE_FORBIDDEN: 403,
    Reason.NOT_OWNER: 403,
    Reason.INVALID_STATE_FOR_MUTATION: 403,
    Reason.INVALID_TRANSITION: 409,
    Reason.MALFORMED_REFERENCE: 400,
    Reason.MISSING_FIELD: 400,
    Reason.INVALID_QUANTITY: 400,
    Reason.INVALID_PAYLOAD: 400,
    Reason.NOT_FOUND: 404,
    Reason.CONFLICT: 409,
    Reason.UNAUTHENTICATED: 401,
    Reason.INTERNAL_ERROR: 500,
}


class TrackerError(Exception):
    """
    Base error carrying a taxonomy reason and a caller-safe message.
    Rendered by the API exception handlers; never retried.
    """

    def __init__(self, reason: Reason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message

    @property
    def status_code(self) -> int:
        return REASON_STATUS[self.reason]


class PolicyDenied(TrackerError):
    pass


class NotFound(TrackerError):
    def __init__(self, message: str = "Not found."):
        super().__init__(Reason.NOT_FOUND, message)


class Unauthenticated(TrackerError):
    def __init__(self, message: str = "Invalid or expired token."):
        super().__init__(Reason.UNAUTHENTICATED, message)


class Conflict(TrackerError):
    def __init__(self, message: str):
        super().__init__(Reason.CONFLICT, message)


class StoreError(TrackerError):
    """Data-store fault. The original exception is chained, never shown."""

    def __init__(self, message: str = "Internal server error."):
        super().__init__(Reason.INTERNAL_ERROR, message)
