# tracker/policies/decision.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tracker.core.errors import PolicyDenied, Reason


@dataclass(frozen=True)
class Decision:
    """
    Tagged policy result: allow, or deny with a reason.
    Policies return these instead of raising so they stay transport-free.
    """

    allowed: bool
    reason: Optional[Reason] = None
    message: str = ""

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: Reason, message: str) -> "Decision":
        return cls(allowed=False, reason=reason, message=message)

    def __bool__(self) -> bool:
        return self.allowed

    def enforce(self) -> None:
        if not self.allowed:
            raise PolicyDenied(self.reason, self.message)


ALLOW = Decision.allow()
