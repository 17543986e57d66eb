# tracker/policies/rbac.py
from __future__ import annotations
from dataclasses import dataclass

from tracker.models.enums import Role


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: Role
    name: str = ""
    email: str = ""

    @property
    def is_manager(self) -> bool:
        return self.role == Role.manager


def same_user(a, b) -> bool:
    """
    Ownership comparison tolerant of UUID vs str ids.
    A missing id on either side never matches.
    """
    if a is None or b is None:
        return False
    return str(a) == str(b)
