# tracker/services/auth_service.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from tracker.core.errors import Conflict
from tracker.core.security import hash_password, verify_password
from tracker.models.enums import Role
from tracker.models.user import User
from tracker.policies.rbac import Principal
from tracker.services.store import commit, get_or_404


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def principal_for(user: User) -> Principal:
    return Principal(
        user_id=str(user.id),
        role=Role(user.role),
        name=user.name,
        email=user.email,
    )


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = db.execute(
        select(User).where(
            User.email == _normalize_email(email),
            User.is_active.is_(True),
        )
    ).scalar_one_or_none()

    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


def create_user(
    db: Session, *, email: str, password: str, name: str, role: Role = Role.worker
) -> User:
    email = _normalize_email(email)
    existing = db.execute(select(User.id).where(User.email == email)).first()
    if existing:
        raise Conflict("User already exists.")

    user = User(
        email=email,
        name=name.strip(),
        role=role.value,
        password_hash=hash_password(password),
        is_active=True,
    )
    db.add(user)
    commit(db)
    db.refresh(user)
    return user


def register(db: Session, *, email: str, password: str, name: str) -> User:
    # self-registration always yields a worker; managers come from seeding
    return create_user(db, email=email, password=password, name=name, role=Role.worker)


def get_user(db: Session, principal: Principal) -> User:
    return get_or_404(db, User, principal.user_id, "User")


def list_users(db: Session, role: Optional[Role] = None) -> List[User]:
    stmt = select(User).where(User.is_active.is_(True))
    if role:
        stmt = stmt.where(User.role == role.value)
    stmt = stmt.order_by(User.name.asc())
    return list(db.execute(stmt).scalars().all())
