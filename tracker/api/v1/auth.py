#tracker/api/v1/auth.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tracker.core.auth_deps import get_current_principal
from tracker.core.errors import Unauthenticated
from tracker.core.security import create_access_token
from tracker.db.session import get_db
from tracker.models.enums import Role
from tracker.models.user import User
from tracker.policies.rbac import Principal
from tracker.schemas.auth import (
    LoginRequest,
    MeResponse,
    RegisterRequest,
    TokenResponse,
    UserListResponse,
    UserOut,
)
from tracker.services import auth_service

router = APIRouter(prefix="/auth")


def _token_for(user: User) -> TokenResponse:
    token = create_access_token(str(user.id), user.role, name=user.name, email=user.email)
    return TokenResponse(access_token=token, user=UserOut.model_validate(user))


@router.post("/login", response_model=TokenResponse)
def login(req: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, req.email, req.password)
    if not user:
        raise Unauthenticated("Invalid credentials.")
    return _token_for(user)


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    user = auth_service.register(db, email=req.email, password=req.password, name=req.name)
    return _token_for(user)


@router.get("/me", response_model=MeResponse)
def get_me(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    user = auth_service.get_user(db, principal)
    return {"user": UserOut.model_validate(user)}


@router.get("/users", response_model=UserListResponse)
def list_users(
    role: Optional[Role] = Query(default=None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    # any authenticated role may read the directory (assignee dropdowns)
    users = auth_service.list_users(db, role)
    return {"users": [UserOut.model_validate(u) for u in users]}
