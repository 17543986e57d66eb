# tracker/api/v1/materials.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tracker.core.auth_deps import get_current_principal
from tracker.db.session import get_db
from tracker.policies.rbac import Principal
from tracker.schemas.materials import (
    CategoryListResponse,
    MaterialCreateRequest,
    MaterialListResponse,
    MaterialOut,
    MaterialResponse,
    MaterialUpdateRequest,
)
from tracker.schemas.purchase_requests import MessageResponse
from tracker.services.materials_service import MaterialsService

router = APIRouter(prefix="/materials")


@router.get("", response_model=MaterialListResponse)
def list_materials(
    category: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=128),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rows = MaterialsService().list(db, category=category, search=search)
    return {"materials": [MaterialOut.model_validate(m) for m in rows]}


@router.get("/categories", response_model=CategoryListResponse)
def list_categories(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return {"categories": MaterialsService().categories(db)}


@router.get("/{material_id}", response_model=MaterialResponse)
def get_material(
    material_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return {"material": MaterialOut.model_validate(MaterialsService().get(db, material_id))}


@router.post("", response_model=MaterialResponse, status_code=201)
def create_material(
    body: MaterialCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    m = MaterialsService().create(db, principal, body.model_dump())
    return {"material": MaterialOut.model_validate(m)}


@router.put("/{material_id}", response_model=MaterialResponse)
def update_material(
    material_id: uuid.UUID,
    body: MaterialUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    m = MaterialsService().update(db, principal, material_id, body.model_dump(exclude_unset=True))
    return {"material": MaterialOut.model_validate(m)}


@router.delete("/{material_id}", response_model=MessageResponse)
def delete_material(
    material_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    MaterialsService().delete(db, principal, material_id)
    return {"message": "Material deleted successfully"}
