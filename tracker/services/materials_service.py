# tracker/services/materials_service.py
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from tracker.models.material import Material
from tracker.policies.access_policy import Operation, Resource, can_mutate
from tracker.policies.rbac import Principal
from tracker.policies.validation import validate_create, validate_update
from tracker.services.store import commit, get_or_404, now

MATERIAL_FIELDS = ("name", "category", "default_unit", "is_optional", "comment")


class MaterialsService:
    """Reference catalog of materials used to fill purchase-request items."""

    def list(
        self,
        db: Session,
        *,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Material]:
        stmt = select(Material)
        if category:
            stmt = stmt.where(Material.category == category)
        if search:
            stmt = stmt.where(Material.name.ilike(f"%{search}%"))
        stmt = stmt.order_by(Material.category.asc(), Material.name.asc())
        return list(db.execute(stmt).scalars().all())

    def categories(self, db: Session) -> List[str]:
        rows = db.execute(
            select(Material.category).distinct().order_by(Material.category.asc())
        ).scalars().all()
        return list(rows)

    def get(self, db: Session, material_id: uuid.UUID) -> Material:
        return get_or_404(db, Material, material_id, "Material")

    def create(self, db: Session, principal: Principal, payload: Dict[str, Any]) -> Material:
        can_mutate(principal, Resource.MATERIAL, Operation.CREATE).enforce()
        validate_create(Resource.MATERIAL, payload).enforce()

        m = Material(
            name=payload["name"].strip(),
            category=payload["category"].strip(),
            default_unit=payload["default_unit"].strip(),
            is_optional=bool(payload.get("is_optional")),
            comment=payload.get("comment"),
            created_at=now(),
            updated_at=now(),
        )
        db.add(m)
        commit(db)
        db.refresh(m)
        return m

    def update(
        self,
        db: Session,
        principal: Principal,
        material_id: uuid.UUID,
        changes: Dict[str, Any],
    ) -> Material:
        m = get_or_404(db, Material, material_id, "Material")
        can_mutate(principal, Resource.MATERIAL, Operation.UPDATE, m).enforce()
        validate_update(Resource.MATERIAL, changes).enforce()

        for field in MATERIAL_FIELDS:
            if field in changes and (changes[field] is not None or field == "comment"):
                setattr(m, field, changes[field])

        m.updated_at = now()
        commit(db)
        db.refresh(m)
        return m

    def delete(self, db: Session, principal: Principal, material_id: uuid.UUID) -> None:
        m = get_or_404(db, Material, material_id, "Material")
        can_mutate(principal, Resource.MATERIAL, Operation.DELETE, m).enforce()

        db.delete(m)
        commit(db)
