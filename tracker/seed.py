from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from tracker.core.config import get_settings
from tracker.db.session import SessionLocal
from tracker.models.enums import Role
from tracker.models.installation import Installation
from tracker.models.material import Material
from tracker.models.project import Project
from tracker.models.task import Task
from tracker.models.user import User
from tracker.services.auth_service import create_user


MATERIALS = [
    ("Cable 3x2.5", "Electrical", "m"),
    ("Cable tie", "Electrical", "pcs"),
    ("Dowel 8x40", "Fasteners", "pcs"),
    ("Screw 4x50", "Fasteners", "pcs"),
    ("Mounting foam", "Consumables", "pcs"),
]


def _user(db: Session, email: str, name: str, role: Role) -> User:
    existing = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if existing:
        return existing
    return create_user(db, email=email, password=get_settings().demo_password, name=name, role=role)


def seed():
    db: Session = SessionLocal()

    manager = _user(db, "manager@example.com", "Demo Manager", Role.manager)
    worker = _user(db, "worker@example.com", "Demo Worker", Role.worker)

    project = Project(name="Seed Project", description="Demo data", created_by=manager.id)
    db.add(project)
    db.flush()

    db.add(
        Task(
            project_id=project.id,
            title="Prepare cable routes",
            assignee_id=worker.id,
            status="planned",
        )
    )
    db.add(
        Installation(
            project_id=project.id,
            title="Install control cabinet",
            assignee_id=worker.id,
            status="new",
            scheduled_at=datetime.now(timezone.utc) + timedelta(days=3),
            address="1 Demo Street",
        )
    )

    for name, category, unit in MATERIALS:
        db.add(Material(name=name, category=category, default_unit=unit))

    db.commit()
    db.close()

if __name__ == "__main__":
    seed()
