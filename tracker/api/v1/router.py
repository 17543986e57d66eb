from fastapi import APIRouter

from tracker.api.v1.health import router as health_router
from tracker.api.v1.auth import router as auth_router
from tracker.api.v1.projects import router as projects_router
from tracker.api.v1.tasks import router as tasks_router
from tracker.api.v1.installations import router as installations_router
from tracker.api.v1.purchase_requests import router as purchase_requests_router
from tracker.api.v1.materials import router as materials_router


v1_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM / CORE
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(auth_router, tags=["auth"])

# ------------------------------------------------------------------
# WORK
# ------------------------------------------------------------------
v1_router.include_router(projects_router, tags=["projects"])
v1_router.include_router(tasks_router, tags=["tasks"])
v1_router.include_router(installations_router, tags=["installations"])

# ------------------------------------------------------------------
# PROCUREMENT
# ------------------------------------------------------------------
v1_router.include_router(purchase_requests_router, tags=["purchase-requests"])
v1_router.include_router(materials_router, tags=["materials"])
