from fastapi import APIRouter

from flowforge.api.v1.routers.workflows import router as workflows_router

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(workflows_router)
