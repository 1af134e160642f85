"""Health check endpoint."""

from fastapi import APIRouter

from ..config import settings
from ..services.task_store import get_task_store

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str | int]:
    """Report service status and how many tasks the store holds."""
    store = get_task_store()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.environment,
        "task_count": store.count(),
    }
