"""Health endpoints"""

from fastapi import APIRouter

from deckoracle.core.config import settings
from deckoracle.core.database import db_manager
from deckoracle.shared.schemas import HealthResponse

router = APIRouter(prefix="/observability", tags=["Системные"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for load balancer."""
    database_ok = await db_manager.health_check()
    dependencies = {"database": "healthy" if database_ok else "unhealthy"}
    return HealthResponse(
        status="healthy" if database_ok else "unhealthy",
        version=settings.app.version,
        dependencies=dependencies,
    )


@router.get("/ready")
async def readiness_check() -> dict[str, bool]:
    """Readiness check endpoint."""
    return {"ready": True}


@router.get("/live")
async def liveness_check() -> dict[str, bool]:
    """Liveness check endpoint."""
    return {"alive": True}
