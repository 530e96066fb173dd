"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.mirror.api.http.app_data import ApplicationDependencies
from src.mirror.api.http.deps import get_app_dependencies

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe; returns 200 as long as the process is running."""
    return {"status": "healthy"}


@router.get("/ready", response_model=None)
async def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe. Returns 503 if the document store is unreachable."""
    store_healthy = await app_deps.store_service.health_check()
    checks = {
        "document_store": {
            "status": "healthy" if store_healthy else "unhealthy",
            "type": app_deps.store_service.backend,
        }
    }

    if not store_healthy:
        return JSONResponse(
            status_code=503, content={"status": "not_ready", "checks": checks}
        )
    return {"status": "ready", "checks": checks}
