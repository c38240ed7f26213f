"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.bookstore.api.http.deps import get_document_store
from src.bookstore.core.services import DocumentStoreService
from src.bookstore.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Basic health check endpoint - checks if app is running.

    This is a liveness probe that returns 200 OK as long as the application
    process is running. It does not check dependencies.
    """
    return {"status": "healthy", "service": "bookstore"}


@router.get("/ready", response_model=None)
def readiness(
    store: DocumentStoreService = Depends(get_document_store),
) -> dict[str, Any] | JSONResponse:
    """Readiness check - the document store must answer a ping.

    Returns 200 when the store is reachable, 503 otherwise.
    """
    healthy = store.health_check()
    response = {
        "status": "ready" if healthy else "not_ready",
        "environment": get_config().app.environment,
        "checks": {
            "database": {
                "status": "healthy" if healthy else "unhealthy",
                **store.describe(),
            }
        },
    }

    if not healthy:
        return JSONResponse(status_code=503, content=response)

    return response
