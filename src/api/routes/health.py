"""Health check endpoints."""

from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.v1.dependencies import get_uow_factory
from core.config import settings
from core.exceptions import StoreError
from domain.repositories.unit_of_work import IUnitOfWork

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    store_backend: str
    store: str | None = None


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """Liveness probe; does not touch the record store."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        store_backend=settings.store_backend,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    uow_factory: Callable[[], IUnitOfWork] = Depends(get_uow_factory),
) -> HealthResponse:
    """Readiness probe; issues one cheap lookup against the record store."""
    try:
        async with uow_factory() as uow:
            await uow.groups.join_code_exists("")
        store_status = "healthy"
    except StoreError as exc:
        store_status = f"unhealthy: {exc.message}"

    return HealthResponse(
        status="healthy" if store_status == "healthy" else "degraded",
        version=API_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        store_backend=settings.store_backend,
        store=store_status,
    )
