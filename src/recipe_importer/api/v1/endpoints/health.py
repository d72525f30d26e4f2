"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request

from recipe_importer.schemas import HealthResponse


router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health_check(request: Request) -> HealthResponse:
    """Report liveness and whether the import service is up.

    Remote recipe sites are never contacted here; their availability says
    nothing about this service.
    """
    settings = request.app.state.settings
    ready = getattr(request.app.state, "import_service", None) is not None

    return HealthResponse(
        status="ok" if ready else "starting",
        importer_ready=ready,
        version=settings.app.version,
        environment=settings.APP_ENV,
    )
