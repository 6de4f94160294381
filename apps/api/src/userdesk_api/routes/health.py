"""Health check routes."""

from fastapi import APIRouter, Depends

from userdesk_api.config import Settings
from userdesk_api.models.health import HealthCheckResponse
from userdesk_api.services import get_app_settings, get_view_controller
from userdesk_api.views.controller import ViewController

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    controller: ViewController = Depends(get_view_controller),
) -> HealthCheckResponse:
    """Health check endpoint.

    A failed initial user fetch does not make the service unhealthy; it is
    reported through ``view_state``.

    Returns:
        HealthCheckResponse with status and version information
    """
    return HealthCheckResponse(
        status="ok",
        version=settings.app_version,
        environment=settings.environment,
        view_state=controller.state.value,
        users_loaded=len(controller.store),
    )
