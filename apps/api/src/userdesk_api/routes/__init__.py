"""Route initialization module."""

from fastapi import APIRouter

from userdesk_api.routes.health import router as health_router
from userdesk_api.routes.pages import router as pages_router
from userdesk_api.routes.users import router as users_router

# Create main API router
api_router = APIRouter(prefix="/api")


# Include sub-routers
api_router.include_router(health_router)
api_router.include_router(users_router)


__all__ = ["api_router", "pages_router"]
