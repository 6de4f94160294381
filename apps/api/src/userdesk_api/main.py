"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse

from userdesk_api.config import Settings, get_settings
from userdesk_api.middleware import get_cors_headers, setup_middleware
from userdesk_api.routes import api_router, pages_router
from userdesk_api.services import build_services
from userdesk_common.infra.http.users_client import UsersClient

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None, users_client: UsersClient | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Application settings. If None, will load from environment.
        users_client: Remote users API client override (tests inject a fake)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Handle application lifespan events."""
        # Startup
        logger.info(f"{settings.app_name} v{settings.app_version} started")
        logger.info(f"Environment: {settings.environment}")

        store, controller = build_services(settings, users_client)
        app.state.settings = settings
        app.state.user_store = store
        app.state.view_controller = controller

        if settings.load_users_on_startup:
            logger.info("Loading users from %s...", settings.users_api_base_url)
            await controller.start()
            if controller.list_error:
                logger.warning("Initial user load failed: %s", controller.list_error)

        yield

        # Shutdown
        logger.info(f"{settings.app_name} shutting down")

    app = FastAPI(
        title=settings.app_name,
        description="User records management - list, create, edit and delete users",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # Setup middleware (must be before exception handlers)
    setup_middleware(app, ui_url=settings.ui_url, environment=settings.environment)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Log unexpected errors and keep CORS headers on the 500 response."""
        if isinstance(exc, HTTPException):
            raise exc

        logger.error("Unhandled exception: %s", exc, exc_info=True)

        origin = request.headers.get("origin")
        cors_headers = get_cors_headers(origin, ui_url=settings.ui_url, environment=settings.environment)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
            headers=cors_headers,
        )

    app.include_router(api_router)
    app.include_router(pages_router)

    return app


_settings = get_settings()
configure_logging(_settings.log_level)

app = create_app(_settings)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "userdesk_api.main:app",
        host=_settings.api_host,
        port=_settings.api_port,
        log_level=_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
