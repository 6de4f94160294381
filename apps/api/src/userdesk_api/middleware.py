"""Middleware setup for the FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)

LOCAL_ORIGINS = (
    "http://localhost:8000",
    "http://127.0.0.1:8000",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)


def get_allowed_origins(ui_url: str | None = None, environment: str = "development") -> list[str]:
    """Get list of origins allowed to call the JSON API.

    Args:
        ui_url: URL of an external UI consuming /api/users
        environment: Environment name (development, production, etc.)

    Returns:
        List of allowed origin URLs
    """
    allowed_origins: list[str] = []

    if ui_url:
        allowed_origins.append(ui_url.rstrip("/"))

    if environment.lower() in {"development", "dev", "local"}:
        allowed_origins.extend(LOCAL_ORIGINS)

    # Deduplicate while preserving order
    return list(dict.fromkeys(allowed_origins))


def get_cors_headers(origin: str | None, ui_url: str | None = None, environment: str = "development") -> dict[str, str]:
    """Get CORS headers for a given origin, empty if the origin is not allowed."""
    if not origin or origin not in get_allowed_origins(ui_url, environment):
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE",
        "Access-Control-Allow-Headers": "*",
    }


def setup_middleware(app: FastAPI, ui_url: str | None = None, environment: str = "development") -> None:
    """Setup middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        ui_url: URL of an external UI for CORS
        environment: Environment name (development, production, etc.)
    """
    allowed_origins = get_allowed_origins(ui_url, environment)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    logger.info("CORS enabled for origins: %s (environment=%s)", allowed_origins, environment)
