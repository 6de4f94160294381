"""Service initialization and dependency injection."""

import logging

from fastapi import Request

from userdesk_api.config import Settings
from userdesk_api.views.controller import ViewController
from userdesk_common.infra.http.users_client import RestUsersClient, UsersClient
from userdesk_common.services.user_store import UserStore

logger = logging.getLogger(__name__)


def build_services(settings: Settings, users_client: UsersClient | None = None) -> tuple[UserStore, ViewController]:
    """Create the store and the controller that owns it.

    Args:
        settings: Application settings
        users_client: Remote client override; a RestUsersClient is built when None

    Returns:
        The user store and its view controller
    """
    if users_client is None:
        users_client = RestUsersClient(config=settings.users_api_config())
        logger.info("Initialized RestUsersClient for %s", settings.users_api_base_url)

    store = UserStore(users_client)
    controller = ViewController(store)
    return store, controller


def get_user_store(request: Request) -> UserStore:
    """Get the user store owned by the running application.

    Args:
        request: Incoming request

    Returns:
        UserStore instance
    """
    return request.app.state.user_store


def get_view_controller(request: Request) -> ViewController:
    """Get the view controller owned by the running application."""
    return request.app.state.view_controller


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was created with."""
    return request.app.state.settings
