"""REST client for the remote users collection."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from userdesk_common.config.users_api_config import UsersApiConfig

logger = logging.getLogger(__name__)


class UsersApiError(Exception):
    """Transport failure, non-2xx status or undecodable body from the users API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UsersClient(ABC):
    """Abstract interface for the remote users API."""

    @abstractmethod
    def list_users(self) -> list[dict[str, Any]]:
        """GET /users."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> dict[str, Any]:
        """GET /users/{id}."""
        pass

    @abstractmethod
    def create_user(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST /users; returns the echoed record."""
        pass

    @abstractmethod
    def replace_user(self, user_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        """PUT /users/{id}; returns the echoed record."""
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """DELETE /users/{id}."""
        pass


class RestUsersClient(UsersClient):
    """Infrastructure layer: requests-based client for a JSONPlaceholder-style API.

    The default backend does not persist writes; it only echoes them back.
    """

    def __init__(
        self,
        config: UsersApiConfig | None = None,
        user_agent: str = "userdesk-common-py/users-client",
    ) -> None:
        """Initialize the users client.

        Args:
            config: Users API configuration. If None, will load from environment.
            user_agent: User agent string
        """
        if config is None:
            from userdesk_common.config.users_api_config import get_users_api_config

            config = get_users_api_config()

        if not config.users_api_base_url:
            raise ValueError("USERS_API_BASE_URL is required")

        self.config = config
        self._base_url = config.users_api_base_url.rstrip("/")
        self._timeout = config.users_api_timeout_seconds
        self._headers = {"Accept": "application/json", "User-Agent": user_agent}

    def _collection_url(self) -> str:
        return f"{self._base_url}/users"

    def _item_url(self, user_id: int) -> str:
        return f"{self._base_url}/users/{user_id}"

    def _request(self, method: str, url: str, payload: dict[str, Any] | None = None) -> requests.Response:
        """Send a request and raise UsersApiError on any failure.

        Args:
            method: HTTP method
            url: Absolute request URL
            payload: Optional JSON body

        Returns:
            The successful response
        """
        try:
            response = requests.request(method, url, headers=self._headers, json=payload, timeout=self._timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error("%s %s failed with HTTP %s", method, url, status_code)
            raise UsersApiError(f"HTTP {status_code} error from {method} {url}", status_code=status_code) from e
        except requests.exceptions.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise UsersApiError(f"{method} {url} failed: {e}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise UsersApiError("Response body is not valid JSON", status_code=response.status_code) from e

    def _decode_object(self, response: requests.Response) -> dict[str, Any]:
        body = self._decode(response)
        if not isinstance(body, dict):
            raise UsersApiError("Expected a JSON object", status_code=response.status_code)
        return body

    def list_users(self) -> list[dict[str, Any]]:
        response = self._request("GET", self._collection_url())
        body = self._decode(response)
        if not isinstance(body, list):
            raise UsersApiError("Expected a JSON array of users", status_code=response.status_code)
        logger.info("Fetched %d users", len(body))
        return body

    def get_user(self, user_id: int) -> dict[str, Any]:
        return self._decode_object(self._request("GET", self._item_url(user_id)))

    def create_user(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._decode_object(self._request("POST", self._collection_url(), payload))

    def replace_user(self, user_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        return self._decode_object(self._request("PUT", self._item_url(user_id), payload))

    def delete_user(self, user_id: int) -> None:
        self._request("DELETE", self._item_url(user_id))
