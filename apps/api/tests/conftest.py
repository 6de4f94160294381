"""Pytest configuration and fixtures."""

import copy
from collections.abc import Iterator
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from userdesk_api.config import Settings
from userdesk_api.main import create_app
from userdesk_common.infra.http.users_client import UsersClient
from userdesk_common.services.user_store import UserStore

SEED_USERS = [
    {
        "id": 1,
        "name": "Leanne Graham",
        "username": "Bret",
        "email": "Sincere@april.biz",
        "phone": "1-770-736-8031 x56442",
        "website": "hildegard.org",
        "address": {"street": "Kulas Light", "city": "Gwenborough"},
        "company": {"name": "Romaguera-Crona"},
    },
    {
        "id": 2,
        "name": "Ervin Howell",
        "username": "Antonette",
        "email": "Shanna@melissa.tv",
        "phone": "010-692-6593 x09125",
        "website": "anastasia.net",
        "address": {"street": "Victor Plains", "city": "Wisokyburgh"},
        "company": {"name": "Deckow-Crist"},
    },
    {
        "id": 3,
        "name": "Clementine Bauch",
        "username": "Samantha",
        "email": "Nathan@yesenia.net",
        "phone": "1-463-123-4447",
        "website": "ramiro.info",
        "address": {"street": "Douglas Extension", "city": "McKenziehaven"},
        "company": {"name": "Romaguera-Jacobson"},
    },
]

VALID_FORM = {
    "name": "Jane Doe",
    "email": "jane.doe@example.com",
    "phone": "9876543210",
    "username": "",
    "address.street": "1 Main Street",
    "address.city": "Springfield",
    "company.name": "Acme Corp",
    "website": "https://example.com",
}


@pytest.fixture
def valid_form() -> dict[str, str]:
    return dict(VALID_FORM)


@pytest.fixture
def users_client() -> Mock:
    """Remote client double that echoes writes like JSONPlaceholder."""
    client = Mock(spec=UsersClient)
    client.list_users.return_value = copy.deepcopy(SEED_USERS)
    client.create_user.side_effect = lambda payload: {**payload, "id": 11}
    client.replace_user.side_effect = lambda user_id, payload: {**payload, "id": user_id}
    client.delete_user.return_value = None
    return client


@pytest.fixture
def store(users_client) -> UserStore:
    return UserStore(users_client)


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", ui_url="http://ui.example.test")


@pytest.fixture
def app(settings, users_client) -> FastAPI:
    return create_app(settings, users_client=users_client)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    """Create a FastAPI test client with the lifespan (initial user load) running."""
    with TestClient(app) as test_client:
        yield test_client
