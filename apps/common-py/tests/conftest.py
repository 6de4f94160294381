"""Pytest configuration for common-py tests."""

import copy
from unittest.mock import Mock

import pytest

from userdesk_common.infra.http.users_client import UsersClient
from userdesk_common.models.user import AddressDraft, CompanyDraft, UserDraft
from userdesk_common.services.user_store import UserStore

SEED_USERS = [
    {
        "id": 1,
        "name": "Leanne Graham",
        "username": "Bret",
        "email": "Sincere@april.biz",
        "phone": "1-770-736-8031 x56442",
        "website": "hildegard.org",
        "address": {"street": "Kulas Light", "suite": "Apt. 556", "city": "Gwenborough"},
        "company": {"name": "Romaguera-Crona", "catchPhrase": "Multi-layered client-server neural-net"},
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
        "name": "John Smith",
        "username": "Samantha",
        "email": "Nathan@yesenia.net",
        "phone": "1-463-123-4447",
        "website": "ramiro.info",
        "address": {"street": "Douglas Extension", "city": "McKenziehaven"},
        "company": {"name": "Romaguera-Jacobson"},
    },
    {
        "id": 4,
        "name": "Patricia Lebsack",
        "username": "Karianne",
        "email": "Julianne.OConner@kory.org",
        "phone": "493-170-9623 x156",
        "website": "kale.biz",
        "address": {"street": "Hoeger Mall", "city": "South Elvis"},
        "company": {"name": "Robel-Corkery"},
    },
    {
        "id": 5,
        "name": "Marjorie Lane",
        "username": "Kamren",
        "email": "Lucio_Hettinger@annie.ca",
        "phone": "(254)954-1289",
        "website": "demarco.info",
        "address": {"street": "Skiles Walks", "city": "Roscoeview"},
        "company": {"name": "Keebler LLC"},
    },
]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests without network access")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests that make real API calls"
    )
    config.addinivalue_line("markers", "slow: marks tests as slow running")


@pytest.fixture
def seed_users() -> list[dict]:
    """Remote payload for GET /users."""
    return copy.deepcopy(SEED_USERS)


@pytest.fixture
def users_client(seed_users) -> Mock:
    """Remote client double that echoes writes like JSONPlaceholder."""
    client = Mock(spec=UsersClient)
    client.list_users.return_value = seed_users
    client.create_user.side_effect = lambda payload: {**payload, "id": 11}
    client.replace_user.side_effect = lambda user_id, payload: {**payload, "id": user_id}
    client.delete_user.return_value = None
    return client


@pytest.fixture
def store(users_client) -> UserStore:
    return UserStore(users_client)


@pytest.fixture
def valid_draft() -> UserDraft:
    return UserDraft(
        name="Jane Doe",
        email="jane.doe@example.com",
        phone="+91 9876543210",
        username="USER-janedoe",
        address=AddressDraft(street="1 Main Street", city="Springfield"),
        company=CompanyDraft(name="Acme Corp"),
        website="https://example.com",
    )
