"""Tests for the user records JSON API."""

import pytest
from fastapi.testclient import TestClient

from userdesk_common.infra.http.users_client import UsersApiError

pytestmark = pytest.mark.unit

DRAFT = {
    "name": "Jane Doe",
    "email": "jane.doe@example.com",
    "phone": "+91 9876543210",
    "address": {"street": "1 Main Street", "city": "Springfield"},
    "company": {"name": "Acme Corp"},
    "website": "https://example.com",
}


def test_list_users(client: TestClient) -> None:
    response = client.get("/api/users")

    assert response.status_code == 200
    assert [user["id"] for user in response.json()] == [1, 2, 3]


def test_list_users_filtered(client: TestClient) -> None:
    response = client.get("/api/users", params={"q": "leanne"})

    assert [user["name"] for user in response.json()] == ["Leanne Graham"]


def test_get_user(client: TestClient) -> None:
    response = client.get("/api/users/2")

    assert response.status_code == 200
    assert response.json()["username"] == "Antonette"


def test_get_unknown_user(client: TestClient, users_client) -> None:
    users_client.get_user.side_effect = UsersApiError("HTTP 404", status_code=404)

    assert client.get("/api/users/99").status_code == 404


def test_create_user(client: TestClient) -> None:
    response = client.post("/api/users", json={**DRAFT, "username": "ignored"})

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == 4
    assert data["username"] == "USER-janedoe"
    assert len(client.get("/api/users").json()) == 4


def test_create_invalid_user(client: TestClient, users_client) -> None:
    response = client.post("/api/users", json={**DRAFT, "email": "a.com", "name": ""})

    assert response.status_code == 422
    errors = response.json()["detail"]["errors"]
    assert errors["email"] == "Invalid email format."
    assert errors["name"] == "Name is required."
    users_client.create_user.assert_not_called()


def test_create_remote_failure(client: TestClient, users_client) -> None:
    users_client.create_user.side_effect = UsersApiError("down")

    response = client.post("/api/users", json=DRAFT)

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to create user."


def test_update_user(client: TestClient) -> None:
    response = client.put("/api/users/1", json=DRAFT)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == 1
    assert data["name"] == "Jane Doe"
    assert data["username"] == "Bret"


def test_update_unknown_user(client: TestClient) -> None:
    assert client.put("/api/users/42", json=DRAFT).status_code == 404


def test_update_remote_failure_leaves_record(client: TestClient, users_client) -> None:
    before = client.get("/api/users/1").json()
    users_client.replace_user.side_effect = UsersApiError("HTTP 500", status_code=500)

    response = client.put("/api/users/1", json=DRAFT)

    assert response.status_code == 502
    assert client.get("/api/users/1").json() == before


def test_delete_user(client: TestClient) -> None:
    response = client.delete("/api/users/3")

    assert response.status_code == 204
    assert [user["id"] for user in client.get("/api/users").json()] == [1, 2]


def test_delete_remote_failure(client: TestClient, users_client) -> None:
    users_client.delete_user.side_effect = UsersApiError("down")

    assert client.delete("/api/users/3").status_code == 502
    assert len(client.get("/api/users").json()) == 3


def test_reload_users(client: TestClient, users_client) -> None:
    client.delete("/api/users/3")

    response = client.post("/api/users/reload")

    assert response.status_code == 200
    assert len(response.json()) == 3
    assert users_client.list_users.call_count == 2


def test_reload_failure(client: TestClient, users_client) -> None:
    users_client.list_users.side_effect = UsersApiError("down")

    assert client.post("/api/users/reload").status_code == 502
    assert len(client.get("/api/users").json()) == 3
