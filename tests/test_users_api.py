"""Integration tests for the user API endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

from juscrm.domain.entities import ROLE_ADMIN, ROLE_CLIENT
from juscrm.infrastructure.repositories import RoleRepository


class CredentialsOutbox:
    def __init__(self) -> None:
        self.passwords: dict[str, str] = {}

    def send_new_user_credentials_email(self, email, name, password):
        self.passwords[email] = password
        return True


@pytest.fixture
def admin_headers(create_account, login):
    create_account("admin@juscrm.com", alias=ROLE_ADMIN)
    return login("admin@juscrm.com")


@pytest.fixture
def outbox(client):
    sender = CredentialsOutbox()
    client.app.state.email_sender = sender
    return sender


def test_user_crud_and_auth_flow(client, db, admin_headers, outbox, login) -> None:
    """Exercise the full CRUD lifecycle and authentication for users."""

    role = RoleRepository(db).ensure(name="Cliente", alias=ROLE_CLIENT)
    response = client.post(
        "/users",
        json={"name": "Test User", "email": "user@example.com", "role_id": role.id},
        headers=admin_headers,
    )
    assert response.status_code == 201
    created_user = response.json()
    user_id = created_user["id"]
    assert created_user["must_change_password"] is True

    token_response = client.post(
        "/auth/token",
        data={"username": "user@example.com", "password": outbox.passwords["user@example.com"]},
    )
    assert token_response.status_code == 200
    assert token_response.json()["must_change_password"] is True
    assert token_response.json()["role"] == ROLE_CLIENT

    list_response = client.get("/users", headers=admin_headers)
    assert list_response.status_code == 200
    assert any(user["email"] == "user@example.com" for user in list_response.json())

    update_response = client.put(
        f"/users/{user_id}",
        json={"name": "Updated User", "email": "updated@example.com"},
        headers=admin_headers,
    )
    assert update_response.status_code == 200
    assert update_response.json()["email"] == "updated@example.com"

    delete_response = client.delete(f"/users/{user_id}", headers=admin_headers)
    assert delete_response.status_code == 204

    not_found_response = client.get(f"/users/{user_id}", headers=admin_headers)
    assert not_found_response.status_code == 404


def test_new_user_receives_welcome_notification(client, db, admin_headers, outbox, login):
    role = RoleRepository(db).ensure(name="Cliente", alias=ROLE_CLIENT)
    client.post(
        "/users",
        json={"name": "Ana", "email": "ana@example.com", "role_id": role.id},
        headers=admin_headers,
    )

    headers = login("ana@example.com", outbox.passwords["ana@example.com"])
    count = client.get("/notifications/unread-count", headers=headers)

    assert count.json() == {"count": 1}


def test_create_user_rejects_unknown_role(client, admin_headers, outbox):
    response = client.post(
        "/users",
        json={"name": "Ana", "email": "ana@example.com", "role_id": 999},
        headers=admin_headers,
    )

    assert response.status_code == 404


def test_non_admin_cannot_manage_users(client, create_account, login):
    create_account("joao@juscrm.com")
    headers = login("joao@juscrm.com")

    assert client.get("/users", headers=headers).status_code == 403
    assert client.get("/users/me", headers=headers).status_code == 200


def test_admin_cannot_delete_itself(client, admin_headers):
    me = client.get("/users/me", headers=admin_headers).json()

    response = client.delete(f"/users/{me['id']}", headers=admin_headers)

    assert response.status_code == 400


def test_change_own_password(client, create_account, login):
    create_account("joao@juscrm.com")
    headers = login("joao@juscrm.com")

    wrong = client.put(
        "/users/me/password",
        json={"current_password": "errada", "new_password": "nova-senha"},
        headers=headers,
    )
    reused = client.put(
        "/users/me/password",
        json={"current_password": "secret123", "new_password": "secret123"},
        headers=headers,
    )
    changed = client.put(
        "/users/me/password",
        json={"current_password": "secret123", "new_password": "nova-senha"},
        headers=headers,
    )

    assert wrong.status_code == 400
    assert reused.status_code == 400
    assert changed.status_code == 200
    # Tokens issued before the change carry a stale password signature.
    assert client.get("/users/me", headers=headers).status_code == 401
    new_headers = login("joao@juscrm.com", "nova-senha")
    unread = client.get("/notifications", headers=new_headers).json()
    assert unread["data"][0]["title"] == "Senha alterada"


def test_login_rejects_bad_credentials(client, create_account):
    create_account("joao@juscrm.com")

    response = client.post(
        "/auth/token", data={"username": "joao@juscrm.com", "password": "errada"}
    )

    assert response.status_code == 401
