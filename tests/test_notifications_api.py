"""Integration tests for the ``/notifications`` endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

from juscrm.application.use_cases.notifications import publish_notification
from juscrm.domain.entities import ROLE_ADMIN, NotificationPriority, NotificationType


@pytest.fixture
def lawyer(create_account):
    return create_account("joao@juscrm.com")


@pytest.fixture
def publish(db):
    def _publish(recipient_id, title, priority=NotificationPriority.MEDIUM):
        return publish_notification(
            db,
            recipient_id=recipient_id,
            notification_type=NotificationType.CASE_DEADLINE,
            title=title,
            message=f"Detalhes de {title}",
            priority=priority,
        )

    return _publish


def test_endpoints_require_authentication(client):
    assert client.get("/notifications").status_code == 401
    assert client.get("/notifications/unread-count").status_code == 401
    assert client.post("/notifications/read-all").status_code == 401


def test_list_returns_page_with_unread_count(client, lawyer, publish, login):
    created = [publish(lawyer.id, f"Prazo {index}") for index in range(5)]
    headers = login(lawyer.email)

    response = client.get(
        "/notifications", params={"isRead": "false", "page": 1, "limit": 2}, headers=headers
    )

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body["data"]] == [created[4].id, created[3].id]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 5, "total_pages": 3}
    assert body["unread_count"] == 5
    assert body["data"][0]["type"] == "CASE_DEADLINE"
    assert body["data"][0]["is_read"] is False


def test_unread_list_takes_count_from_its_own_total(client, lawyer, publish, login, monkeypatch):
    from juscrm.interfaces.api.routes import notifications as notification_routes

    for index in range(3):
        publish(lawyer.id, f"Prazo {index}")
    headers = login(lawyer.email)

    def _separate_count(*args, **kwargs):
        raise AssertionError("unread list must not run a second count query")

    monkeypatch.setattr(notification_routes, "count_unread_uc", _separate_count)
    response = client.get("/notifications", params={"isRead": "false", "limit": 1}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["unread_count"] == body["pagination"]["total"] == 3


def test_list_clamps_out_of_range_pagination(client, lawyer, publish, login):
    publish(lawyer.id, "Prazo")
    headers = login(lawyer.email)

    response = client.get("/notifications", params={"page": 0, "limit": 1000}, headers=headers)

    assert response.status_code == 200
    assert response.json()["pagination"]["page"] == 1
    assert response.json()["pagination"]["limit"] == 100


def test_list_rejects_malformed_pagination(client, lawyer, login):
    headers = login(lawyer.email)

    response = client.get("/notifications", params={"page": "abc"}, headers=headers)

    assert response.status_code == 422


def test_read_state_scenario(client, lawyer, publish, login):
    publish(lawyer.id, "Baixa", NotificationPriority.LOW)
    high = publish(lawyer.id, "Alta", NotificationPriority.HIGH)
    publish(lawyer.id, "Urgente", NotificationPriority.URGENT)
    headers = login(lawyer.email)

    listing = client.get("/notifications", params={"isRead": "false"}, headers=headers)
    assert len(listing.json()["data"]) == 3

    marked = client.patch(f"/notifications/{high.id}/read", headers=headers)
    assert marked.status_code == 200
    assert marked.json()["is_read"] is True
    assert marked.json()["read_at"] is not None

    again = client.patch(f"/notifications/{high.id}/read", headers=headers)
    assert again.status_code == 200
    assert again.json()["read_at"] == marked.json()["read_at"]

    count = client.get("/notifications/unread-count", headers=headers)
    assert count.json() == {"count": 2}

    read_all = client.post("/notifications/read-all", headers=headers)
    assert read_all.json() == {"updated": 2}
    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 0}


def test_mark_read_of_foreign_notification_is_404(client, lawyer, create_account, publish, login):
    other = create_account("maria@juscrm.com")
    foreign = publish(other.id, "Alheia")
    headers = login(lawyer.email)

    response = client.patch(f"/notifications/{foreign.id}/read", headers=headers)

    assert response.status_code == 404
    other_headers = login(other.email)
    assert client.get("/notifications/unread-count", headers=other_headers).json() == {"count": 1}


def test_mark_read_rejects_malformed_id(client, lawyer, login):
    headers = login(lawyer.email)

    response = client.patch("/notifications/abc/read", headers=headers)

    assert response.status_code == 422


def test_admin_publishes_notification(client, lawyer, create_account, login):
    create_account("admin@juscrm.com", alias=ROLE_ADMIN)
    admin_headers = login("admin@juscrm.com")

    response = client.post(
        "/notifications",
        json={
            "recipient_id": lawyer.id,
            "type": "PAYMENT_DUE",
            "priority": "URGENT",
            "title": "Honorários vencidos",
            "message": "Os honorários do Caso 3 venceram ontem.",
            "metadata": {"payment_id": 3},
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["recipient_id"] == lawyer.id
    assert response.json()["metadata"] == {"payment_id": 3}
    lawyer_headers = login(lawyer.email)
    assert client.get("/notifications/unread-count", headers=lawyer_headers).json() == {"count": 1}


def test_publish_validates_payload(client, lawyer, create_account, login):
    create_account("admin@juscrm.com", alias=ROLE_ADMIN)
    admin_headers = login("admin@juscrm.com")
    payload = {"type": "UNKNOWN", "title": "Olá", "message": "Mensagem"}

    invalid_type = client.post("/notifications", json=payload, headers=admin_headers)
    unknown_recipient = client.post(
        "/notifications",
        json={**payload, "type": "NEW_MESSAGE", "recipient_id": 9999},
        headers=admin_headers,
    )

    assert invalid_type.status_code == 422
    assert unknown_recipient.status_code == 404


def test_publish_requires_admin(client, lawyer, login):
    response = client.post(
        "/notifications",
        json={"type": "NEW_MESSAGE", "title": "Olá", "message": "Mensagem"},
        headers=login(lawyer.email),
    )

    assert response.status_code == 403
