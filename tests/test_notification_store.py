"""Tests for the notification read-state use cases."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from juscrm.application.use_cases.notifications import (
    clamp_pagination,
    count_unread,
    list_notifications,
    list_unread,
    mark_all_read,
    mark_read,
    publish_notification,
)
from juscrm.domain.entities import NotificationPriority, NotificationType
from juscrm.domain.exceptions import NotFoundError, NotificationNotFoundError
from juscrm.infrastructure.repositories import NotificationRepository


def _publish(session, recipient_id, title, priority=NotificationPriority.MEDIUM, **kwargs):
    return publish_notification(
        session,
        recipient_id=recipient_id,
        notification_type=kwargs.pop("notification_type", NotificationType.CASE_UPDATE),
        title=title,
        message=f"Mensagem de {title}",
        priority=priority,
        **kwargs,
    )


@pytest.fixture
def lawyer(make_user):
    return make_user("lawyer@example.com")


@pytest.fixture
def other(make_user):
    return make_user("other@example.com")


def test_unread_count_tracks_each_mark(session, lawyer):
    created = [_publish(session, lawyer.id, f"N{index}") for index in range(3)]

    assert count_unread(session, recipient_id=lawyer.id) == 3
    for expected, notification in zip((2, 1, 0), created):
        mark_read(session, recipient_id=lawyer.id, notification_id=notification.id)
        assert count_unread(session, recipient_id=lawyer.id) == expected


def test_mark_read_sets_timestamp_once(session, lawyer):
    notification = _publish(session, lawyer.id, "Prazo")

    first = mark_read(session, recipient_id=lawyer.id, notification_id=notification.id)
    second = mark_read(session, recipient_id=lawyer.id, notification_id=notification.id)

    assert first.is_read is True
    assert first.read_at is not None
    assert second.is_read is True
    assert second.read_at == first.read_at
    assert count_unread(session, recipient_id=lawyer.id) == 0


def test_mark_read_foreign_notification_is_not_found(session, lawyer, other):
    notification = _publish(session, other.id, "Alheia")

    with pytest.raises(NotificationNotFoundError):
        mark_read(session, recipient_id=lawyer.id, notification_id=notification.id)

    stored = NotificationRepository(session).get_for_user(notification.id, user_id=other.id)
    assert stored is not None
    assert stored.is_read is False
    assert stored.read_at is None


def test_mark_read_missing_notification_is_not_found(session, lawyer):
    with pytest.raises(NotFoundError):
        mark_read(session, recipient_id=lawyer.id, notification_id=9999)


def test_mark_all_read_returns_updated_rows(session, lawyer, other):
    for index in range(4):
        _publish(session, lawyer.id, f"N{index}")
    _publish(session, other.id, "Outro")

    assert mark_all_read(session, recipient_id=lawyer.id) == 4
    assert count_unread(session, recipient_id=lawyer.id) == 0
    assert count_unread(session, recipient_id=other.id) == 1
    assert mark_all_read(session, recipient_id=lawyer.id) == 0


def test_mark_all_read_keeps_earlier_read_timestamp(session, lawyer):
    first = _publish(session, lawyer.id, "Primeira")
    _publish(session, lawyer.id, "Segunda")
    already_read = mark_read(session, recipient_id=lawyer.id, notification_id=first.id)

    assert mark_all_read(session, recipient_id=lawyer.id) == 1

    stored = NotificationRepository(session).get_for_user(first.id, user_id=lawyer.id)
    assert stored.read_at == already_read.read_at


def _failing_commit():
    raise OperationalError("UPDATE notifications", {}, Exception("database is locked"))


def test_mark_all_read_rolls_back_when_commit_fails(session, lawyer, monkeypatch):
    for index in range(3):
        _publish(session, lawyer.id, f"N{index}")
    monkeypatch.setattr(session, "commit", _failing_commit)

    with pytest.raises(OperationalError):
        mark_all_read(session, recipient_id=lawyer.id)

    assert count_unread(session, recipient_id=lawyer.id) == 3


def test_mark_read_rolls_back_when_commit_fails(session, lawyer, monkeypatch):
    notification = _publish(session, lawyer.id, "Prazo")
    monkeypatch.setattr(session, "commit", _failing_commit)

    with pytest.raises(OperationalError):
        mark_read(session, recipient_id=lawyer.id, notification_id=notification.id)

    stored = NotificationRepository(session).get_for_user(notification.id, user_id=lawyer.id)
    assert stored.is_read is False
    assert stored.read_at is None
    assert count_unread(session, recipient_id=lawyer.id) == 1


def test_list_unread_pages_newest_first(session, lawyer):
    created = [_publish(session, lawyer.id, f"N{index}") for index in range(5)]

    first_page = list_unread(session, recipient_id=lawyer.id, page=1, limit=2)
    last_page = list_unread(session, recipient_id=lawyer.id, page=3, limit=2)

    assert [item.id for item in first_page.items] == [created[4].id, created[3].id]
    assert first_page.total == 5
    assert first_page.total_pages == 3
    assert [item.id for item in last_page.items] == [created[0].id]


def test_list_unread_excludes_read_and_foreign(session, lawyer, other):
    read = _publish(session, lawyer.id, "Lida")
    unread = _publish(session, lawyer.id, "Nova")
    _publish(session, other.id, "Alheia")
    mark_read(session, recipient_id=lawyer.id, notification_id=read.id)

    page = list_unread(session, recipient_id=lawyer.id)

    assert [item.id for item in page.items] == [unread.id]
    assert page.total == count_unread(session, recipient_id=lawyer.id)


@pytest.mark.parametrize(
    ("page", "limit", "expected_page", "expected_limit"),
    [
        (0, 10, 1, 10),
        (-3, 10, 1, 10),
        (1, 0, 1, 1),
        (1, 1000, 1, 100),
        (None, None, 1, 10),
    ],
)
def test_clamp_pagination(page, limit, expected_page, expected_limit):
    request = clamp_pagination(page, limit)

    assert (request.page, request.limit) == (expected_page, expected_limit)


def test_listing_clamps_instead_of_rejecting(session, lawyer):
    for index in range(3):
        _publish(session, lawyer.id, f"N{index}")

    page_zero = list_unread(session, recipient_id=lawyer.id, page=0, limit=0)
    page_one = list_unread(session, recipient_id=lawyer.id, page=1, limit=1)

    assert page_zero.page == 1
    assert page_zero.limit == 1
    assert [item.id for item in page_zero.items] == [item.id for item in page_one.items]


def test_priority_scenario(session, lawyer):
    _publish(session, lawyer.id, "Baixa", NotificationPriority.LOW)
    high = _publish(session, lawyer.id, "Alta", NotificationPriority.HIGH)
    _publish(session, lawyer.id, "Urgente", NotificationPriority.URGENT)

    assert list_unread(session, recipient_id=lawyer.id).total == 3
    mark_read(session, recipient_id=lawyer.id, notification_id=high.id)
    assert count_unread(session, recipient_id=lawyer.id) == 2
    mark_all_read(session, recipient_id=lawyer.id)
    assert count_unread(session, recipient_id=lawyer.id) == 0


def test_list_notifications_filters(session, lawyer):
    deadline = _publish(
        session,
        lawyer.id,
        "Prazo",
        NotificationPriority.URGENT,
        notification_type=NotificationType.CASE_DEADLINE,
    )
    _publish(session, lawyer.id, "Pagamento", notification_type=NotificationType.PAYMENT_DUE)

    by_type = list_notifications(
        session, recipient_id=lawyer.id, notification_type=NotificationType.CASE_DEADLINE
    )
    by_priority = list_notifications(
        session, recipient_id=lawyer.id, priority=NotificationPriority.URGENT
    )

    assert [item.id for item in by_type.items] == [deadline.id]
    assert [item.id for item in by_priority.items] == [deadline.id]


def test_publish_persists_metadata(session, lawyer):
    notification = _publish(
        session,
        lawyer.id,
        "Documento",
        action_url="/documents/7",
        metadata={"document_id": 7},
    )

    assert notification.is_read is False
    assert notification.created_at is not None
    assert notification.created_at.tzinfo is not None
    assert notification.metadata == {"document_id": 7}
    assert notification.action_url == "/documents/7"


def test_publish_rejects_unknown_recipient(session):
    with pytest.raises(NotFoundError):
        _publish(session, 404, "Ninguém")


def test_publish_rejects_blank_title(session, lawyer):
    with pytest.raises(ValueError):
        _publish(session, lawyer.id, "   ")


def test_priority_is_ordered():
    assert (
        NotificationPriority.LOW
        < NotificationPriority.MEDIUM
        < NotificationPriority.HIGH
        < NotificationPriority.URGENT
    )
    assert max(NotificationPriority) is NotificationPriority.URGENT
