"""Tests for listing, counting, updating and deleting notifications."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.application.use_cases.notifications import (
    count_notifications,
    count_user_notifications,
    create_notification,
    delete_notification,
    get_notification,
    list_notifications,
    list_user_notifications,
    update_notification,
    update_notification_status,
)
from app.domain.entities import (
    ROLE_SYSTEM_ADMIN,
    Notification,
    NotificationCriteria,
    NotificationStatusCode,
    NotificationTypeCode,
    NotificationUser,
)
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.repositories import (
    DirectoryRepository,
    NotificationRepository,
    NotificationUserRepository,
)

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _store(session, sender, subject, *, body="Body", type_code=NotificationTypeCode.SYSTEM,
           created_at=None, recipients=()):
    """Write a notification and its ledger rows with explicit timestamps."""

    directory = DirectoryRepository(session)
    notification = NotificationRepository(session).create(
        Notification(
            id=None,
            subject=subject,
            body=body,
            sender_id=sender.id,
            notification_type=directory.get_notification_type(type_code),
            created_at=created_at,
        )
    )
    created = directory.get_notification_status(NotificationStatusCode.CREATED)
    ledger = NotificationUserRepository(session)
    for recipient in recipients:
        ledger.create(
            NotificationUser(
                id=None,
                notification_id=notification.id,
                user_id=recipient.id,
                notification_status=created,
                created_by=sender.id,
                created_at=created_at,
            )
        )
    return notification


@pytest.fixture()
def catalog(session, make_user):
    admin = make_user(ROLE_SYSTEM_ADMIN)
    reader = make_user()
    stored = [
        _store(session, admin, "Server upgrade", body="Planned downtime",
               created_at=BASE_TIME, recipients=[reader]),
        _store(session, admin, "Company news", body="New office opened",
               type_code=NotificationTypeCode.NEWS,
               created_at=BASE_TIME + timedelta(days=1), recipients=[reader]),
        _store(session, admin, "Access review", body="Please review the SERVER list",
               created_at=BASE_TIME + timedelta(days=2), recipients=[reader]),
        _store(session, admin, "Bulletin", body="Weekly digest",
               type_code=NotificationTypeCode.NEWS,
               created_at=BASE_TIME + timedelta(days=3)),
    ]
    return admin, reader, stored


@pytest.mark.parametrize(
    "filters",
    [
        {},
        {"text": "server"},
        {"text": "SERVER"},
        {"notification_type_id": NotificationTypeCode.NEWS},
        {"date_from": BASE_TIME + timedelta(days=1)},
        {"date_to": BASE_TIME + timedelta(days=1)},
        {"text": "o", "notification_type_id": NotificationTypeCode.SYSTEM},
        {"text": "nothing matches this"},
    ],
)
def test_count_matches_listing(session, catalog, filters):
    listed = NotificationRepository(session).list(NotificationCriteria(**filters))

    assert count_notifications(session, **filters) == len(listed)
    result = list_notifications(session, limit=100, **filters)
    assert result.total_filtered_count == len(listed)
    assert result.total_count == 4


def test_text_filter_searches_subject_and_body(session, catalog):
    result = list_notifications(session, text="server")

    assert [item.subject for item in result.items] == ["Server upgrade", "Access review"]


def test_text_filter_treats_wildcards_literally(session, catalog):
    assert count_notifications(session, text="%") == 0
    assert count_notifications(session, text="_") == 0


def test_type_and_date_filters_combine(session, catalog):
    result = list_notifications(
        session,
        notification_type_id=NotificationTypeCode.NEWS,
        date_from=BASE_TIME + timedelta(days=2),
    )

    assert [item.subject for item in result.items] == ["Bulletin"]
    assert result.total_count == 4
    assert result.total_filtered_count == 1


def test_sort_tokens(session, catalog):
    by_subject = list_notifications(session, sort="subject")
    newest_first = list_notifications(session, sort="created_on|desc")
    unknown = list_notifications(session, sort="password|desc")

    assert [item.subject for item in by_subject.items] == [
        "Access review",
        "Bulletin",
        "Company news",
        "Server upgrade",
    ]
    assert [item.subject for item in newest_first.items][0] == "Bulletin"
    assert [item.id for item in unknown.items] == sorted(item.id for item in unknown.items)
    assert unknown.sort.token == "id"


def test_page_zero_behaves_like_page_one(session, catalog):
    first = list_notifications(session, page=0)
    one = list_notifications(session, page=1)

    assert first.page.page == 1
    assert [item.id for item in first.items] == [item.id for item in one.items]


def test_page_beyond_the_store_returns_an_empty_page(session, catalog):
    result = list_notifications(session, page=10**18)

    assert result.items == []
    assert result.total_count == 4
    assert result.total_filtered_count == 4


def test_small_limit_is_raised_to_the_default(session, make_user):
    admin = make_user(ROLE_SYSTEM_ADMIN)
    for index in range(12):
        _store(session, admin, f"Notice {index:02d}")

    result = list_notifications(session, limit=1)

    assert result.page.limit == 10
    assert len(result.items) == 10
    second_page = list_notifications(session, page=2, limit=1)
    assert len(second_page.items) == 2


def test_user_listing_counts(session, catalog):
    _, reader, stored = catalog
    update_notification_status(
        session,
        notification_id=stored[0].id,
        status_id=NotificationStatusCode.READ,
        user_id=reader.id,
    )

    result = list_user_notifications(
        session, user_id=reader.id, notification_status_id=NotificationStatusCode.CREATED
    )

    assert result.total_count == 3
    assert result.total_filtered_count == 2
    assert [row.notification.subject for row in result.items] == [
        "Company news",
        "Access review",
    ]
    assert all(row.entry.user_id == reader.id for row in result.items)
    assert count_user_notifications(
        session, user_id=reader.id, notification_status_id=NotificationStatusCode.CREATED
    ) == 2


def test_user_listing_filters_by_entry_date_and_sorts_by_status(session, catalog):
    _, reader, stored = catalog
    update_notification_status(
        session,
        notification_id=stored[2].id,
        status_id=NotificationStatusCode.READ,
        user_id=reader.id,
    )

    recent = list_user_notifications(
        session, user_id=reader.id, date_from=BASE_TIME + timedelta(hours=12)
    )
    by_status = list_user_notifications(session, user_id=reader.id, sort="status|desc")

    assert recent.total_filtered_count == 2
    assert by_status.items[0].notification.id == stored[2].id


def test_user_without_entries_gets_an_empty_page(session, catalog, make_user):
    result = list_user_notifications(session, user_id=make_user().id)

    assert result.items == []
    assert result.total_count == 0
    assert result.total_filtered_count == 0


def test_get_missing_notification_raises(session):
    with pytest.raises(NotFoundError):
        get_notification(session, 123)


def test_update_replaces_content_but_keeps_recipients(session, catalog, make_user):
    _, reader, stored = catalog
    new_sender = make_user(name="Communications")

    updated = update_notification(
        session,
        notification_id=stored[0].id,
        subject="Server upgrade postponed",
        body="New date to follow",
        sender_id=new_sender.id,
        notification_type_id=NotificationTypeCode.NEWS,
    )

    assert updated.subject == "Server upgrade postponed"
    assert updated.sender_name == "Communications"
    assert updated.notification_type.id == NotificationTypeCode.NEWS
    assert updated.created_at == stored[0].created_at
    ledger = NotificationUserRepository(session)
    assert ledger.count_by_notification(stored[0].id, user_id=reader.id) == 1


def test_update_errors(session, catalog):
    admin, _, stored = catalog

    with pytest.raises(NotFoundError):
        update_notification(
            session,
            notification_id=999,
            subject="x",
            body="y",
            sender_id=admin.id,
            notification_type_id=NotificationTypeCode.SYSTEM,
        )
    with pytest.raises(ValidationError):
        update_notification(
            session,
            notification_id=stored[0].id,
            subject="x",
            body="y",
            sender_id=admin.id,
            notification_type_id=7,
        )


def test_delete_removes_recipient_entries(session, make_user):
    admin = make_user(ROLE_SYSTEM_ADMIN)
    recipients = [make_user(), make_user()]
    created = create_notification(
        session,
        acting_user=admin,
        subject="Temporary",
        body="Will be removed",
        notification_type_id=NotificationTypeCode.SYSTEM,
        recipient_ids=[user.id for user in recipients],
    )
    notification_id = created.notification.id

    delete_notification(session, notification_id)

    assert not NotificationRepository(session).exists(notification_id)
    assert NotificationUserRepository(session).count_by_notification(notification_id) == 0
    for user in recipients:
        assert list_user_notifications(session, user_id=user.id).total_count == 0
    with pytest.raises(NotFoundError):
        delete_notification(session, notification_id)


def test_expiry_flag(session, make_user):
    admin = make_user(ROLE_SYSTEM_ADMIN)
    created = create_notification(
        session,
        acting_user=admin,
        subject="Flash sale",
        body="Ends soon",
        notification_type_id=NotificationTypeCode.NEWS,
        recipient_ids=[make_user().id],
        time_to_turn_off=BASE_TIME,
    )
    stored = get_notification(session, created.notification.id)

    assert stored.is_expired(BASE_TIME + timedelta(seconds=1))
    assert not stored.is_expired(BASE_TIME - timedelta(seconds=1))
