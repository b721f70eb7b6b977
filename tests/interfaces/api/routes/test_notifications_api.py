"""Integration tests for the notification endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.domain.entities import (
    MAX_RECORD_ID,
    ROLE_SYSTEM_ADMIN,
    ROLE_SYSTEM_OPERATOR,
    NotificationStatusCode,
    NotificationTypeCode,
)


def _payload(**overrides) -> dict:
    payload = {
        "subject": "Release 2.4",
        "body": "A new version has been deployed.",
        "notification_type_id": int(NotificationTypeCode.NEWS),
        "user_ids": [],
        "cluster_id": 0,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def people(make_user):
    return {
        "admin": make_user(ROLE_SYSTEM_ADMIN, name="Admin"),
        "operator": make_user(ROLE_SYSTEM_OPERATOR, name="Operator"),
        "alice": make_user(name="Alice"),
        "bob": make_user(name="Bob"),
    }


def _create(client: TestClient, headers: dict, **overrides) -> int:
    response = client.post("/Notifications", json=_payload(**overrides), headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["notification_id"]


def test_requests_without_token_are_rejected(client: TestClient) -> None:
    assert client.get("/Notifications").status_code == 401
    assert client.post("/Notifications", json=_payload(user_ids=[1])).status_code == 401
    assert client.get("/Notifications/User/1").status_code == 401


def test_invalid_token_is_rejected(client: TestClient) -> None:
    response = client.get("/Notifications", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401


def test_role_restrictions(client: TestClient, people, auth_headers) -> None:
    alice = auth_headers(people["alice"])
    operator = auth_headers(people["operator"])

    assert client.get("/Notifications", headers=alice).status_code == 403
    assert client.get("/Notifications", headers=operator).status_code == 403
    assert client.get("/Notifications/Count", headers=operator).status_code == 403
    assert (
        client.post(
            "/Notifications", json=_payload(user_ids=[people["bob"].id]), headers=alice
        ).status_code
        == 403
    )
    other_user = f"/Notifications/User/{people['bob'].id}"
    assert client.get(other_user, headers=alice).status_code == 403
    assert client.post(f"{other_user}/ReadAll", headers=alice).status_code == 403


def test_inactive_user_is_rejected(client: TestClient, make_user, auth_headers) -> None:
    inactive = make_user(ROLE_SYSTEM_ADMIN, is_active=False)

    response = client.get("/Notifications", headers=auth_headers(inactive))

    assert response.status_code == 400


def test_admin_creates_and_lists(client: TestClient, people, auth_headers) -> None:
    admin = auth_headers(people["admin"])
    notification_id = _create(
        client, admin, user_ids=[people["alice"].id, people["bob"].id]
    )

    response = client.get(f"/Notifications/{notification_id}", headers=admin)
    assert response.status_code == 200
    body = response.json()
    assert body["subject"] == "Release 2.4"
    assert body["sender_id"] == people["admin"].id
    assert body["sender_name"] == "Admin"
    assert body["is_expired"] is False

    listing = client.get("/Notifications", params={"filter": "release"}, headers=admin)
    assert listing.status_code == 200
    page = listing.json()
    assert page["route"] == "/Notifications"
    assert page["total_count"] == 1
    assert page["total_filtered_count"] == 1
    assert page["next_page"] is None
    assert page["previous_page"] is None
    assert [item["notification_id"] for item in page["data"]] == [notification_id]

    count = client.get("/Notifications/Count", params={"filter": "release"}, headers=admin)
    assert count.json() == {"count": 1}


def test_listing_links_to_neighbouring_pages(client: TestClient, people, auth_headers) -> None:
    admin = auth_headers(people["admin"])
    for index in range(12):
        _create(client, admin, subject=f"Notice {index}", user_ids=[people["alice"].id])

    first = client.get("/Notifications", params={"limit": 1}, headers=admin).json()
    second = client.get("/Notifications", params={"page": 2}, headers=admin).json()

    assert first["limit"] == 10
    assert len(first["data"]) == 10
    assert first["next_page"] == "/Notifications?page=2&limit=10&sort=id"
    assert first["previous_page"] is None
    assert len(second["data"]) == 2
    assert second["next_page"] is None
    assert second["previous_page"] == "/Notifications?page=1&limit=10&sort=id"


def test_operator_creates_as_sender(client: TestClient, people, auth_headers) -> None:
    operator = auth_headers(people["operator"])

    notification_id = _create(client, operator, user_ids=[people["alice"].id])
    own_sender = client.post(
        "/Notifications",
        json=_payload(user_ids=[people["alice"].id], sender_id=people["operator"].id),
        headers=operator,
    )
    foreign_sender = client.post(
        "/Notifications",
        json=_payload(user_ids=[people["alice"].id], sender_id=people["admin"].id),
        headers=operator,
    )

    assert own_sender.status_code == 200
    assert foreign_sender.status_code == 403
    stored = client.get(
        f"/Notifications/{notification_id}", headers=auth_headers(people["admin"])
    ).json()
    assert stored["sender_id"] == people["operator"].id


def test_create_errors(client: TestClient, people, auth_headers) -> None:
    admin = auth_headers(people["admin"])

    empty = client.post("/Notifications", json=_payload(), headers=admin)
    missing_cluster = client.post("/Notifications", json=_payload(cluster_id=404), headers=admin)
    bad_type = client.post(
        "/Notifications",
        json=_payload(user_ids=[people["alice"].id], notification_type_id=9),
        headers=admin,
    )
    malformed = client.post("/Notifications", json={"subject": "Missing"}, headers=admin)

    assert empty.status_code == 404
    assert empty.json()["detail"] == "Users and clusters are empty"
    assert missing_cluster.status_code == 404
    assert bad_type.status_code == 400
    assert malformed.status_code == 400
    # The content record survives a missing cluster.
    assert client.get("/Notifications/Count", headers=admin).json() == {"count": 1}


def test_out_of_range_recipient_is_skipped(client: TestClient, people, auth_headers) -> None:
    admin = auth_headers(people["admin"])
    alice = people["alice"]

    notification_id = _create(client, admin, user_ids=[alice.id, 2**63])

    inbox = client.get(f"/Notifications/User/{alice.id}", headers=auth_headers(alice))
    assert [item["notification_id"] for item in inbox.json()["data"]] == [notification_id]


def test_out_of_range_identifiers_are_rejected(client: TestClient, people, auth_headers) -> None:
    admin = auth_headers(people["admin"])
    alice = people["alice"]

    sender = client.post(
        "/Notifications",
        json=_payload(user_ids=[alice.id], sender_id=2**63),
        headers=admin,
    )
    single = client.get(f"/Notifications/{2**63}", headers=admin)
    by_status = client.get(
        f"/Notifications/User/{alice.id}",
        params={"notification_status": 2**63},
        headers=admin,
    )
    by_type = client.get("/Notifications", params={"notification_type": 2**63}, headers=admin)

    assert sender.status_code == 400
    assert single.status_code == 400
    assert by_status.status_code == 400
    assert by_type.status_code == 400
    assert client.get("/Notifications/Count", headers=admin).json() == {"count": 0}


def test_page_beyond_the_store_is_empty(client: TestClient, people, auth_headers) -> None:
    admin = auth_headers(people["admin"])
    _create(client, admin, user_ids=[people["alice"].id])

    response = client.get("/Notifications", params={"page": 10**18}, headers=admin)

    assert response.status_code == 200
    page = response.json()
    assert page["page"] == MAX_RECORD_ID
    assert page["data"] == []
    assert page["total_filtered_count"] == 1
    assert page["next_page"] is None
    assert page["previous_page"] == (
        f"/Notifications?page={MAX_RECORD_ID - 1}&limit=10&sort=id"
    )


def test_cluster_members_see_the_notification(
    client: TestClient, people, auth_headers, make_cluster
) -> None:
    admin = auth_headers(people["admin"])
    cluster_id = make_cluster([people["alice"].id], [people["bob"].id])

    notification_id = _create(client, admin, cluster_id=cluster_id)

    for name in ("alice", "bob"):
        user = people[name]
        response = client.get(f"/Notifications/User/{user.id}", headers=auth_headers(user))
        assert response.status_code == 200
        data = response.json()["data"]
        assert [item["notification_id"] for item in data] == [notification_id]
        assert data[0]["recipient_id"] == user.id
        assert data[0]["notification_status_id"] == NotificationStatusCode.CREATED


def test_member_of_two_departments_has_one_cluster_entry(
    client: TestClient, people, auth_headers, make_cluster
) -> None:
    admin = auth_headers(people["admin"])
    alice = people["alice"]
    cluster_id = make_cluster([alice.id], [alice.id, people["bob"].id])

    _create(client, admin, cluster_id=cluster_id)

    count = client.get(f"/Notifications/User/{alice.id}/Count", headers=auth_headers(alice))
    assert count.json() == {"count": 1}


def test_recipient_reads_and_marks_notifications(
    client: TestClient, people, auth_headers
) -> None:
    admin = auth_headers(people["admin"])
    alice = people["alice"]
    alice_headers = auth_headers(alice)
    first = _create(client, admin, subject="First", user_ids=[alice.id])
    _create(client, admin, subject="Second", user_ids=[alice.id, people["bob"].id])

    response = client.patch(
        f"/Notifications/{first}/User/{alice.id}",
        json={"notification_status_id": int(NotificationStatusCode.READ)},
        headers=alice_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"updated": 1}

    unread = client.get(
        f"/Notifications/User/{alice.id}",
        params={"notification_status": int(NotificationStatusCode.CREATED)},
        headers=alice_headers,
    ).json()
    assert unread["total_count"] == 2
    assert unread["total_filtered_count"] == 1
    assert [item["subject"] for item in unread["data"]] == ["Second"]

    read_all = client.post(f"/Notifications/User/{alice.id}/ReadAll", headers=alice_headers)
    assert read_all.json() == {"updated": 1}
    count = client.get(
        f"/Notifications/User/{alice.id}/Count",
        params={"notification_status": int(NotificationStatusCode.READ)},
        headers=alice_headers,
    )
    assert count.json() == {"count": 2}

    bob_unread = client.get(
        f"/Notifications/User/{people['bob'].id}/Count",
        params={"notification_status": int(NotificationStatusCode.CREATED)},
        headers=admin,
    )
    assert bob_unread.json() == {"count": 1}


def test_status_patch_errors(client: TestClient, people, auth_headers) -> None:
    admin = auth_headers(people["admin"])
    notification_id = _create(client, admin, user_ids=[people["alice"].id])

    missing = client.patch(
        "/Notifications/999", json={"notification_status_id": 3}, headers=admin
    )
    out_of_range = client.patch(
        f"/Notifications/{notification_id}",
        json={"notification_status_id": 9},
        headers=admin,
    )
    all_entries = client.patch(
        f"/Notifications/{notification_id}",
        json={"notification_status_id": int(NotificationStatusCode.DISABLED)},
        headers=admin,
    )

    assert missing.status_code == 404
    assert out_of_range.status_code == 400
    assert all_entries.json() == {"updated": 1}


def test_sender_updates_notification(client: TestClient, people, auth_headers) -> None:
    operator = people["operator"]
    operator_headers = auth_headers(operator)
    notification_id = _create(client, operator_headers, user_ids=[people["alice"].id])
    update = {
        "subject": "Release 2.4.1",
        "body": "Hotfix included.",
        "sender_id": operator.id,
        "notification_type_id": int(NotificationTypeCode.SYSTEM),
    }

    response = client.put(
        f"/Notifications/{notification_id}", json=update, headers=operator_headers
    )
    assert response.status_code == 200
    assert response.json()["subject"] == "Release 2.4.1"
    assert response.json()["notification_type_id"] == NotificationTypeCode.SYSTEM

    stranger = client.put(
        f"/Notifications/{notification_id}",
        json=update,
        headers=auth_headers(people["alice"]),
    )
    assert stranger.status_code == 403

    missing = client.put(
        "/Notifications/999", json=update, headers=auth_headers(people["admin"])
    )
    assert missing.status_code == 404


def test_delete_notification(client: TestClient, people, auth_headers) -> None:
    admin = auth_headers(people["admin"])
    alice = people["alice"]
    notification_id = _create(client, admin, user_ids=[alice.id])

    response = client.delete(f"/Notifications/{notification_id}", headers=admin)

    assert response.status_code == 200
    assert response.json() == {"deleted": notification_id}
    assert client.get(f"/Notifications/{notification_id}", headers=admin).status_code == 404
    assert client.get(
        f"/Notifications/User/{alice.id}/Count", headers=auth_headers(alice)
    ).json() == {"count": 0}
    assert client.delete(f"/Notifications/{notification_id}", headers=admin).status_code == 404
