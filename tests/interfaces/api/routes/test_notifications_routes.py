"""Integration tests for the notification endpoints."""

from campus_notify.domain.entities import Role


def _create(client, headers, **overrides):
    payload = {
        "title": "Placement drive",
        "body": "Register before Friday.",
        "type": "announcement",
        "priority": "high",
        "targeting": {"kind": "filtered", "branches": ["CSE"]},
    }
    payload.update(overrides)
    return client.post("/notifications/", json=payload, headers=headers)


def test_admin_broadcast_and_student_inbox(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN, branch_id="ADMIN")
    student = make_user(branch_id="CSE")
    make_user(branch_id="ECE")

    response = _create(client, auth_headers(admin), metadata={"venue": "Hall A"})
    assert response.status_code == 201
    created = response.json()
    assert created["recipient_count"] == 1
    assert created["targeting"] == {
        "kind": "filtered",
        "branches": ["CSE"],
        "semesters": None,
        "years": None,
    }
    assert created["metadata"] == {"venue": "Hall A"}

    headers = auth_headers(student)
    inbox = client.get("/notifications/me", headers=headers)
    assert inbox.status_code == 200
    body = inbox.json()
    assert body["total"] == 1
    assert body["items"][0]["id"] == created["id"]
    assert body["items"][0]["is_read"] is False
    assert body["items"][0]["priority"] == "high"

    assert client.get("/notifications/me/unread-count", headers=headers).json() == {
        "unread_count": 1
    }
    read = client.post(f"/notifications/{created['id']}/read", headers=headers)
    assert read.status_code == 200
    assert read.json() == {"success": True}
    assert client.get("/notifications/me/unread-count", headers=headers).json() == {
        "unread_count": 0
    }


def test_student_can_not_broadcast(client, make_user, auth_headers):
    student = make_user()

    response = _create(client, auth_headers(student))

    assert response.status_code == 403


def test_mixed_targeting_is_unprocessable(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN)

    response = _create(
        client,
        auth_headers(admin),
        targeting={"kind": "users", "user_ids": [1], "branches": ["CSE"]},
    )
    empty_filter = _create(
        client, auth_headers(admin), targeting={"kind": "filtered", "semesters": []}
    )

    assert response.status_code == 422
    assert empty_filter.status_code == 422
    assert client.get("/notifications/", headers=auth_headers(admin)).json() == []


def test_missing_or_invalid_token(client):
    assert client.get("/notifications/me").status_code == 401
    assert (
        client.get(
            "/notifications/me", headers={"Authorization": "Bearer not-a-token"}
        ).status_code
        == 401
    )


def test_dismiss_and_read_all(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN)
    student = make_user()
    first = _create(client, auth_headers(admin), targeting={"kind": "all"}).json()
    _create(client, auth_headers(admin), targeting={"kind": "all"}, title="Second")
    headers = auth_headers(student)

    assert client.post(f"/notifications/{first['id']}/dismiss", headers=headers).status_code == 200
    listing = client.get("/notifications/me", headers=headers).json()
    assert [item["title"] for item in listing["items"]] == ["Second"]

    with_dismissed = client.get(
        "/notifications/me", params={"include_dismissed": True}, headers=headers
    ).json()
    assert with_dismissed["total"] == 2

    response = client.post("/notifications/read-all", headers=headers)
    assert response.json() == {"updated": 1}


def test_read_without_delivery_is_not_found(client, make_user, auth_headers):
    student = make_user()

    response = client.post("/notifications/999/read", headers=auth_headers(student))

    assert response.status_code == 404


def test_admin_management_endpoints(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN)
    make_user()
    headers = auth_headers(admin)
    created = _create(client, headers, targeting={"kind": "all"}).json()

    listing = client.get("/notifications/", headers=headers)
    stats = client.get("/notifications/stats", headers=headers)
    detail = client.get(f"/notifications/{created['id']}", headers=headers)

    assert [item["id"] for item in listing.json()] == [created["id"]]
    assert stats.json() == {
        "total_notifications": 1,
        "total_recipients": 2,
        "read_deliveries": 0,
        "unread_deliveries": 2,
    }
    assert detail.json()["title"] == "Placement drive"

    assert client.delete(f"/notifications/{created['id']}", headers=headers).status_code == 204
    assert client.get(f"/notifications/{created['id']}", headers=headers).status_code == 404


def test_preferences_round_trip(client, make_user, auth_headers):
    student = make_user()
    headers = auth_headers(student)

    initial = client.get("/preferences/me", headers=headers).json()
    assert initial["preferences"]["event"] is True

    updated = client.put(
        "/preferences/me", json={"preferences": {"event": False}}, headers=headers
    )

    assert updated.status_code == 200
    assert updated.json()["preferences"]["event"] is False
    assert updated.json()["preferences"]["opportunity"] is True
