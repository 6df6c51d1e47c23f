"""Integration tests for the user directory endpoints."""

from campus_notify.domain.entities import Role


def test_me_returns_role_from_the_directory(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN)

    response = client.get("/users/me", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["role"] == "admin"


def test_register_user_queues_welcome(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN)
    headers = auth_headers(admin)

    response = client.post(
        "/users/",
        json={"name": "Nia", "email": "nia@campus.example", "semester": 2},
        headers=headers,
    )
    assert response.status_code == 201
    assert response.json()["role"] == "student"

    run = client.post("/domain-events/process", headers=headers)
    assert run.json()["processed"] == 1


def test_admin_can_not_create_an_owner(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN)

    response = client.post(
        "/users/",
        json={"name": "Boss", "email": "boss@campus.example", "role": "owner"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 403


def test_role_transitions(client, make_user, auth_headers):
    owner = make_user(role=Role.OWNER)
    admin = make_user(role=Role.ADMIN)
    student = make_user()

    promoted = client.post(f"/users/{student.id}/promote", headers=auth_headers(admin))
    assert promoted.status_code == 200
    assert promoted.json()["role"] == "admin"

    assert (
        client.post(f"/users/{student.id}/demote", headers=auth_headers(admin)).status_code
        == 403
    )
    demoted = client.post(f"/users/{student.id}/demote", headers=auth_headers(owner))
    assert demoted.json()["role"] == "student"

    assert client.delete(f"/users/{owner.id}", headers=auth_headers(owner)).status_code == 403
    assert client.delete(f"/users/{student.id}", headers=auth_headers(owner)).status_code == 204
    assert client.delete(f"/users/{student.id}", headers=auth_headers(owner)).status_code == 404


def test_directory_listing_requires_admin(client, make_user, auth_headers):
    owner = make_user(role=Role.OWNER)
    student = make_user()

    assert client.get("/users/", headers=auth_headers(student)).status_code == 403
    listing = client.get("/users/", headers=auth_headers(owner)).json()
    assert [user["id"] for user in listing] == [owner.id, student.id]


def test_removed_user_token_is_rejected(client, make_user, auth_headers):
    owner = make_user(role=Role.OWNER)
    student = make_user()
    headers = auth_headers(student)

    client.delete(f"/users/{student.id}", headers=auth_headers(owner))

    assert client.get("/users/me", headers=headers).status_code == 401
