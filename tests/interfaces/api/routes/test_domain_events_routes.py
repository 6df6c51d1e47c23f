"""Integration tests for the domain-event endpoints."""

from datetime import timedelta

from campus_notify.domain.entities import Role
from campus_notify.utils import now_in_app_timezone


def test_enqueue_and_process_event(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN)
    student = make_user(branch_id="CSE", year=3)
    headers = auth_headers(admin)
    deadline = (now_in_app_timezone() + timedelta(days=2)).isoformat()

    queued = client.post(
        "/domain-events/",
        json={
            "kind": "opportunity.posted",
            "payload": {
                "id": "opp-7",
                "title": "Data Intern",
                "opportunity_type": "Internship",
                "company_name": "Acme",
                "deadline": deadline,
                "branches": ["CSE"],
                "years": [3],
            },
        },
        headers=headers,
    )
    assert queued.status_code == 202
    assert queued.json()["status"] == "pending"

    run = client.post("/domain-events/process", headers=headers)
    assert run.json() == {"processed": 1, "failed": 0, "skipped": 0}

    inbox = client.get("/notifications/me", headers=auth_headers(student)).json()
    assert inbox["items"][0]["type"] == "opportunity"
    assert inbox["items"][0]["priority"] == "high"


def test_invalid_event_payload(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN)

    response = client.post(
        "/domain-events/",
        json={"kind": "timetable.updated", "payload": {"id": "tt"}},
        headers=auth_headers(admin),
    )

    assert response.status_code == 422


def test_event_with_empty_branch_list_is_refused(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN)

    response = client.post(
        "/domain-events/",
        json={
            "kind": "event.published",
            "payload": {"id": "ev-x", "title": "Fest", "branches": []},
        },
        headers=auth_headers(admin),
    )

    assert response.status_code == 422
    assert client.post("/domain-events/process", headers=auth_headers(admin)).json() == {
        "processed": 0,
        "failed": 0,
        "skipped": 0,
    }


def test_exam_sweep_endpoint(client, make_user, auth_headers):
    admin = make_user(role=Role.ADMIN)
    student = make_user(branch_id="CSE", semester=3)
    today = now_in_app_timezone().date()
    exam = {
        "id": "exam-5",
        "subject_code": "CS305",
        "subject_name": "Compilers",
        "exam_type": "End-term",
        "exam_date": (today + timedelta(days=1)).isoformat(),
        "branch_id": "CSE",
        "semester": 3,
    }

    first = client.post(
        "/domain-events/exam-sweep", json={"exams": [exam]}, headers=auth_headers(admin)
    )
    client.post("/domain-events/exam-sweep", json={"exams": [exam]}, headers=auth_headers(admin))

    assert first.json() == {"handled": 1}
    inbox = client.get("/notifications/me", headers=auth_headers(student)).json()
    assert inbox["total"] == 1
    assert inbox["items"][0]["priority"] == "high"


def test_students_can_not_report_events(client, make_user, auth_headers):
    student = make_user()

    response = client.post("/domain-events/process", headers=auth_headers(student))

    assert response.status_code == 403
    assert (
        client.post(
            "/domain-events/",
            json={"kind": "user.registered", "payload": {"id": student.id, "name": "S"}},
            headers=auth_headers(student),
        ).status_code
        == 403
    )
    assert (
        client.post(
            "/domain-events/exam-sweep",
            json={"today": now_in_app_timezone().date().isoformat(), "exams": []},
            headers=auth_headers(student),
        ).status_code
        == 403
    )
