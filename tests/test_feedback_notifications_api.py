from fastapi.testclient import TestClient

from app.models.notification_db.notification_crud import add_notifications
from app.services.roles import Role
from conftest import auth_headers, make_event, make_user


def test_student_submits_feedback(client: TestClient, db, organizer, student) -> None:
    event = make_event(db, organizer)

    response = client.post(
        f"/api/events/{event.id}/feedback",
        json={"rating": 5, "comments": "Loved it"},
        headers=auth_headers(student),
    )

    assert response.status_code == 201
    assert response.json() == {"message": "Feedback submitted."}


def test_feedback_is_append_only(client: TestClient, db, organizer, student) -> None:
    event = make_event(db, organizer)
    for rating in (2, 4):
        client.post(f"/api/events/{event.id}/feedback", json={"rating": rating}, headers=auth_headers(student))

    response = client.get(f"/api/events/{event.id}/feedback")

    assert response.status_code == 200
    content = response.json()
    assert [f["rating"] for f in content] == [4, 2]
    assert content[0]["comments"] == ""
    assert content[0]["user_id"] == student.id


def test_feedback_rating_bounds(client: TestClient, db, organizer, student) -> None:
    event = make_event(db, organizer)
    for rating in (0, 6):
        response = client.post(
            f"/api/events/{event.id}/feedback", json={"rating": rating}, headers=auth_headers(student)
        )
        assert response.status_code == 400


def test_feedback_requires_rating(client: TestClient, db, organizer, student) -> None:
    event = make_event(db, organizer)
    response = client.post(f"/api/events/{event.id}/feedback", json={}, headers=auth_headers(student))
    assert response.status_code == 400


def test_feedback_on_unknown_event(client: TestClient, student) -> None:
    response = client.post("/api/events/999/feedback", json={"rating": 3}, headers=auth_headers(student))
    assert response.status_code == 404


def test_notifications_are_private(client: TestClient, db, student) -> None:
    other = make_user(db, Role.student)
    add_notifications(db, [student.id], "first")
    add_notifications(db, [student.id], "second")
    add_notifications(db, [other.id], "not yours")
    db.commit()

    response = client.get("/api/notifications", headers=auth_headers(student))

    assert response.status_code == 200
    assert [n["message"] for n in response.json()] == ["second", "first"]
    assert all(n["is_read"] is False for n in response.json())


def test_create_and_read_notification(client: TestClient, student) -> None:
    headers = auth_headers(student)
    created = client.post("/api/notifications", json={"message": "note to self"}, headers=headers)
    assert created.status_code == 201

    notification = client.get("/api/notifications", headers=headers).json()[0]
    assert notification["notification_type"] == "general"

    response = client.patch(f"/api/notifications/{notification['id']}/read", headers=headers)
    assert response.status_code == 200
    assert client.get("/api/notifications", headers=headers).json()[0]["is_read"] is True


def test_cannot_mark_someone_elses_notification(client: TestClient, db, student) -> None:
    other = make_user(db, Role.student)
    [row] = add_notifications(db, [other.id], "private")
    db.commit()

    response = client.patch(f"/api/notifications/{row.id}/read", headers=auth_headers(student))

    assert response.status_code == 404


def test_notification_message_required(client: TestClient, student) -> None:
    response = client.post("/api/notifications", json={}, headers=auth_headers(student))
    assert response.status_code == 400


def test_notifications_require_auth(client: TestClient) -> None:
    assert client.get("/api/notifications").status_code == 401
