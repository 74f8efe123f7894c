from datetime import datetime

from fastapi.testclient import TestClient

from app.models.attendance_db.attendance_crud import get_attendance
from app.models.attendance_db.attendance_db import Attendance
from app.services import registrations as registration_service
from app.services.roles import Role
from app.services.statuses import EventStatus
from conftest import auth_headers, make_event, make_user


def _rsvp(client, event, user):
    response = client.post(f"/api/events/{event.id}/registrations", headers=auth_headers(user))
    assert response.status_code == 201


def test_check_in_requires_rsvp(client: TestClient, db, organizer, student) -> None:
    event = make_event(db, organizer)

    response = client.post(f"/api/events/{event.id}/checkin", headers=auth_headers(student))

    assert response.status_code == 403
    assert response.json() == {"error": "You did not RSVP for this event."}


def test_check_in_after_cancel_is_refused(client: TestClient, db, organizer, student) -> None:
    event = make_event(db, organizer)
    _rsvp(client, event, student)
    client.delete(f"/api/events/{event.id}/registrations", headers=auth_headers(student))

    response = client.post(f"/api/events/{event.id}/checkin", headers=auth_headers(student))
    assert response.status_code == 403


def test_check_in_on_unapproved_event(client: TestClient, db, organizer, student) -> None:
    event = make_event(db, organizer, EventStatus.rejected)
    response = client.post(f"/api/events/{event.id}/checkin", headers=auth_headers(student))
    assert response.status_code == 400
    assert response.json() == {"error": "Event not approved."}


def test_check_in_unknown_event(client: TestClient, student) -> None:
    response = client.post("/api/events/999/checkin", headers=auth_headers(student))
    assert response.status_code == 404


def test_repeated_check_in_updates_single_row(client: TestClient, db, organizer, student) -> None:
    event = make_event(db, organizer)
    _rsvp(client, event, student)

    first = client.post(f"/api/events/{event.id}/checkin", headers=auth_headers(student))
    assert first.status_code == 201

    row = db.query(Attendance).one()
    assert row.attended is True
    stale = datetime(2000, 1, 1)
    row.check_in_time = stale
    db.commit()

    second = client.post(f"/api/events/{event.id}/checkin", headers=auth_headers(student))
    assert second.status_code == 201

    db.expire_all()
    rows = db.query(Attendance).all()
    assert len(rows) == 1
    assert rows[0].check_in_time > stale
    assert rows[0].attended is True


def test_check_out_without_check_in(client: TestClient, db, organizer, student) -> None:
    event = make_event(db, organizer)
    response = client.post(f"/api/events/{event.id}/checkout", headers=auth_headers(student))
    assert response.status_code == 404
    assert response.json() == {"error": "No check-in record found."}


def test_check_out_sets_time(client: TestClient, db, organizer, student) -> None:
    event = make_event(db, organizer)
    _rsvp(client, event, student)
    client.post(f"/api/events/{event.id}/checkin", headers=auth_headers(student))

    response = client.post(f"/api/events/{event.id}/checkout", headers=auth_headers(student))

    assert response.status_code == 200
    db.expire_all()
    row = db.query(Attendance).one()
    assert row.check_out_time is not None
    assert row.check_out_time >= row.check_in_time


def test_attendance_report_for_owner(client: TestClient, db, organizer) -> None:
    event = make_event(db, organizer)
    early = make_user(db, Role.student, full_name="Early Bird")
    late = make_user(db, Role.student, full_name="Late Comer")
    for s in (late, early):
        _rsvp(client, event, s)
        client.post(f"/api/events/{event.id}/checkin", headers=auth_headers(s))

    db.query(Attendance).filter(Attendance.user_id == early.id).update(
        {"check_in_time": datetime(2030, 5, 1, 9, 0)}
    )
    db.query(Attendance).filter(Attendance.user_id == late.id).update(
        {"check_in_time": datetime(2030, 5, 1, 9, 30)}
    )
    db.commit()

    response = client.get(f"/api/events/{event.id}/attendance", headers=auth_headers(organizer))

    assert response.status_code == 200
    rows = response.json()
    assert [r["full_name"] for r in rows] == ["Early Bird", "Late Comer"]
    assert rows[0]["email"] == early.email
    assert rows[0]["attended"] is True
    assert rows[0]["check_out_time"] is None


def test_attendance_report_for_admin(client: TestClient, db, admin, organizer) -> None:
    event = make_event(db, organizer)
    response = client.get(f"/api/events/{event.id}/attendance", headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json() == []


def test_attendance_report_forbidden_for_others(client: TestClient, db, organizer, student) -> None:
    other = make_user(db, Role.organizer)
    event = make_event(db, organizer)

    for user in (other, student):
        response = client.get(f"/api/events/{event.id}/attendance", headers=auth_headers(user))
        assert response.status_code == 403


def test_attendance_report_unknown_event(client: TestClient, admin) -> None:
    response = client.get("/api/events/999/attendance", headers=auth_headers(admin))
    assert response.status_code == 404


def test_concurrent_check_in_updates_the_winning_row(client: TestClient, db, organizer, student, monkeypatch) -> None:
    event = make_event(db, organizer)
    _rsvp(client, event, student)
    db.add(Attendance(event_id=event.id, user_id=student.id, check_in_time=datetime(2000, 1, 1), attended=False))
    db.commit()

    # the first lookup misses the row a concurrent check-in just wrote
    lookups = []

    def racing_get_attendance(db, event_id, user_id):
        lookups.append(user_id)
        if len(lookups) == 1:
            return None
        return get_attendance(db, event_id, user_id)

    monkeypatch.setattr(registration_service, "get_attendance", racing_get_attendance)
    response = client.post(f"/api/events/{event.id}/checkin", headers=auth_headers(student))

    assert response.status_code == 201
    assert len(lookups) == 2
    db.expire_all()
    rows = db.query(Attendance).filter(Attendance.event_id == event.id).all()
    assert len(rows) == 1
    assert rows[0].attended is True
    assert rows[0].check_in_time > datetime(2000, 1, 1)
