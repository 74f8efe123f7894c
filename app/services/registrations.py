"""
RSVP and attendance rules.

The active-registration guard is a query followed by an insert. The partial
unique index on (event_id, user_id) for registered rows catches the
concurrent case, and its IntegrityError is reported as a conflict.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError, StateError
from app.core.security import Identity, can_manage_event
from app.models.attendance_db.attendance_crud import attendance_with_users, get_attendance
from app.models.attendance_db.attendance_db import Attendance
from app.models.registration_db.registration_crud import get_active_registration
from app.models.registration_db.registration_db import Registration
from app.models.user_db.user_db_crud import is_enrolled
from app.services.events import get_event_or_404
from app.services.statuses import EventStatus, RegistrationStatus

logger = logging.getLogger(__name__)


def register_for_event(db: Session, identity: Identity, event_id: int) -> Registration:
    event = get_event_or_404(db, event_id)
    if event.status != EventStatus.approved.value:
        raise StateError("Event not approved yet.")
    if event.course_id is not None and not is_enrolled(db, identity.id, event.course_id):
        raise ForbiddenError("Not enrolled in course")
    if get_active_registration(db, event_id, identity.id):
        raise ConflictError("Already registered.")

    registration = Registration(
        event_id=event_id,
        user_id=identity.id,
        status=RegistrationStatus.registered.value,
    )
    db.add(registration)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Already registered.")
    db.refresh(registration)
    logger.info("User %s registered for event %s", identity.id, event_id)
    return registration


def cancel_registration(db: Session, identity: Identity, event_id: int) -> Registration:
    registration = get_active_registration(db, event_id, identity.id)
    if not registration:
        raise StateError("Not registered.")
    registration.status = RegistrationStatus.cancelled.value
    db.commit()
    db.refresh(registration)
    return registration


def check_in(db: Session, identity: Identity, event_id: int) -> Attendance:
    event = get_event_or_404(db, event_id)
    if event.status != EventStatus.approved.value:
        raise StateError("Event not approved.")
    if not get_active_registration(db, event_id, identity.id):
        raise ForbiddenError("You did not RSVP for this event.")

    now = utcnow()
    attendance = get_attendance(db, event_id, identity.id)
    if attendance is None:
        attendance = Attendance(event_id=event_id, user_id=identity.id, check_in_time=now, attended=True)
        db.add(attendance)
        try:
            db.commit()
        except IntegrityError:
            # a concurrent check-in won the insert; fall back to updating its row
            db.rollback()
            attendance = get_attendance(db, event_id, identity.id)
            attendance.check_in_time = now
            attendance.attended = True
            db.commit()
    else:
        attendance.check_in_time = now
        attendance.attended = True
        db.commit()

    db.refresh(attendance)
    return attendance


def check_out(db: Session, identity: Identity, event_id: int) -> Attendance:
    attendance = get_attendance(db, event_id, identity.id)
    if attendance is None:
        raise NotFoundError("No check-in record found.")
    attendance.check_out_time = utcnow()
    db.commit()
    db.refresh(attendance)
    return attendance


def attendance_report(db: Session, identity: Identity, event_id: int) -> List[dict]:
    event = get_event_or_404(db, event_id)
    if not can_manage_event(identity, event):
        raise ForbiddenError("Not authorized.")
    return attendance_with_users(db, event_id)
