from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette import status

from app.core.database import get_db
from app.core.security import Identity, get_current_identity, require_student
from app.models.registration_db.registration_crud import count_active_registrations
from app.schemas.common.message import MessageOut
from app.schemas.registrations.registration_base import AttendanceRow, RegistrationCount
from app.services.events import get_event_or_404
from app.services.registrations import (
    attendance_report,
    cancel_registration,
    check_in,
    check_out,
    register_for_event,
)

registration_router = APIRouter(prefix="/api/events", tags=["Registrations"])


@registration_router.post(
    "/{event_id}/registrations", response_model=MessageOut, status_code=status.HTTP_201_CREATED
)
def rsvp(event_id: int, db: Session = Depends(get_db), identity: Identity = Depends(require_student)):
    register_for_event(db, identity, event_id)
    return {"message": "Registration successful."}


@registration_router.delete("/{event_id}/registrations", response_model=MessageOut)
def cancel_rsvp(event_id: int, db: Session = Depends(get_db), identity: Identity = Depends(require_student)):
    cancel_registration(db, identity, event_id)
    return {"message": "Registration canceled."}


@registration_router.get("/{event_id}/registrations/count", response_model=RegistrationCount)
def rsvp_count(event_id: int, db: Session = Depends(get_db)):
    get_event_or_404(db, event_id)
    return {"event_id": event_id, "count": count_active_registrations(db, event_id)}


@registration_router.post("/{event_id}/checkin", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def checkin(event_id: int, db: Session = Depends(get_db), identity: Identity = Depends(require_student)):
    check_in(db, identity, event_id)
    return {"message": "Checked-in successfully."}


@registration_router.post("/{event_id}/checkout", response_model=MessageOut)
def checkout(event_id: int, db: Session = Depends(get_db), identity: Identity = Depends(require_student)):
    check_out(db, identity, event_id)
    return {"message": "Checked-out successfully."}


@registration_router.get("/{event_id}/attendance", response_model=List[AttendanceRow])
def attendance(event_id: int, db: Session = Depends(get_db), identity: Identity = Depends(get_current_identity)):
    return attendance_report(db, identity, event_id)
