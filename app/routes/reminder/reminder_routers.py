from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from starlette import status

from app.core.database import get_db
from app.core.security import Identity, get_current_identity
from app.schemas.reminders.reminder_base import ReminderRequest, ReminderScheduled
from app.services.reminders import schedule_reminder

reminder_router = APIRouter(prefix="/api/events", tags=["Reminders"])


@reminder_router.post(
    "/{event_id}/reminder", response_model=ReminderScheduled, status_code=status.HTTP_201_CREATED
)
def set_reminder(
    event_id: int,
    payload: ReminderRequest,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    reminder = schedule_reminder(
        db, identity, event_id, payload.local, tz_name=request.app.state.settings.TIMEZONE
    )
    return {
        "message": "Reminder scheduled.",
        "reminder_time": reminder.reminder_time.strftime("%Y-%m-%d %H:%M:%S"),
    }
