from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.reminder_db.reminder_db import Reminder


def get_reminder_for_event(db: Session, event_id: int) -> Optional[Reminder]:
    return db.query(Reminder).filter(Reminder.event_id == event_id).first()


def upsert_reminder(db: Session, event_id: int, when: datetime) -> Reminder:
    existing = get_reminder_for_event(db, event_id)

    if existing:
        existing.reminder_time = when
        existing.is_sent = False
        reminder = existing
    else:
        reminder = Reminder(event_id=event_id, reminder_time=when, is_sent=False)
        db.add(reminder)

    db.commit()
    db.refresh(reminder)
    return reminder


def due_reminders(db: Session, now: datetime) -> List[Reminder]:
    return (
        db.query(Reminder)
        .filter(Reminder.is_sent.is_(False), Reminder.reminder_time <= now)
        .order_by(Reminder.reminder_time, Reminder.id)
        .all()
    )
