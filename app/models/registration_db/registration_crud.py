from typing import Optional
from sqlalchemy.orm import Session
from app.models.registration_db.registration_db import Registration
from app.services.statuses import RegistrationStatus


def get_active_registration(db: Session, event_id: int, user_id: int) -> Optional[Registration]:
    return db.query(Registration).filter(
        Registration.event_id == event_id,
        Registration.user_id == user_id,
        Registration.status == RegistrationStatus.registered.value,
    ).first()


def count_active_registrations(db: Session, event_id: int) -> int:
    return db.query(Registration).filter(
        Registration.event_id == event_id,
        Registration.status == RegistrationStatus.registered.value,
    ).count()
