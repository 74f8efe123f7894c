from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from app.models.notification_db.notification_db import Notification
from app.services.statuses import NotificationType


def add_notifications(
    db: Session,
    user_ids: Iterable[int],
    message: str,
    notification_type: NotificationType = NotificationType.general,
) -> List[Notification]:
    """Stage one outbox row per user. The caller commits."""
    rows = [
        Notification(user_id=user_id, message=message, notification_type=notification_type.value)
        for user_id in user_ids
    ]
    db.add_all(rows)
    return rows


def list_for_user(db: Session, user_id: int) -> List[Notification]:
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .all()
    )


def get_for_user(db: Session, notification_id: int, user_id: int) -> Optional[Notification]:
    return db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == user_id,
    ).first()
