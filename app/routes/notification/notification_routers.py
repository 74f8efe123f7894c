from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette import status

from app.core.database import get_db
from app.core.exceptions import NotFoundError
from app.core.security import Identity, get_current_identity
from app.models.notification_db.notification_crud import add_notifications, get_for_user, list_for_user
from app.schemas.common.message import MessageOut
from app.schemas.notifications.notification_base import NotificationCreate, NotificationOut

notification_router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@notification_router.get("", response_model=List[NotificationOut])
def list_notifications(db: Session = Depends(get_db), identity: Identity = Depends(get_current_identity)):
    return list_for_user(db, identity.id)


@notification_router.post("", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    add_notifications(db, [identity.id], payload.message)
    db.commit()
    return {"message": "Notification created."}


@notification_router.patch("/{notification_id}/read", response_model=MessageOut)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    notification = get_for_user(db, notification_id, identity.id)
    if not notification:
        raise NotFoundError("Notification not found.")
    notification.is_read = True
    db.commit()
    return {"message": "Notification marked as read."}
