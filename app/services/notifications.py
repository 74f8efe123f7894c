"""
Event notification dispatch.

An event update fans out to every student who could attend the event: all
students for an open event, only the course's enrolled students for a
course-scoped one. Each recipient gets an outbox row; when mail is
configured the same message also goes out as one Bcc email. The outbox is
the record of delivery, so mail failures are logged and never raised.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from fastapi import BackgroundTasks, Request
from sqlalchemy.orm import Session

from app.models.event_db.event_db import Event
from app.models.notification_db.notification_crud import add_notifications
from app.models.user_db.user_db import User
from app.models.user_db.user_db_crud import get_students
from app.services.email import Mailer
from app.services.statuses import NotificationType

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def __init__(self, mailer: Optional[Mailer] = None):
        self.mailer = mailer

    def recipients_for(self, db: Session, event: Event) -> List[User]:
        return get_students(db, course_id=event.course_id)

    def stage(self, db: Session, event: Event, body: str) -> List[str]:
        """Add the outbox rows for ``event`` to the session without committing."""
        recipients = self.recipients_for(db, event)
        if not recipients:
            return []

        add_notifications(db, [user.id for user in recipients], body, NotificationType.event_update)
        logger.info("Queued notification for event %s to %d student(s)", event.id, len(recipients))
        return [user.email for user in recipients]

    def record(self, db: Session, event: Event, body: str) -> List[str]:
        """Write the outbox rows for ``event`` and return the recipients' emails."""
        emails = self.stage(db, event, body)
        if emails:
            db.commit()
        return emails

    async def send_mail(self, emails: Sequence[str], subject: str, body: str) -> None:
        if not self.mailer or not emails:
            return
        try:
            await self.mailer.send_bulk(list(emails), subject, body)
        except Exception:
            logger.exception("Email error while sending '%s'", subject)

    async def dispatch_event_notification(self, db: Session, event: Event, subject: str, body: str) -> int:
        emails = await asyncio.to_thread(self.record, db, event, body)
        await self.send_mail(emails, subject, body)
        return len(emails)


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.dispatcher


def announce(
    background_tasks: BackgroundTasks,
    db: Session,
    dispatcher: NotificationDispatcher,
    event: Event,
    subject: str,
    body: str,
) -> int:
    """Write the outbox now and send the email after the response goes out."""
    emails = dispatcher.record(db, event, body)
    if emails:
        background_tasks.add_task(dispatcher.send_mail, emails, subject, body)
    return len(emails)
