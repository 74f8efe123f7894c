"""
Event reminders.

Organizers schedule one reminder per event; scheduling again replaces the
pending time and re-arms a reminder that already fired. A periodic job picks
up due reminders in a worker thread. Each reminder's outbox rows and its
sent flag commit together, so a reminder that fails is rolled back and stays
due for the next tick. Mail goes out on the event loop after the commit.
"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.orm import Session, sessionmaker

from app.core.clock import utcnow
from app.core.exceptions import ForbiddenError, StateError, ValidationError
from app.core.security import Identity, can_manage_event
from app.models.reminder_db.reminder_crud import due_reminders, upsert_reminder
from app.models.reminder_db.reminder_db import Reminder
from app.services.events import get_event_or_404
from app.services.notifications import NotificationDispatcher
from app.services.statuses import EventStatus

logger = logging.getLogger(__name__)

LOCAL_TIME_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2}) (\d{2}:\d{2})$")
REMINDER_SUBJECT = "Event Reminder"
REMINDER_JOB_ID = "send_due_reminders"


def parse_local_time(local: Optional[str], tz_name: str = "UTC") -> datetime:
    """Parse ``YYYY-MM-DD HH:mm`` in ``tz_name`` into a naive UTC datetime."""
    if not local:
        raise ValidationError('Provide "local": "YYYY-MM-DD HH:mm".')
    match = LOCAL_TIME_PATTERN.match(local.strip())
    if not match:
        raise ValidationError("local time format invalid.")
    try:
        wall_clock = datetime.strptime(f"{match.group(1)} {match.group(2)}", "%Y-%m-%d %H:%M")
        zone = ZoneInfo(tz_name)
    except (ValueError, ZoneInfoNotFoundError):
        raise ValidationError("local time invalid.")
    return wall_clock.replace(tzinfo=zone).astimezone(timezone.utc).replace(tzinfo=None)


def schedule_reminder(
    db: Session,
    identity: Identity,
    event_id: int,
    local: Optional[str],
    tz_name: str = "UTC",
    now: Optional[datetime] = None,
) -> Reminder:
    event = get_event_or_404(db, event_id)
    if event.status != EventStatus.approved.value:
        raise StateError("Event must be approved first.")
    if not can_manage_event(identity, event):
        raise ForbiddenError("Not authorized.")

    when = parse_local_time(local, tz_name)
    if when < (now or utcnow()):
        raise ValidationError("local time is in the past.")

    reminder = upsert_reminder(db, event_id, when)
    logger.info("Reminder for event %s set to %s UTC", event_id, when)
    return reminder


def reminder_message(event_name: str) -> str:
    return f'Reminder: "{event_name}" is coming up soon.'


class ReminderWorker:
    """Sends reminders whose time has come."""

    def __init__(
        self,
        session_factory: sessionmaker,
        dispatcher: NotificationDispatcher,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session_factory = session_factory
        self.dispatcher = dispatcher
        self.clock = clock

    def claim_due(self) -> List[Tuple[List[str], str]]:
        """Record and mark sent every due reminder; return the mail still to send."""
        db = self.session_factory()
        deliveries = []
        try:
            for reminder in due_reminders(db, self.clock()):
                body = reminder_message(reminder.event.name)
                emails = self.dispatcher.stage(db, reminder.event, body)
                reminder.is_sent = True
                db.commit()
                deliveries.append((emails, body))
        except Exception:
            db.rollback()
            logger.exception("Reminder worker error")
        finally:
            db.close()
        return deliveries

    async def run_once(self) -> int:
        deliveries = await asyncio.to_thread(self.claim_due)
        for emails, body in deliveries:
            await self.dispatcher.send_mail(emails, REMINDER_SUBJECT, body)
        if deliveries:
            logger.info("Sent %d reminder(s).", len(deliveries))
        return len(deliveries)


def start_reminder_scheduler(worker: ReminderWorker, interval_seconds: int = 60) -> AsyncIOScheduler:
    """Run ``worker`` every ``interval_seconds`` on the current event loop."""
    scheduler = AsyncIOScheduler(
        timezone="UTC",
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": interval_seconds,
        },
    )
    scheduler.add_job(
        worker.run_once,
        trigger=IntervalTrigger(seconds=interval_seconds),
        id=REMINDER_JOB_ID,
        name="Send Due Event Reminders",
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Scheduled job: %s (every %d seconds)", REMINDER_JOB_ID, interval_seconds)
    return scheduler
