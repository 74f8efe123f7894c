import logging
import os
import re
import time
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.core.security import Identity, can_manage_event
from app.models.course_db.course_db import Course
from app.models.event_db.category_db import Category
from app.models.event_db.event_crud import add_resource, get_event, set_event_status
from app.models.event_db.event_db import Event
from app.models.event_db.resource_db import Resource
from app.models.event_db.venue_db import Venue
from app.schemas.events.event_base import EventCreate, EventUpdate
from app.services.statuses import EventStatus

logger = logging.getLogger(__name__)

ALLOWED_RESOURCE_EXTENSIONS = {".pdf", ".ppt", ".pptx", ".doc", ".docx"}
_CHUNK_SIZE = 1024 * 1024


def get_event_or_404(db: Session, event_id: int) -> Event:
    event = get_event(db, event_id)
    if not event:
        raise NotFoundError("Event not found.")
    return event


def _ensure_reference(db: Session, model, ref_id: Optional[int], label: str) -> None:
    if ref_id is None:
        return
    if db.query(model).filter(model.id == ref_id).first() is None:
        raise NotFoundError(f"{label} not found.")


def create_event(db: Session, identity: Identity, payload: EventCreate) -> Event:
    _ensure_reference(db, Venue, payload.venue_id, "Venue")
    _ensure_reference(db, Category, payload.category_id, "Category")
    _ensure_reference(db, Course, payload.course_id, "Course")

    event = Event(
        name=payload.name.strip(),
        description=payload.description.strip(),
        event_date=payload.event_date,
        event_time=payload.event_time,
        venue_id=payload.venue_id,
        category_id=payload.category_id,
        course_id=payload.course_id,
        organizer_id=identity.id,
        status=EventStatus.pending.value,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Event %s created by user %s", event.id, identity.id)
    return event


def decide_event(db: Session, event_id: int, status: EventStatus) -> Event:
    """Approve or reject. Either decision may overwrite the other; nothing returns an event to pending."""
    if status == EventStatus.pending:
        raise ValueError("Events cannot be moved back to pending")
    event = get_event_or_404(db, event_id)
    event = set_event_status(db, event, status)
    logger.info("Event %s %s", event.id, status.value)
    return event


def update_event(db: Session, identity: Identity, event_id: int, updates: EventUpdate) -> Event:
    event = get_event_or_404(db, event_id)
    if not can_manage_event(identity, event):
        raise ForbiddenError("Not authorized.")

    changes = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}
    _ensure_reference(db, Venue, changes.get("venue_id"), "Venue")
    _ensure_reference(db, Category, changes.get("category_id"), "Category")

    for field, value in changes.items():
        setattr(event, field, value.strip() if isinstance(value, str) else value)

    db.commit()
    db.refresh(event)
    return event


def stored_filename(original: str) -> str:
    safe = re.sub(r"\s+", "_", os.path.basename(original))
    return f"{int(time.time() * 1000)}-{safe}"


def save_resource(
    db: Session,
    event_id: int,
    upload: Optional[UploadFile],
    upload_dir: str,
    max_bytes: int,
) -> Resource:
    get_event_or_404(db, event_id)
    if upload is None or not upload.filename:
        raise ValidationError("File required.")

    extension = os.path.splitext(upload.filename)[1].lower()
    if extension not in ALLOWED_RESOURCE_EXTENSIONS:
        raise ValidationError("Only document files allowed.")

    os.makedirs(upload_dir, exist_ok=True)
    filename = stored_filename(upload.filename)
    path = os.path.join(upload_dir, filename)

    written = 0
    try:
        with open(path, "wb") as out:
            while True:
                chunk = upload.file.read(_CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise ValidationError("File too large.")
                out.write(chunk)
    except Exception:
        if os.path.exists(path):
            os.remove(path)
        raise

    return add_resource(db, event_id, upload.filename, f"/files/{filename}")
