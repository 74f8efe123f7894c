from datetime import date
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Query, Request, UploadFile
from sqlalchemy.orm import Session
from starlette import status

from app.core.database import get_db
from app.core.security import Identity, get_current_identity, require_admin, require_organizer_or_admin
from app.models.event_db.event_crud import list_approved_events, list_resources, search_events
from app.schemas.common.message import MessageOut
from app.schemas.events.event_base import EventCreate, EventCreated, EventOut, EventUpdate, ResourceOut
from app.services.events import create_event, decide_event, get_event_or_404, save_resource, update_event
from app.services.notifications import NotificationDispatcher, announce, get_dispatcher
from app.services.statuses import EventStatus

event_router = APIRouter(prefix="/api/events", tags=["Events"])


@event_router.get("", response_model=List[EventOut])
def list_events(db: Session = Depends(get_db)):
    return list_approved_events(db)


@event_router.get("/search", response_model=List[EventOut])
def search(
    keyword: Optional[str] = None,
    status: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    venue: Optional[int] = Query(None),
    category: Optional[int] = Query(None),
    organizer: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    return search_events(
        db,
        keyword=keyword,
        status=status,
        start=start,
        end=end,
        venue_id=venue,
        category_id=category,
        organizer_id=organizer,
    )


@event_router.post("", response_model=EventCreated, status_code=status.HTTP_201_CREATED)
def create(
    payload: EventCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_organizer_or_admin),
):
    event = create_event(db, identity, payload)
    return {"message": "Event created.", "event": event}


@event_router.patch("/{event_id}/approve", response_model=MessageOut)
def approve(
    event_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    _: Identity = Depends(require_admin),
):
    event = decide_event(db, event_id, EventStatus.approved)
    announce(background_tasks, db, dispatcher, event, "New Event Approved", f'Event "{event.name}" approved.')
    return {"message": "Event approved."}


@event_router.patch("/{event_id}/reject", response_model=MessageOut)
def reject(
    event_id: int,
    db: Session = Depends(get_db),
    _: Identity = Depends(require_admin),
):
    decide_event(db, event_id, EventStatus.rejected)
    return {"message": "Event rejected."}


@event_router.patch("/{event_id}", response_model=MessageOut)
def edit(
    event_id: int,
    updates: EventUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    identity: Identity = Depends(require_organizer_or_admin),
):
    event = update_event(db, identity, event_id, updates)
    announce(background_tasks, db, dispatcher, event, "Event Updated", f'Event "{event.name}" has updates.')
    return {"message": "Event updated."}


@event_router.post("/{event_id}/resources", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def upload_resource(
    event_id: int,
    request: Request,
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    _: Identity = Depends(require_organizer_or_admin),
):
    settings = request.app.state.settings
    save_resource(db, event_id, file, settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)
    return {"message": "Resource uploaded."}


@event_router.get("/{event_id}/resources", response_model=List[ResourceOut])
def get_resources(
    event_id: int,
    db: Session = Depends(get_db),
    _: Identity = Depends(get_current_identity),
):
    get_event_or_404(db, event_id)
    return list_resources(db, event_id)
