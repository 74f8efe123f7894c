from datetime import date
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from app.models.event_db.event_db import Event
from app.models.event_db.resource_db import Resource
from app.services.statuses import EventStatus


def get_event(db: Session, event_id: int) -> Optional[Event]:
    return db.query(Event).filter(Event.id == event_id).first()


def list_approved_events(db: Session) -> List[Event]:
    return (
        db.query(Event)
        .filter(Event.status == EventStatus.approved.value)
        .order_by(Event.event_date, Event.event_time)
        .all()
    )


def search_events(
    db: Session,
    keyword: Optional[str] = None,
    status: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    venue_id: Optional[int] = None,
    category_id: Optional[int] = None,
    organizer_id: Optional[int] = None,
) -> List[Event]:
    query = db.query(Event)
    if keyword:
        pattern = f"%{keyword.lower()}%"
        query = query.filter(or_(
            func.lower(Event.name).like(pattern),
            func.lower(Event.description).like(pattern),
        ))
    if status:
        query = query.filter(func.lower(Event.status) == status.lower())
    if start:
        query = query.filter(Event.event_date >= start)
    if end:
        query = query.filter(Event.event_date <= end)
    if venue_id is not None:
        query = query.filter(Event.venue_id == venue_id)
    if category_id is not None:
        query = query.filter(Event.category_id == category_id)
    if organizer_id is not None:
        query = query.filter(Event.organizer_id == organizer_id)
    return query.order_by(Event.event_date, Event.event_time).all()


def set_event_status(db: Session, event: Event, status: EventStatus) -> Event:
    event.status = status.value
    db.commit()
    db.refresh(event)
    return event


def add_resource(db: Session, event_id: int, name: str, url: str) -> Resource:
    resource = Resource(event_id=event_id, resource_name=name, resource_url=url)
    db.add(resource)
    db.commit()
    db.refresh(resource)
    return resource


def list_resources(db: Session, event_id: int) -> List[Resource]:
    return db.query(Resource).filter(Resource.event_id == event_id).order_by(Resource.id).all()
