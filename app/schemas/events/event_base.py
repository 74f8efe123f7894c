from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, Field

from app.services.statuses import EventStatus


class EventBase(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    event_date: date
    event_time: time
    venue_id: Optional[int] = None
    category_id: Optional[int] = None


class EventCreate(EventBase):
    course_id: Optional[int] = None


class EventUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    event_date: Optional[date] = None
    event_time: Optional[time] = None
    venue_id: Optional[int] = None
    category_id: Optional[int] = None


class EventOut(EventBase):
    id: int
    course_id: Optional[int] = None
    organizer_id: int
    status: EventStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EventCreated(BaseModel):
    message: str
    event: EventOut


class ResourceOut(BaseModel):
    id: int
    resource_name: str
    resource_url: str
    uploaded_at: datetime

    class Config:
        from_attributes = True
