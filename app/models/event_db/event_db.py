from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Date, Time, Text
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.clock import utcnow
from app.services.statuses import EventStatus


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    event_date = Column(Date, nullable=False, index=True)
    event_time = Column(Time, nullable=False)

    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=True)
    venue = relationship("Venue", backref="events")

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    category = relationship("Category", backref="events")

    # course-scoped events are only open to enrolled students
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=True)
    course = relationship("Course", backref="events")

    organizer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    organizer = relationship("User", back_populates="organized_events")

    status = Column(String(20), nullable=False, default=EventStatus.pending.value, index=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relacionamentos
    registrations = relationship("Registration", back_populates="event", cascade="all, delete-orphan")
    attendance = relationship("Attendance", back_populates="event", cascade="all, delete-orphan")
    resources = relationship("Resource", back_populates="event", cascade="all, delete-orphan")
    reminder = relationship("Reminder", back_populates="event", uselist=False, cascade="all, delete-orphan")
