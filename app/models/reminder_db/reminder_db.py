from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base


class Reminder(Base):
    __tablename__ = "event_reminders"

    id = Column(Integer, primary_key=True, index=True)
    # one reminder per event; rescheduling overwrites it
    event_id = Column(Integer, ForeignKey("events.id"), unique=True, nullable=False)
    reminder_time = Column(DateTime, nullable=False, index=True)
    is_sent = Column(Boolean, nullable=False, default=False)

    event = relationship("Event", back_populates="reminder")
