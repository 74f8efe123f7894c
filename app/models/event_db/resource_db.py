from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.clock import utcnow


class Resource(Base):
    __tablename__ = "event_resources"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    resource_name = Column(String, nullable=False)
    resource_url = Column(String, nullable=False)
    uploaded_at = Column(DateTime, default=utcnow)

    event = relationship("Event", back_populates="resources")
