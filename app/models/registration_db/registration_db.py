from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.clock import utcnow
from app.services.statuses import RegistrationStatus


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # cancelled rows are kept as history
    status = Column(String(20), nullable=False, default=RegistrationStatus.registered.value)
    created_at = Column(DateTime, default=utcnow)

    # Relacionamentos
    user = relationship("User")
    event = relationship("Event", back_populates="registrations")

    __table_args__ = (
        Index(
            "uq_active_registration",
            "event_id",
            "user_id",
            unique=True,
            sqlite_where=text("status = 'registered'"),
            postgresql_where=text("status = 'registered'"),
        ),
    )
