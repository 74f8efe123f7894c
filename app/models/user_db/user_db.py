from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.clock import utcnow
from app.services.roles import Role


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default=Role.student.value)
    created_at = Column(DateTime, default=utcnow)

    organized_events = relationship("Event", back_populates="organizer")
    enrollments = relationship("CourseEnrollment", back_populates="user", cascade="all, delete-orphan")
