# tests/conftest.py

from datetime import date, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import Base
from app.core.security import create_token_for_user, hash_password
from app.models.all_models import Course, CourseEnrollment, Event, User
from app.services.notifications import NotificationDispatcher
from app.services.roles import Role
from app.services.statuses import EventStatus
from main import create_app

TEST_PASSWORD = "pw123456"


class FakeMailer:
    """Records outgoing mail instead of talking to an SMTP server."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    async def send_bulk(self, bcc, subject, body):
        if self.fail:
            raise ConnectionError("SMTP server unavailable")
        self.sent.append({"bcc": list(bcc), "subject": subject, "body": body})


# --- Test Database Setup ---
@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def mailer():
    return FakeMailer()


@pytest.fixture(scope="function")
def settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite://",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        MAX_UPLOAD_BYTES=1024,
        REMINDERS_ENABLED=False,
        CREATE_TABLES=False,
        SMTP_HOST=None,
    )


@pytest.fixture(scope="function")
def app(settings, session_factory, mailer):
    return create_app(settings=settings, session_factory=session_factory, mailer=mailer)


@pytest.fixture(scope="function")
def client(app):
    return TestClient(app)


@pytest.fixture(scope="function")
def dispatcher(mailer):
    return NotificationDispatcher(mailer)


# --- Data helpers ---
def make_user(db, role: Role = Role.student, email: str = None, full_name: str = None) -> User:
    count = db.query(User).count() + 1
    user = User(
        full_name=full_name or f"{role.value.title()} {count}",
        email=email or f"{role.value}{count}@campus.edu",
        hashed_password=hash_password(TEST_PASSWORD),
        role=role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_token_for_user(user)}"}


def make_event(
    db,
    organizer: User,
    status: EventStatus = EventStatus.approved,
    name: str = "Hackathon",
    description: str = "Build something in 24 hours",
    event_date: date = date(2030, 5, 1),
    event_time: time = time(10, 0),
    course_id: int = None,
) -> Event:
    event = Event(
        name=name,
        description=description,
        event_date=event_date,
        event_time=event_time,
        organizer_id=organizer.id,
        course_id=course_id,
        status=status.value,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def make_course(db, name: str = "CS101", students=()) -> Course:
    course = Course(name=name)
    db.add(course)
    db.commit()
    for student in students:
        db.add(CourseEnrollment(course_id=course.id, user_id=student.id))
    db.commit()
    db.refresh(course)
    return course


@pytest.fixture
def admin(db):
    return make_user(db, Role.admin)


@pytest.fixture
def organizer(db):
    return make_user(db, Role.organizer)


@pytest.fixture
def student(db):
    return make_user(db, Role.student)
