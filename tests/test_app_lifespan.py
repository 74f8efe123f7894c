import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.core.database import build_engine
from app.services.reminders import REMINDER_JOB_ID
from main import create_app


def test_startup_registers_reminder_job(settings, session_factory, mailer) -> None:
    settings.REMINDERS_ENABLED = True
    app = create_app(settings=settings, session_factory=session_factory, mailer=mailer)

    with TestClient(app) as client:
        assert client.get("/api/ping").status_code == 200
        job = app.state.scheduler.get_job(REMINDER_JOB_ID)
        assert job is not None
        assert job.trigger.interval.total_seconds() == settings.REMINDER_INTERVAL_SECONDS


def test_startup_without_reminders(app) -> None:
    with TestClient(app) as client:
        assert client.get("/api/ping").status_code == 200
    assert app.state.scheduler is None


def test_unreachable_database_aborts_startup(settings, tmp_path, mailer) -> None:
    broken = sessionmaker(bind=build_engine(f"sqlite:///{tmp_path}/missing/dir/cems.db"))
    app = create_app(settings=settings, session_factory=broken, mailer=mailer)

    with pytest.raises(Exception):
        with TestClient(app):
            pass


def test_unknown_route_uses_error_body(client: TestClient) -> None:
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
