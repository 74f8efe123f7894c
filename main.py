import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings, settings as default_settings
from app.core.database import Base, SessionLocal
from app.core.exceptions import register_exception_handlers
from app.models import all_models  # noqa: F401
from app.routes.auth.auth_routers import auth_router
from app.routes.catalog.catalog_routers import catalog_router
from app.routes.event.event_routers import event_router
from app.routes.feedback.feedback_routers import feedback_router
from app.routes.notification.notification_routers import notification_router
from app.routes.registration.registration_routers import registration_router
from app.routes.reminder.reminder_routers import reminder_router
from app.routes.user.user_routers import user_router
from app.services.email import Mailer
from app.services.notifications import NotificationDispatcher
from app.services.reminders import ReminderWorker, start_reminder_scheduler

logger = logging.getLogger(__name__)


def check_database(session_factory: sessionmaker, create_tables: bool) -> None:
    db = session_factory()
    try:
        db.execute(text("SELECT 1"))
        if create_tables:
            Base.metadata.create_all(bind=db.get_bind())
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings: Settings = app.state.settings
    logger.info("CEMS backend starting up...")

    try:
        check_database(app.state.session_factory, app_settings.CREATE_TABLES)
    except SQLAlchemyError:
        logger.exception("Failed to connect to the database")
        raise
    logger.info("Database connection OK")
    os.makedirs(app_settings.UPLOAD_DIR, exist_ok=True)

    app.state.scheduler = None
    if app_settings.REMINDERS_ENABLED:
        app.state.scheduler = start_reminder_scheduler(
            app.state.reminder_worker, app_settings.REMINDER_INTERVAL_SECONDS
        )

    yield

    logger.info("CEMS backend shutting down...")
    if app.state.scheduler is not None:
        app.state.scheduler.shutdown(wait=False)


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
    mailer: Optional[Mailer] = None,
) -> FastAPI:
    settings = settings or default_settings
    session_factory = session_factory or SessionLocal

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(title="Campus Event Management API", lifespan=lifespan)

    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.dispatcher = NotificationDispatcher(mailer or Mailer.from_settings(settings))
    app.state.reminder_worker = ReminderWorker(session_factory, app.state.dispatcher)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(event_router)
    app.include_router(registration_router)
    app.include_router(feedback_router)
    app.include_router(notification_router)
    app.include_router(reminder_router)
    app.include_router(catalog_router)

    # the directory is created on startup or by the first upload
    app.mount("/files", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="files")

    @app.get("/api/ping")
    def ping():
        return {"message": "CEMS backend up."}

    return app


app = create_app()
