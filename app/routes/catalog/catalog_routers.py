from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

from app.core.database import get_db
from app.core.exceptions import ConflictError, NotFoundError
from app.core.security import Identity, require_admin
from app.models.course_db.course_db import Course, CourseEnrollment
from app.models.event_db.category_db import Category
from app.models.event_db.venue_db import Venue
from app.models.user_db.user_db_crud import get_user_by_id, is_enrolled
from app.schemas.catalog.catalog_base import (
    CategoryOut,
    CourseOut,
    EnrollmentCreate,
    EnrollmentOut,
    NamedCreate,
    VenueCreate,
    VenueOut,
)

catalog_router = APIRouter(prefix="/api", tags=["Catalog"])


def _save(db: Session, obj, conflict_message: str):
    db.add(obj)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(conflict_message)
    db.refresh(obj)
    return obj


@catalog_router.get("/venues", response_model=List[VenueOut])
def list_venues(db: Session = Depends(get_db)):
    return db.query(Venue).order_by(Venue.name).all()


@catalog_router.post("/venues", response_model=VenueOut, status_code=status.HTTP_201_CREATED)
def create_venue(payload: VenueCreate, db: Session = Depends(get_db), _: Identity = Depends(require_admin)):
    return _save(db, Venue(name=payload.name, location=payload.location), "Venue already exists.")


@catalog_router.get("/categories", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return db.query(Category).order_by(Category.name).all()


@catalog_router.post("/categories", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(payload: NamedCreate, db: Session = Depends(get_db), _: Identity = Depends(require_admin)):
    return _save(db, Category(name=payload.name), "Category already exists.")


@catalog_router.get("/courses", response_model=List[CourseOut])
def list_courses(db: Session = Depends(get_db)):
    return db.query(Course).order_by(Course.name).all()


@catalog_router.post("/courses", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(payload: NamedCreate, db: Session = Depends(get_db), _: Identity = Depends(require_admin)):
    return _save(db, Course(name=payload.name), "Course already exists.")


@catalog_router.post(
    "/courses/{course_id}/enrollments", response_model=EnrollmentOut, status_code=status.HTTP_201_CREATED
)
def enroll(
    course_id: int,
    payload: EnrollmentCreate,
    db: Session = Depends(get_db),
    _: Identity = Depends(require_admin),
):
    if db.query(Course).filter(Course.id == course_id).first() is None:
        raise NotFoundError("Course not found.")
    if get_user_by_id(db, payload.user_id) is None:
        raise NotFoundError("User not found.")
    if is_enrolled(db, payload.user_id, course_id):
        raise ConflictError("Already enrolled.")
    return _save(db, CourseEnrollment(course_id=course_id, user_id=payload.user_id), "Already enrolled.")
