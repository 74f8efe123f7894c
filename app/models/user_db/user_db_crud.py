from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.user_db.user_db import User
from app.models.course_db.course_db import CourseEnrollment
from app.schemas.users.user_base import UserCreate
from app.core.security import hash_password
from app.services.roles import Role


def normalize_email(email: str) -> str:
    return email.strip().lower()


def create_user(db: Session, user: UserCreate):
    db_user = User(
        full_name=user.full_name.strip(),
        email=normalize_email(user.email),
        hashed_password=hash_password(user.password),
        role=(user.role or Role.student).value,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_students(db: Session, course_id: Optional[int] = None) -> List[User]:
    """Students interested in an event: every student, or only those enrolled in its course."""
    query = db.query(User).filter(User.role == Role.student.value)
    if course_id is not None:
        query = query.join(CourseEnrollment, CourseEnrollment.user_id == User.id).filter(
            CourseEnrollment.course_id == course_id
        )
    return query.order_by(User.id).all()


def is_enrolled(db: Session, user_id: int, course_id: int) -> bool:
    return db.query(CourseEnrollment).filter(
        CourseEnrollment.course_id == course_id,
        CourseEnrollment.user_id == user_id,
    ).first() is not None
