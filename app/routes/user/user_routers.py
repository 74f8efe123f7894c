from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette import status

from app.core.database import get_db
from app.core.exceptions import ConflictError, ValidationError
from app.models.user_db.user_db_crud import create_user, get_user_by_email
from app.schemas.users.user_base import UserCreate, UserOut

MIN_PASSWORD_LENGTH = 6

user_router = APIRouter(prefix="/api/users", tags=["Users"])


@user_router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    if not user.password:
        raise ValidationError("full_name, email, and password are required.")
    if len(user.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 6 characters long.")
    if get_user_by_email(db, user.email):
        raise ConflictError("Email taken.")
    return create_user(db, user)
