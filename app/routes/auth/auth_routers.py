from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import AuthError, NotFoundError
from app.core.security import (
    Identity,
    verify_password,
    create_token_for_user,
    get_current_identity,
)
from app.models.user_db.user_db_crud import get_user_by_email, get_user_by_id
from app.schemas.login.login_base import LoginRequest, TokenOut
from app.schemas.users.user_base import UserOut

auth_router = APIRouter(prefix="/api/auth", tags=["Auth"])


@auth_router.post("/login", response_model=TokenOut)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.hashed_password):
        raise AuthError("Invalid credentials.")

    return {"token": create_token_for_user(user)}


@auth_router.get("/me", response_model=UserOut)
def get_me(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    user = get_user_by_id(db, identity.id)
    if not user:
        raise NotFoundError("User not found.")
    return user
