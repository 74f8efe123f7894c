from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from app.core.config import settings
from app.core.exceptions import AuthError, ForbiddenError
from app.services.roles import Role

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=max(settings.BCRYPT_ROUNDS, 10),
)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


class Identity(BaseModel):
    id: int
    email: str
    role: Role


# Password hashing
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# Token generation
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_token_for_user(user) -> str:
    return create_access_token({
        "sub": str(user.id),
        "email": user.email,
        "role": Role(user.role).value,
    })


# Token verification
def verify_token(token: str) -> Identity:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return Identity(id=int(payload["sub"]), email=payload["email"], role=Role(payload["role"]))
    except (JWTError, KeyError, TypeError, ValueError):
        raise AuthError("Invalid or expired token.")


def get_current_identity(token: Optional[str] = Depends(oauth2_scheme)) -> Identity:
    if not token:
        raise AuthError("Missing or invalid token.")
    return verify_token(token)


_ROLE_MESSAGES = {
    frozenset({Role.admin}): "Admin privilege required.",
    frozenset({Role.student}): "Student privilege required.",
    frozenset({Role.organizer, Role.admin}): "Organizer or Admin privilege required.",
}


def require_roles(*roles: Role):
    allowed = frozenset(roles)
    message = _ROLE_MESSAGES.get(allowed, "Insufficient privileges.")

    def checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in allowed:
            raise ForbiddenError(message)
        return identity

    return checker


require_admin = require_roles(Role.admin)
require_student = require_roles(Role.student)
require_organizer_or_admin = require_roles(Role.organizer, Role.admin)


def can_manage_event(identity: Identity, event) -> bool:
    """Admins manage every event, organizers only the ones they own."""
    if identity.role == Role.admin:
        return True
    if identity.role == Role.organizer:
        return event.organizer_id == identity.id
    if identity.role == Role.student:
        return False
    raise ValueError(f"Unhandled role: {identity.role}")
