from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from app.services.roles import Role


class UserBase(BaseModel):
    full_name: str = Field(min_length=1)
    email: EmailStr

    @field_validator("full_name", mode="before")
    @classmethod
    def strip_full_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class UserCreate(UserBase):
    password: str
    role: Optional[Role] = None


class UserOut(BaseModel):
    id: int
    full_name: str
    email: str
    role: Role

    class Config:
        from_attributes = True
