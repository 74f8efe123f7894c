from typing import Optional

from pydantic import BaseModel, Field


class NamedCreate(BaseModel):
    name: str = Field(min_length=1)


class VenueCreate(NamedCreate):
    location: Optional[str] = None


class VenueOut(VenueCreate):
    id: int

    class Config:
        from_attributes = True


class CategoryOut(NamedCreate):
    id: int

    class Config:
        from_attributes = True


class CourseOut(NamedCreate):
    id: int

    class Config:
        from_attributes = True


class EnrollmentCreate(BaseModel):
    user_id: int


class EnrollmentOut(BaseModel):
    id: int
    course_id: int
    user_id: int

    class Config:
        from_attributes = True
