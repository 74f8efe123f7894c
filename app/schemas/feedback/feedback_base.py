from datetime import datetime

from pydantic import BaseModel, Field


class FeedbackCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    comments: str = ""


class FeedbackOut(BaseModel):
    id: int
    user_id: int
    rating: int
    comments: str
    created_at: datetime

    class Config:
        from_attributes = True
