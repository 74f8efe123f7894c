from datetime import datetime

from pydantic import BaseModel, Field


class NotificationCreate(BaseModel):
    message: str = Field(min_length=1)


class NotificationOut(BaseModel):
    id: int
    message: str
    is_read: bool
    notification_type: str
    created_at: datetime

    class Config:
        from_attributes = True
