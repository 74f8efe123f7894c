from typing import Optional

from pydantic import BaseModel


class ReminderRequest(BaseModel):
    # "YYYY-MM-DD HH:mm", wall-clock time in the configured timezone
    local: Optional[str] = None


class ReminderScheduled(BaseModel):
    message: str
    reminder_time: str
