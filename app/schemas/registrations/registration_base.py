from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class RegistrationCount(BaseModel):
    event_id: int
    count: int


class AttendanceRow(BaseModel):
    full_name: str
    email: str
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    attended: bool
