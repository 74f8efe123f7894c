from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.attendance_db.attendance_db import Attendance
from app.models.user_db.user_db import User


def get_attendance(db: Session, event_id: int, user_id: int) -> Optional[Attendance]:
    return db.query(Attendance).filter(
        Attendance.event_id == event_id,
        Attendance.user_id == user_id,
    ).first()


def attendance_with_users(db: Session, event_id: int) -> List[dict]:
    rows = (
        db.query(Attendance, User)
        .join(User, User.id == Attendance.user_id)
        .filter(Attendance.event_id == event_id)
        .order_by(Attendance.check_in_time, Attendance.id)
        .all()
    )
    return [
        {
            "full_name": user.full_name,
            "email": user.email,
            "check_in_time": attendance.check_in_time,
            "check_out_time": attendance.check_out_time,
            "attended": attendance.attended,
        }
        for attendance, user in rows
    ]
