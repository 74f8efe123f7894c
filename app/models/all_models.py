# Importing every model registers it on Base.metadata and lets the string
# references in relationship() resolve.
from app.models.user_db.user_db import User
from app.models.course_db.course_db import Course, CourseEnrollment
from app.models.event_db.venue_db import Venue
from app.models.event_db.category_db import Category
from app.models.event_db.event_db import Event
from app.models.event_db.resource_db import Resource
from app.models.registration_db.registration_db import Registration
from app.models.attendance_db.attendance_db import Attendance
from app.models.feedback_db.feedback_db import Feedback
from app.models.notification_db.notification_db import Notification
from app.models.reminder_db.reminder_db import Reminder

__all__ = [
    "User",
    "Course",
    "CourseEnrollment",
    "Venue",
    "Category",
    "Event",
    "Resource",
    "Registration",
    "Attendance",
    "Feedback",
    "Notification",
    "Reminder",
]
