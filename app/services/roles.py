from enum import Enum


class Role(str, Enum):
    student = "student"
    organizer = "organizer"
    admin = "admin"
