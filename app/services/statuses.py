from enum import Enum


class EventStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class RegistrationStatus(str, Enum):
    registered = "registered"
    cancelled = "cancelled"


class NotificationType(str, Enum):
    general = "general"
    event_update = "event_update"
