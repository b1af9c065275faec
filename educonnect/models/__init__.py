# educonnect/models/__init__.py
# Entity records held by the in-memory storage, with their create and patch types
from .user import User, UserCreate, UserPatch, UserRole
from .course import Course, CourseCreate, CoursePatch
from .booking import Booking, BookingCreate, BookingPatch, BookingStatus
from .review import Review, ReviewCreate
from .notification import Notification, NotificationCreate, NotificationPatch

__all__ = [
    "User",
    "UserCreate",
    "UserPatch",
    "UserRole",
    "Course",
    "CourseCreate",
    "CoursePatch",
    "Booking",
    "BookingCreate",
    "BookingPatch",
    "BookingStatus",
    "Review",
    "ReviewCreate",
    "Notification",
    "NotificationCreate",
    "NotificationPatch",
]
