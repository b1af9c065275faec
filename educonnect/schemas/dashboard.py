from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from educonnect.models import BookingStatus
from educonnect.schemas.booking import BookingDetail
from educonnect.schemas.course import CourseResponse
from educonnect.schemas.notification import NotificationResponse
from educonnect.schemas.review import ReviewResponse
from educonnect.schemas.user import UserSummary


# ======================
# STUDENT VIEWS
# ======================

class StudentDashboard(BaseModel):
    bookings: List[BookingDetail] = []
    notifications: List[NotificationResponse] = []


class BookingRef(BaseModel):
    id: int
    status: BookingStatus
    booking_time: datetime
    session_date: Optional[datetime] = None


class StudentCourse(CourseResponse):
    """A confirmed course with the student's own review, if any."""
    booking: BookingRef
    tutor: Optional[UserSummary] = None
    has_review: bool
    review: Optional[ReviewResponse] = None


# ======================
# TUTOR VIEWS
# ======================

class TutorCourse(CourseResponse):
    bookings: List[BookingDetail] = []
    total_bookings: int = 0


class TutorDashboard(BaseModel):
    courses: List[TutorCourse] = []
    total_courses: int
    total_bookings: int
    pending_bookings: int
    confirmed_bookings: int
    avg_rating: float
    total_reviews: int
    notifications: List[NotificationResponse] = []
