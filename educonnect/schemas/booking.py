from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from educonnect.models import BookingStatus
from educonnect.schemas.user import UserSummary

# ======================
# BOOKING REQUEST MODELS
# ======================

class BookingCreateRequest(BaseModel):
    course_id: int
    session_date: Optional[datetime] = None

class BookingStatusUpdate(BaseModel):
    status: BookingStatus
    # Only applied when the booking is confirmed
    session_date: Optional[datetime] = None

# ======================
# BOOKING RESPONSE MODELS
# ======================

class BookingResponse(BaseModel):
    id: int
    course_id: int
    student_id: int
    status: BookingStatus
    booking_time: datetime
    session_date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CourseRef(BaseModel):
    id: int
    title: str
    subject: str

    model_config = ConfigDict(from_attributes=True)


class BookingDetail(BookingResponse):
    """Booking with the names needed by dashboards and admin listings."""
    course: Optional[CourseRef] = None
    student: Optional[UserSummary] = None
    tutor: Optional[UserSummary] = None
