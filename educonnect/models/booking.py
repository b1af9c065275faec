# educonnect/models/booking.py
import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class BookingStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    REJECTED = "Rejected"


class Booking(BaseModel):
    id: int
    course_id: int
    student_id: int
    status: BookingStatus = BookingStatus.PENDING
    booking_time: datetime
    session_date: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)


class BookingCreate(BaseModel):
    """New bookings always start Pending, so status is not accepted here."""
    course_id: int
    student_id: int
    session_date: Optional[datetime] = None

    model_config = ConfigDict(extra="forbid")


class BookingPatch(BaseModel):
    status: Optional[BookingStatus] = None
    session_date: Optional[datetime] = None

    model_config = ConfigDict(extra="forbid")
