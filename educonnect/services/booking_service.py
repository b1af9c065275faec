# educonnect/services/booking_service.py
"""
Booking Service Layer
Booking requests, tutor decisions and the views built around bookings
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from educonnect.errors import NotFoundError, PermissionDeniedError
from educonnect.models import Booking, BookingStatus, User
from educonnect.services.notification_service import MutationKind, fan_out
from educonnect.storage import MemStorage

logger = logging.getLogger(__name__)


# ======================
# BOOKING REQUESTS
# ======================

def request_booking(
    storage: MemStorage,
    *,
    student: User,
    course_id: int,
    session_date: Optional[datetime] = None,
) -> Booking:
    """
    Book a course for a student and notify both parties.

    Raises:
        NotFoundError: course does not exist
        DuplicateBookingError: the student already booked this course
    """
    course = storage.get_course(course_id)
    if not course:
        raise NotFoundError("Course not found")

    booking = storage.create_booking_if_absent(
        student_id=student.id,
        course_id=course_id,
        session_date=session_date,
    )
    logger.info("New booking %s for course %s by student %s", booking.id, course_id, student.id)

    fan_out(
        storage,
        MutationKind.BOOKING_REQUESTED,
        related_id=booking.id,
        recipients={"tutor": course.tutor_id, "student": student.id},
        student_name=student.name,
        course_title=course.title,
    )
    return booking


def update_booking_status(
    storage: MemStorage,
    *,
    tutor: User,
    booking_id: int,
    status: BookingStatus,
    session_date: Optional[datetime] = None,
) -> Booking:
    """
    Set a booking's status on behalf of the tutor who owns the course.

    No transition rules apply; any status may follow any other. A session
    date is only recorded together with a confirmation.
    """
    booking = storage.get_booking(booking_id)
    if not booking:
        raise NotFoundError("Booking not found")

    course = storage.get_course(booking.course_id)
    if not course or course.tutor_id != tutor.id:
        raise PermissionDeniedError("You do not have permission to update this booking")

    patch: Dict[str, Any] = {"status": status}
    if session_date and status == BookingStatus.CONFIRMED:
        patch["session_date"] = session_date
    updated = storage.update_booking(booking_id, patch)

    if status == BookingStatus.CONFIRMED:
        fan_out(
            storage,
            MutationKind.BOOKING_CONFIRMED,
            related_id=booking_id,
            recipients={"student": booking.student_id},
            course_title=course.title,
        )
    return updated


# ======================
# BOOKING VIEWS
# ======================

def _user_summary(user: Optional[User]) -> Optional[Dict[str, Any]]:
    if not user:
        return None
    return {"id": user.id, "name": user.name, "email": user.email}


def describe_booking(storage: MemStorage, booking: Booking) -> Dict[str, Any]:
    """Booking fields plus course, student and tutor references."""
    course = storage.get_course(booking.course_id)
    tutor = storage.get_user(course.tutor_id) if course else None
    return {
        **booking.model_dump(),
        "course": (
            {"id": course.id, "title": course.title, "subject": course.subject}
            if course
            else None
        ),
        "student": _user_summary(storage.get_user(booking.student_id)),
        "tutor": _user_summary(tutor),
    }


def get_student_bookings(storage: MemStorage, student_id: int) -> List[Dict[str, Any]]:
    return [
        describe_booking(storage, booking)
        for booking in storage.list_bookings(student_id=student_id)
    ]


def get_all_bookings(storage: MemStorage) -> List[Dict[str, Any]]:
    return [describe_booking(storage, booking) for booking in storage.list_bookings()]
