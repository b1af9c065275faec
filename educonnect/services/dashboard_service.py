from typing import Any, Dict

from educonnect.models import BookingStatus, User
from educonnect.services.booking_service import describe_booking, get_student_bookings
from educonnect.storage import MemStorage


def student_dashboard(storage: MemStorage, student: User) -> Dict[str, Any]:
    return {
        "bookings": get_student_bookings(storage, student.id),
        "notifications": storage.list_notifications(student.id),
    }


def student_courses(storage: MemStorage, student: User) -> list:
    """Courses with a confirmed booking, each flagged with the student's review."""
    items = []
    for booking in storage.list_bookings(student_id=student.id, status=BookingStatus.CONFIRMED):
        course = storage.get_course(booking.course_id)
        if not course:
            continue
        tutor = storage.get_user(course.tutor_id)
        review = storage.get_review_by_student_and_course(student.id, course.id)
        items.append({
            **course.model_dump(),
            "booking": {
                "id": booking.id,
                "status": booking.status,
                "booking_time": booking.booking_time,
                "session_date": booking.session_date,
            },
            "tutor": {"id": tutor.id, "name": tutor.name, "email": tutor.email} if tutor else None,
            "has_review": review is not None,
            "review": review.model_dump() if review else None,
        })
    return items


def tutor_dashboard(storage: MemStorage, tutor: User) -> Dict[str, Any]:
    courses = storage.list_courses(tutor_id=tutor.id)
    bookings = storage.list_bookings(tutor_id=tutor.id)

    course_views = []
    ratings = []
    for course in courses:
        course_bookings = [b for b in bookings if b.course_id == course.id]
        ratings.extend(r.rating for r in storage.list_reviews(course_id=course.id))
        course_views.append({
            **course.model_dump(),
            "bookings": [describe_booking(storage, b) for b in course_bookings],
            "total_bookings": len(course_bookings),
        })

    avg_rating = sum(ratings) / len(ratings) if ratings else 0.0
    return {
        "courses": course_views,
        "total_courses": len(courses),
        "total_bookings": len(bookings),
        "pending_bookings": sum(1 for b in bookings if b.status == BookingStatus.PENDING),
        "confirmed_bookings": sum(1 for b in bookings if b.status == BookingStatus.CONFIRMED),
        "avg_rating": round(avg_rating, 1),
        "total_reviews": len(ratings),
        "notifications": storage.list_notifications(tutor.id),
    }
