from datetime import datetime, UTC

import pytest

from educonnect.errors import DuplicateBookingError, NotFoundError, PermissionDeniedError, ValidationError
from educonnect.models import BookingStatus, UserRole
from educonnect.services import booking_service


@pytest.fixture
def setup(make_user, make_course):
    tutor = make_user(UserRole.TUTOR, name="Tina")
    student = make_user(name="Sam")
    course = make_course(tutor, title="Physics")
    return tutor, student, course


def test_request_booking_notifies_both_sides(storage, setup):
    tutor, student, course = setup

    booking = booking_service.request_booking(storage, student=student, course_id=course.id)

    assert booking.status == BookingStatus.PENDING
    tutor_notes = storage.list_notifications(tutor.id)
    student_notes = storage.list_notifications(student.id)
    assert len(tutor_notes) == 1 and len(student_notes) == 1
    assert tutor_notes[0].message == 'New booking request from Sam for your course "Physics"'
    assert tutor_notes[0].related_id == booking.id
    assert "pending tutor approval" in student_notes[0].message


def test_duplicate_booking_sends_nothing(storage, setup):
    _, student, course = setup
    booking_service.request_booking(storage, student=student, course_id=course.id)

    with pytest.raises(DuplicateBookingError):
        booking_service.request_booking(storage, student=student, course_id=course.id)
    assert len(storage.list_notifications(student.id)) == 1


def test_request_booking_unknown_course(storage, setup):
    _, student, _ = setup
    with pytest.raises(NotFoundError, match="Course not found"):
        booking_service.request_booking(storage, student=student, course_id=404)


def test_confirm_sets_session_date_and_notifies_student(storage, setup):
    tutor, student, course = setup
    booking = booking_service.request_booking(storage, student=student, course_id=course.id)
    when = datetime(2026, 11, 2, 15, 0, tzinfo=UTC)

    updated = booking_service.update_booking_status(
        storage,
        tutor=tutor,
        booking_id=booking.id,
        status=BookingStatus.CONFIRMED,
        session_date=when,
    )

    assert updated.status == BookingStatus.CONFIRMED
    assert updated.session_date == when
    latest = storage.list_notifications(student.id)[0]
    assert latest.type == "confirmation"
    assert latest.message == 'Your booking for "Physics" has been confirmed'


def test_reject_ignores_session_date_and_sends_nothing(storage, setup):
    tutor, student, course = setup
    booking = booking_service.request_booking(storage, student=student, course_id=course.id)

    updated = booking_service.update_booking_status(
        storage,
        tutor=tutor,
        booking_id=booking.id,
        status=BookingStatus.REJECTED,
        session_date=datetime(2026, 11, 2, tzinfo=UTC),
    )

    assert updated.status == BookingStatus.REJECTED
    assert updated.session_date is None
    assert len(storage.list_notifications(student.id)) == 1


def test_only_owning_tutor_can_update(storage, make_user, setup):
    _, student, course = setup
    stranger = make_user(UserRole.TUTOR)
    booking = booking_service.request_booking(storage, student=student, course_id=course.id)

    with pytest.raises(PermissionDeniedError):
        booking_service.update_booking_status(
            storage, tutor=stranger, booking_id=booking.id, status=BookingStatus.CONFIRMED
        )
    with pytest.raises(NotFoundError):
        booking_service.update_booking_status(
            storage, tutor=stranger, booking_id=99, status=BookingStatus.CONFIRMED
        )
    assert storage.get_booking(booking.id).status == BookingStatus.PENDING


def test_describe_booking_has_names_only(storage, setup):
    tutor, student, course = setup
    booking = booking_service.request_booking(storage, student=student, course_id=course.id)

    view = booking_service.describe_booking(storage, booking)

    assert view["course"] == {"id": course.id, "title": "Physics", "subject": course.subject}
    assert view["tutor"]["name"] == "Tina"
    assert view["student"] == {"id": student.id, "name": "Sam", "email": student.email}
    assert "password_hash" not in str(view)


def test_tutor_cannot_reject_a_reviewed_booking(storage, setup):
    tutor, student, course = setup
    booking = booking_service.request_booking(storage, student=student, course_id=course.id)
    booking_service.update_booking_status(
        storage, tutor=tutor, booking_id=booking.id, status=BookingStatus.CONFIRMED
    )
    storage.create_review_if_eligible(student.id, course.id, 4)

    with pytest.raises(ValidationError, match="must stay confirmed"):
        booking_service.update_booking_status(
            storage, tutor=tutor, booking_id=booking.id, status=BookingStatus.REJECTED
        )
    assert storage.get_booking(booking.id).status == BookingStatus.CONFIRMED
    assert storage.list_reviews(course_id=course.id)[0].rating == 4
