from datetime import datetime, UTC

import pytest

from educonnect.errors import (
    BookingNotConfirmedError,
    DuplicateBookingError,
    DuplicateReviewError,
    NotEnrolledError,
    NotFoundError,
    ValidationError,
)
from educonnect.models import BookingStatus, UserRole
from educonnect.storage import EntityKind, MemStorage


# ======================
# KEYS & SNAPSHOTS
# ======================

def test_ids_are_per_kind_and_increase(storage, make_user, make_course):
    tutor = make_user(UserRole.TUTOR)
    student = make_user()
    course_a = make_course(tutor, title="A")
    course_b = make_course(tutor, title="B")

    assert (tutor.id, student.id) == (1, 2)
    assert (course_a.id, course_b.id) == (1, 2)


def test_rejected_insert_does_not_consume_an_id(storage, make_user, make_course):
    tutor = make_user(UserRole.TUTOR)
    student = make_user()
    course = make_course(tutor)

    first = storage.create_booking_if_absent(student.id, course.id)
    with pytest.raises(DuplicateBookingError):
        storage.create_booking_if_absent(student.id, course.id)

    other = make_course(tutor, title="Geometry")
    second = storage.create_booking_if_absent(student.id, other.id)
    assert second.id == first.id + 1


def test_ids_are_not_reused_after_delete(storage, make_user, make_course):
    tutor = make_user(UserRole.TUTOR)
    course = make_course(tutor)
    storage.delete_course(course.id)

    assert make_course(tutor).id == course.id + 1


def test_lists_are_snapshots(storage, make_user, make_course):
    tutor = make_user(UserRole.TUTOR)
    make_course(tutor)
    courses = storage.list_courses()

    make_course(tutor, title="Later")
    assert len(courses) == 1

    courses.clear()
    assert len(storage.list_courses()) == 2


def test_booking_list_survives_cascade_delete(storage, make_user, make_course):
    course = make_course(make_user(UserRole.TUTOR))
    booking = storage.create_booking_if_absent(make_user().id, course.id)
    bookings = storage.list_bookings(course_id=course.id)

    storage.delete_course(course.id)

    assert bookings == [booking]
    assert storage.list_bookings() == []


def test_update_does_not_change_earlier_reads(storage, make_user, make_course):
    tutor = make_user(UserRole.TUTOR)
    course = make_course(tutor, title="Before")

    storage.update_course(course.id, {"title": "After"})

    assert course.title == "Before"
    assert storage.get_course(course.id).title == "After"


def test_get_by_id_absent_returns_none(storage):
    assert storage.get_by_id(EntityKind.COURSE, 99) is None
    assert storage.get_user(99) is None


def test_list_entities_with_predicate(storage, make_user):
    make_user(UserRole.TUTOR)
    make_user()
    make_user()

    students = storage.list_entities(EntityKind.USER, lambda u: u.role == UserRole.STUDENT)
    assert [u.id for u in students] == [2, 3]


# ======================
# USERS
# ======================

def test_email_is_normalized_and_unique(storage):
    user = storage.create_user(name="Ann", email="  Ann@Test.EDU ", password_hash="h")
    assert user.email == "ann@test.edu"
    assert storage.get_user_by_email("ANN@test.edu").id == user.id

    with pytest.raises(ValidationError, match="Email already registered"):
        storage.create_user(name="Ann 2", email="ann@test.edu", password_hash="h")


def test_approval_defaults_by_role(storage):
    student = storage.create_user(name="S", email="s@test.edu", password_hash="h")
    tutor = storage.create_user(name="T", email="t@test.edu", password_hash="h", role=UserRole.TUTOR)
    admin = storage.create_user(name="A", email="a@test.edu", password_hash="h", role=UserRole.ADMIN)

    assert student.is_approved is True
    assert tutor.is_approved is False
    assert admin.is_approved is True


def test_create_rejects_unknown_fields(storage):
    with pytest.raises(ValidationError):
        storage.create_user(name="X", email="x@test.edu", password_hash="h", is_admin=True)


def test_patch_rejects_fields_outside_patch_type(storage, make_user):
    user = make_user()
    with pytest.raises(ValidationError):
        storage.update(EntityKind.USER, user.id, {"role": "Admin"})
    assert storage.get_user(user.id).role == UserRole.STUDENT


def test_update_missing_record(storage):
    with pytest.raises(NotFoundError, match="User with ID 5 not found"):
        storage.update(EntityKind.USER, 5, {"name": "Ghost"})


# ======================
# COURSES
# ======================

def test_course_requires_existing_tutor(storage, make_user):
    student = make_user()
    base = {
        "title": "T",
        "description": "D",
        "subject": "Science",
        "category": "Beginner",
        "price": 10,
    }
    with pytest.raises(NotFoundError):
        storage.create_course(**base, tutor_id=42)
    with pytest.raises(ValidationError):
        storage.create_course(**base, tutor_id=student.id)
    assert storage.list_courses() == []


def test_new_course_starts_unrated(make_user, make_course):
    course = make_course(make_user(UserRole.TUTOR))
    assert course.average_rating == 0.0
    assert course.published is True


def test_negative_price_rejected(make_user, make_course):
    with pytest.raises(ValidationError):
        make_course(make_user(UserRole.TUTOR), price=-1)


def test_list_courses_filters(storage, make_user, make_course):
    t1 = make_user(UserRole.TUTOR)
    t2 = make_user(UserRole.TUTOR)
    make_course(t1, subject="Science")
    make_course(t1, subject="Mathematics", published=False)
    make_course(t2, subject="Science")

    assert len(storage.list_courses(subject="Science")) == 2
    assert len(storage.list_courses(tutor_id=t1.id)) == 2
    assert len(storage.list_courses(published=True)) == 2


def test_delete_course_cascades(storage, make_user, make_course, confirmed_booking):
    tutor = make_user(UserRole.TUTOR)
    s1, s2 = make_user(), make_user()
    course = make_course(tutor)
    other = make_course(tutor, title="Other")

    confirmed_booking(s1, course)
    storage.create_booking_if_absent(s2.id, course.id)
    storage.create_review_if_eligible(s1.id, course.id, 4)
    kept = storage.create_booking_if_absent(s1.id, other.id)

    assert storage.delete(EntityKind.COURSE, course.id) is True

    assert storage.get_course(course.id) is None
    assert storage.list_bookings(course_id=course.id) == []
    assert storage.list_reviews(course_id=course.id) == []
    assert storage.list_bookings() == [kept]


def test_delete_missing_course_returns_false(storage):
    assert storage.delete_course(7) is False


def test_delete_unsupported_kind(storage, make_user):
    user = make_user()
    with pytest.raises(ValidationError):
        storage.delete(EntityKind.USER, user.id)
    assert storage.get_user(user.id) is not None


# ======================
# BOOKINGS
# ======================

def test_booking_starts_pending(storage, make_user, make_course):
    course = make_course(make_user(UserRole.TUTOR))
    student = make_user()

    booking = storage.create_booking_if_absent(student.id, course.id)

    assert booking.status == BookingStatus.PENDING
    assert booking.session_date is None
    assert booking.booking_time is not None


def test_booking_references_checked(storage, make_user, make_course):
    tutor = make_user(UserRole.TUTOR)
    course = make_course(tutor)
    student = make_user()

    with pytest.raises(NotFoundError):
        storage.create_booking_if_absent(student.id, 99)
    with pytest.raises(NotFoundError):
        storage.create_booking_if_absent(99, course.id)
    with pytest.raises(ValidationError, match="Only students"):
        storage.create_booking_if_absent(tutor.id, course.id)


def test_booking_status_has_no_transition_rules(storage, make_user, make_course):
    course = make_course(make_user(UserRole.TUTOR))
    booking = storage.create_booking_if_absent(make_user().id, course.id)

    storage.update_booking_status(booking.id, BookingStatus.REJECTED)
    updated = storage.update_booking_status(booking.id, BookingStatus.CONFIRMED)

    assert updated.status == BookingStatus.CONFIRMED


def test_reviewed_booking_must_stay_confirmed(storage, make_user, make_course, confirmed_booking):
    course = make_course(make_user(UserRole.TUTOR))
    student = make_user()
    booking = confirmed_booking(student, course)
    storage.create_review_if_eligible(student.id, course.id, 5)

    for status in (BookingStatus.REJECTED, BookingStatus.PENDING):
        with pytest.raises(ValidationError, match="must stay confirmed"):
            storage.update_booking_status(booking.id, status)

    assert storage.get_booking(booking.id).status == BookingStatus.CONFIRMED
    assert storage.get_course(course.id).average_rating == 5.0
    assert storage.update_booking_status(booking.id, BookingStatus.CONFIRMED).status == BookingStatus.CONFIRMED
    assert storage.update_booking_session_date(booking.id, datetime(2026, 12, 1, tzinfo=UTC)).session_date is not None


def test_session_date_update_keeps_status(storage, make_user, make_course):
    course = make_course(make_user(UserRole.TUTOR))
    booking = storage.create_booking_if_absent(make_user().id, course.id)
    when = datetime(2026, 12, 1, 9, 30, tzinfo=UTC)

    updated = storage.update_booking_session_date(booking.id, when)

    assert updated.session_date == when
    assert updated.status == BookingStatus.PENDING
    assert updated.booking_time == booking.booking_time


def test_list_bookings_by_tutor(storage, make_user, make_course):
    t1, t2 = make_user(UserRole.TUTOR), make_user(UserRole.TUTOR)
    student = make_user()
    storage.create_booking_if_absent(student.id, make_course(t1).id)
    storage.create_booking_if_absent(student.id, make_course(t2).id)

    assert len(storage.list_bookings(tutor_id=t1.id)) == 1
    assert len(storage.list_bookings(student_id=student.id)) == 2


# ======================
# REVIEWS & RATINGS
# ======================

def test_review_requires_booking(storage, make_user, make_course):
    course = make_course(make_user(UserRole.TUTOR))
    student = make_user()

    with pytest.raises(NotEnrolledError):
        storage.create_review_if_eligible(student.id, course.id, 5)


def test_review_requires_confirmed_booking(storage, make_user, make_course):
    course = make_course(make_user(UserRole.TUTOR))
    student = make_user()
    booking = storage.create_booking_if_absent(student.id, course.id)

    with pytest.raises(BookingNotConfirmedError):
        storage.create_review_if_eligible(student.id, course.id, 5)

    storage.update_booking_status(booking.id, BookingStatus.REJECTED)
    with pytest.raises(BookingNotConfirmedError):
        storage.create_review_if_eligible(student.id, course.id, 5)


@pytest.mark.parametrize("rating", [0, 6])
def test_review_rating_bounds(storage, make_user, make_course, confirmed_booking, rating):
    course = make_course(make_user(UserRole.TUTOR))
    student = make_user()
    confirmed_booking(student, course)

    with pytest.raises(ValidationError):
        storage.create_review_if_eligible(student.id, course.id, rating)
    assert storage.get_course(course.id).average_rating == 0.0


def test_reviews_cannot_be_updated(storage, make_user, make_course, confirmed_booking):
    course = make_course(make_user(UserRole.TUTOR))
    student = make_user()
    confirmed_booking(student, course)
    review = storage.create_review_if_eligible(student.id, course.id, 3)

    with pytest.raises(ValidationError):
        storage.update(EntityKind.REVIEW, review.id, {"rating": 5})


def test_average_rating_tracks_inserts_and_deletes(storage, make_user, make_course, confirmed_booking):
    course = make_course(make_user(UserRole.TUTOR))
    students = [make_user() for _ in range(3)]
    for student in students:
        confirmed_booking(student, course)

    reviews = [
        storage.create_review_if_eligible(s.id, course.id, rating)
        for s, rating in zip(students, [5, 4, 2])
    ]
    assert storage.get_course(course.id).average_rating == pytest.approx(11 / 3)

    storage.delete(EntityKind.REVIEW, reviews[0].id)
    assert storage.get_course(course.id).average_rating == pytest.approx(3.0)

    storage.delete_review(reviews[1].id)
    storage.delete_review(reviews[2].id)
    assert storage.get_course(course.id).average_rating == 0.0


def test_delete_missing_review_returns_false(storage):
    assert storage.delete_review(3) is False


# ======================
# NOTIFICATIONS & STATISTICS
# ======================

def test_notifications_newest_first_and_mark_all(storage, make_user):
    user = make_user()
    first = storage.create_notification(user.id, "one", "booking")
    second = storage.create_notification(user.id, "two", "booking", related_id=4)

    assert [n.id for n in storage.list_notifications(user.id)] == [second.id, first.id]
    assert storage.mark_all_notifications_read(user.id) == 2
    assert storage.list_notifications(user.id, unread_only=True) == []
    assert storage.mark_all_notifications_read(user.id) == 0


def test_platform_statistics(storage, make_user, make_course, confirmed_booking):
    tutor = make_user(UserRole.TUTOR)
    s1, s2 = make_user(), make_user()
    course = make_course(tutor)
    confirmed_booking(s1, course)
    storage.create_booking_if_absent(s2.id, course.id)
    storage.create_review_if_eligible(s1.id, course.id, 5)

    assert storage.platform_statistics() == {
        "total_students": 2,
        "total_tutors": 1,
        "total_courses": 1,
        "total_bookings": 2,
        "confirmed_bookings": 1,
        "total_reviews": 1,
    }


def test_subjects_list_is_a_copy(storage):
    subjects = storage.list_subjects()
    subjects.append("Astrology")
    assert "Astrology" not in storage.list_subjects()


# ======================
# END-TO-END STORAGE WALKTHROUGH
# ======================

def test_booking_review_and_cascade_walkthrough():
    storage = MemStorage()
    tutor = storage.create_user(name="T1", email="t1@test.edu", password_hash="h", role=UserRole.TUTOR)
    student = storage.create_user(name="S1", email="s1@test.edu", password_hash="h")
    course = storage.create_course(
        title="C1", description="d", subject="Science", category="Beginner", price=0, tutor_id=tutor.id
    )

    booking = storage.create_booking_if_absent(student.id, course.id)
    assert booking.status == BookingStatus.PENDING
    with pytest.raises(DuplicateBookingError):
        storage.create_booking_if_absent(student.id, course.id)

    storage.update_booking_status(booking.id, BookingStatus.CONFIRMED)
    storage.create_review_if_eligible(student.id, course.id, 5)
    assert storage.get_course(course.id).average_rating == 5.0

    with pytest.raises(DuplicateReviewError):
        storage.create_review_if_eligible(student.id, course.id, 1)
    assert storage.get_course(course.id).average_rating == 5.0

    storage.delete(EntityKind.COURSE, course.id)
    assert storage.get_by_id(EntityKind.COURSE, course.id) is None
    assert storage.get_booking(booking.id) is None
    assert storage.list_reviews() == []
