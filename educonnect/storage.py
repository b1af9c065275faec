# educonnect/storage.py
"""
In-Memory Entity Storage

Single source of truth for users, courses, bookings, reviews and
notifications during the lifetime of the process. Each entity kind lives in
its own ``{id: record}`` dict with its own id counter. Records are frozen
pydantic models: updates store a re-validated merged copy, so records and
lists handed out earlier never change underneath the caller.

Cross-entity rules are enforced here, at the point of mutation:
- a course belongs to an existing tutor
- one booking per (student, course)
- one review per (student, course), only after a confirmed booking,
  and a reviewed booking stays confirmed
- course.average_rating follows its reviews
- deleting a course removes its bookings and reviews first

The course cascade is not atomic. A crash halfway through can leave
orphaned bookings or reviews; the store is rebuilt empty on restart.
"""

import enum
import itertools
import logging
from datetime import datetime, UTC
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Type, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from educonnect.errors import (
    BookingNotConfirmedError,
    DuplicateBookingError,
    DuplicateReviewError,
    NotEnrolledError,
    NotFoundError,
    ValidationError,
)
from educonnect.models import (
    Booking,
    BookingCreate,
    BookingPatch,
    BookingStatus,
    Course,
    CourseCreate,
    CoursePatch,
    Notification,
    NotificationCreate,
    NotificationPatch,
    Review,
    ReviewCreate,
    User,
    UserCreate,
    UserPatch,
    UserRole,
)

logger = logging.getLogger(__name__)

SUBJECTS = ["Mathematics", "Programming", "Science", "English", "Business Studies"]


class EntityKind(str, enum.Enum):
    USER = "User"
    COURSE = "Course"
    BOOKING = "Booking"
    REVIEW = "Review"
    NOTIFICATION = "Notification"


RECORD_TYPES: Dict[EntityKind, Type[BaseModel]] = {
    EntityKind.USER: User,
    EntityKind.COURSE: Course,
    EntityKind.BOOKING: Booking,
    EntityKind.REVIEW: Review,
    EntityKind.NOTIFICATION: Notification,
}

CREATE_TYPES: Dict[EntityKind, Type[BaseModel]] = {
    EntityKind.USER: UserCreate,
    EntityKind.COURSE: CourseCreate,
    EntityKind.BOOKING: BookingCreate,
    EntityKind.REVIEW: ReviewCreate,
    EntityKind.NOTIFICATION: NotificationCreate,
}

# Reviews are immutable once written
PATCH_TYPES: Dict[EntityKind, Type[BaseModel]] = {
    EntityKind.USER: UserPatch,
    EntityKind.COURSE: CoursePatch,
    EntityKind.BOOKING: BookingPatch,
    EntityKind.NOTIFICATION: NotificationPatch,
}

Payload = Union[Mapping[str, Any], BaseModel]


def _now() -> datetime:
    return datetime.now(UTC)


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def _validate(model: Type[BaseModel], data: Payload) -> BaseModel:
    """Coerce ``data`` into ``model``, raising our ValidationError on failure."""
    if isinstance(data, model):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc


class MemStorage:
    """Map-backed repository for every entity kind."""

    def __init__(self) -> None:
        self._tables: Dict[EntityKind, Dict[int, BaseModel]] = {kind: {} for kind in EntityKind}
        self._counters: Dict[EntityKind, Iterator[int]] = {
            kind: itertools.count(1) for kind in EntityKind
        }
        self._prepare: Dict[EntityKind, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
            EntityKind.USER: self._prepare_user,
            EntityKind.COURSE: self._prepare_course,
            EntityKind.BOOKING: self._prepare_booking,
            EntityKind.REVIEW: self._prepare_review,
            EntityKind.NOTIFICATION: self._prepare_notification,
        }

    # ======================
    # GENERIC OPERATIONS
    # ======================

    def get_by_id(self, kind: EntityKind, entity_id: int) -> Optional[BaseModel]:
        return self._tables[kind].get(entity_id)

    def list_entities(
        self,
        kind: EntityKind,
        predicate: Optional[Callable[[Any], bool]] = None,
    ) -> List[Any]:
        """Return a new list of records in insertion order."""
        records = self._tables[kind].values()
        if predicate is None:
            return list(records)
        return [record for record in records if predicate(record)]

    def insert(self, kind: EntityKind, data: Payload) -> Any:
        """
        Validate, default and store a new record.

        The id is drawn only after every check has passed, so a rejected
        insert never burns a key.

        Raises:
            ValidationError: missing or malformed fields, broken references
            NotFoundError: a referenced course or user does not exist
            DuplicateBookingError, NotEnrolledError, BookingNotConfirmedError,
            DuplicateReviewError: booking and review eligibility rules
        """
        fields = _validate(CREATE_TYPES[kind], data).model_dump()
        fields = self._prepare[kind](fields)
        fields["id"] = next(self._counters[kind])
        record = RECORD_TYPES[kind].model_validate(fields)
        self._tables[kind][record.id] = record
        logger.info("Created %s %s", kind.value, record.id)

        if kind is EntityKind.REVIEW:
            self.recompute_course_rating(record.course_id)
        return record

    def update(self, kind: EntityKind, entity_id: int, patch: Payload) -> Any:
        """
        Shallow-merge ``patch`` into the stored record, last write wins.

        There is no version check: two callers updating the same record
        race and the later call silently overwrites the earlier one.
        """
        patch_type = PATCH_TYPES.get(kind)
        if patch_type is None:
            raise ValidationError(f"{kind.value} records cannot be updated")

        current = self._tables[kind].get(entity_id)
        if current is None:
            raise NotFoundError(f"{kind.value} with ID {entity_id} not found")

        changes = _validate(patch_type, patch).model_dump(exclude_unset=True)
        merged = _validate(RECORD_TYPES[kind], {**current.model_dump(), **changes})
        if kind is EntityKind.BOOKING:
            self._check_booking_update(merged)
        self._tables[kind][entity_id] = merged
        return merged

    def delete(self, kind: EntityKind, entity_id: int) -> bool:
        if kind is EntityKind.COURSE:
            return self.delete_course(entity_id)
        if kind is EntityKind.REVIEW:
            return self.delete_review(entity_id)
        raise ValidationError(f"{kind.value} records cannot be deleted")

    # ======================
    # WRITE GUARDS & DEFAULTS
    # ======================

    def _prepare_user(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        fields["email"] = fields["email"].strip().lower()
        if self.get_user_by_email(fields["email"]):
            raise ValidationError("Email already registered")
        fields["is_approved"] = fields["role"] in (UserRole.STUDENT, UserRole.ADMIN)
        fields["created_at"] = _now()
        return fields

    def _prepare_course(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        tutor = self.get_user(fields["tutor_id"])
        if tutor is None:
            raise NotFoundError("Tutor not found")
        if tutor.role != UserRole.TUTOR:
            raise ValidationError(f"User {tutor.id} is not a tutor")
        fields["average_rating"] = 0.0
        fields["created_at"] = _now()
        return fields

    def _prepare_booking(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        if self.get_course(fields["course_id"]) is None:
            raise NotFoundError("Course not found")
        student = self.get_user(fields["student_id"])
        if student is None:
            raise NotFoundError("Student not found")
        if student.role != UserRole.STUDENT:
            raise ValidationError("Only students can book courses")
        if self.get_booking_by_student_and_course(fields["student_id"], fields["course_id"]):
            raise DuplicateBookingError()
        fields["status"] = BookingStatus.PENDING
        fields["booking_time"] = _now()
        return fields

    def _prepare_review(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        student_id, course_id = fields["student_id"], fields["course_id"]
        if self.get_course(course_id) is None:
            raise NotFoundError("Course not found")
        if self.get_user(student_id) is None:
            raise NotFoundError("Student not found")

        booking = self.get_booking_by_student_and_course(student_id, course_id)
        if booking is None:
            raise NotEnrolledError()
        if booking.status != BookingStatus.CONFIRMED:
            raise BookingNotConfirmedError()
        if self.get_review_by_student_and_course(student_id, course_id):
            raise DuplicateReviewError()

        fields["created_at"] = _now()
        return fields

    def _prepare_notification(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        fields["is_read"] = False
        fields["created_at"] = _now()
        return fields

    def _check_booking_update(self, booking: Booking) -> None:
        # a reviewed booking stays confirmed
        if booking.status == BookingStatus.CONFIRMED:
            return
        if self.get_review_by_student_and_course(booking.student_id, booking.course_id):
            raise ValidationError("Booking has a review and must stay confirmed")

    # ======================
    # USERS
    # ======================

    def get_user(self, user_id: int) -> Optional[User]:
        return self._tables[EntityKind.USER].get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = (email or "").strip().lower()
        for user in self._tables[EntityKind.USER].values():
            if user.email == wanted:
                return user
        return None

    def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        if role is None:
            return self.list_entities(EntityKind.USER)
        return self.list_entities(EntityKind.USER, lambda u: u.role == role)

    def create_user(self, **fields) -> User:
        return self.insert(EntityKind.USER, fields)

    def update_user_approval(self, user_id: int, is_approved: bool) -> User:
        return self.update(EntityKind.USER, user_id, {"is_approved": is_approved})

    # ======================
    # COURSES
    # ======================

    def get_course(self, course_id: int) -> Optional[Course]:
        return self._tables[EntityKind.COURSE].get(course_id)

    def list_courses(
        self,
        subject: Optional[str] = None,
        tutor_id: Optional[int] = None,
        published: Optional[bool] = None,
    ) -> List[Course]:
        def matches(course: Course) -> bool:
            if subject is not None and course.subject != subject:
                return False
            if tutor_id is not None and course.tutor_id != tutor_id:
                return False
            if published is not None and course.published != published:
                return False
            return True

        return self.list_entities(EntityKind.COURSE, matches)

    def create_course(self, **fields) -> Course:
        return self.insert(EntityKind.COURSE, fields)

    def update_course(self, course_id: int, patch: Payload) -> Course:
        return self.update(EntityKind.COURSE, course_id, patch)

    def delete_course(self, course_id: int) -> bool:
        """Remove a course after its bookings and reviews. False if absent."""
        if course_id not in self._tables[EntityKind.COURSE]:
            return False

        bookings = self.list_bookings(course_id=course_id)
        for booking in bookings:
            del self._tables[EntityKind.BOOKING][booking.id]

        reviews = self.list_reviews(course_id=course_id)
        for review in reviews:
            del self._tables[EntityKind.REVIEW][review.id]

        del self._tables[EntityKind.COURSE][course_id]
        logger.info(
            "Deleted course %s with %d bookings and %d reviews",
            course_id,
            len(bookings),
            len(reviews),
        )
        return True

    def recompute_course_rating(self, course_id: int) -> Course:
        ratings = [review.rating for review in self.list_reviews(course_id=course_id)]
        average = sum(ratings) / len(ratings) if ratings else 0.0
        return self.update(EntityKind.COURSE, course_id, {"average_rating": average})

    # ======================
    # BOOKINGS
    # ======================

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self._tables[EntityKind.BOOKING].get(booking_id)

    def get_booking_by_student_and_course(self, student_id: int, course_id: int) -> Optional[Booking]:
        for booking in self._tables[EntityKind.BOOKING].values():
            if booking.student_id == student_id and booking.course_id == course_id:
                return booking
        return None

    def list_bookings(
        self,
        student_id: Optional[int] = None,
        course_id: Optional[int] = None,
        tutor_id: Optional[int] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        tutor_course_ids = None
        if tutor_id is not None:
            tutor_course_ids = {c.id for c in self.list_courses(tutor_id=tutor_id)}

        def matches(booking: Booking) -> bool:
            if student_id is not None and booking.student_id != student_id:
                return False
            if course_id is not None and booking.course_id != course_id:
                return False
            if tutor_course_ids is not None and booking.course_id not in tutor_course_ids:
                return False
            if status is not None and booking.status != status:
                return False
            return True

        return self.list_entities(EntityKind.BOOKING, matches)

    def create_booking_if_absent(
        self,
        student_id: int,
        course_id: int,
        session_date: Optional[datetime] = None,
    ) -> Booking:
        return self.insert(
            EntityKind.BOOKING,
            {"student_id": student_id, "course_id": course_id, "session_date": session_date},
        )

    def update_booking(self, booking_id: int, patch: Payload) -> Booking:
        return self.update(EntityKind.BOOKING, booking_id, patch)

    def update_booking_status(self, booking_id: int, status: BookingStatus) -> Booking:
        return self.update(EntityKind.BOOKING, booking_id, {"status": status})

    def update_booking_session_date(self, booking_id: int, session_date: datetime) -> Booking:
        return self.update(EntityKind.BOOKING, booking_id, {"session_date": session_date})

    # ======================
    # REVIEWS
    # ======================

    def get_review(self, review_id: int) -> Optional[Review]:
        return self._tables[EntityKind.REVIEW].get(review_id)

    def get_review_by_student_and_course(self, student_id: int, course_id: int) -> Optional[Review]:
        for review in self._tables[EntityKind.REVIEW].values():
            if review.student_id == student_id and review.course_id == course_id:
                return review
        return None

    def list_reviews(
        self,
        course_id: Optional[int] = None,
        student_id: Optional[int] = None,
    ) -> List[Review]:
        def matches(review: Review) -> bool:
            if course_id is not None and review.course_id != course_id:
                return False
            if student_id is not None and review.student_id != student_id:
                return False
            return True

        return self.list_entities(EntityKind.REVIEW, matches)

    def create_review_if_eligible(
        self,
        student_id: int,
        course_id: int,
        rating: int,
        review_text: Optional[str] = None,
    ) -> Review:
        return self.insert(
            EntityKind.REVIEW,
            {
                "student_id": student_id,
                "course_id": course_id,
                "rating": rating,
                "review_text": review_text,
            },
        )

    def delete_review(self, review_id: int) -> bool:
        review = self._tables[EntityKind.REVIEW].pop(review_id, None)
        if review is None:
            return False
        if review.course_id in self._tables[EntityKind.COURSE]:
            self.recompute_course_rating(review.course_id)
        logger.info("Deleted review %s", review_id)
        return True

    # ======================
    # NOTIFICATIONS
    # ======================

    def get_notification(self, notification_id: int) -> Optional[Notification]:
        return self._tables[EntityKind.NOTIFICATION].get(notification_id)

    def list_notifications(self, user_id: int, unread_only: bool = False) -> List[Notification]:
        """Notifications for a user, newest first."""
        notifications = self.list_entities(
            EntityKind.NOTIFICATION,
            lambda n: n.user_id == user_id and not (unread_only and n.is_read),
        )
        return sorted(notifications, key=lambda n: (n.created_at, n.id), reverse=True)

    def create_notification(
        self,
        user_id: int,
        message: str,
        type: str,
        related_id: Optional[int] = None,
    ) -> Notification:
        return self.insert(
            EntityKind.NOTIFICATION,
            {"user_id": user_id, "message": message, "type": type, "related_id": related_id},
        )

    def mark_notification_read(self, notification_id: int) -> Notification:
        return self.update(EntityKind.NOTIFICATION, notification_id, {"is_read": True})

    def mark_all_notifications_read(self, user_id: int) -> int:
        count = 0
        for notification in self.list_notifications(user_id, unread_only=True):
            self.mark_notification_read(notification.id)
            count += 1
        return count

    # ======================
    # CATALOGUE & STATISTICS
    # ======================

    def list_subjects(self) -> List[str]:
        return list(SUBJECTS)

    def platform_statistics(self) -> Dict[str, int]:
        bookings = self.list_entities(EntityKind.BOOKING)
        return {
            "total_students": len(self.list_users(UserRole.STUDENT)),
            "total_tutors": len(self.list_users(UserRole.TUTOR)),
            "total_courses": len(self._tables[EntityKind.COURSE]),
            "total_bookings": len(bookings),
            "confirmed_bookings": sum(1 for b in bookings if b.status == BookingStatus.CONFIRMED),
            "total_reviews": len(self._tables[EntityKind.REVIEW]),
        }
