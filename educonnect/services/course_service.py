# educonnect/services/course_service.py
"""
Course Service Layer
Catalogue views plus tutor-owned course creation, editing and deletion
"""

from typing import Any, Dict, List, Optional

from educonnect.errors import NotFoundError, PermissionDeniedError
from educonnect.models import Course, User, UserRole
from educonnect.services.notification_service import MutationKind, fan_out
from educonnect.services.review_service import get_course_reviews
from educonnect.storage import MemStorage, Payload


def _ensure_can_manage(course: Course, user: User, action: str) -> None:
    if user.role != UserRole.ADMIN and course.tutor_id != user.id:
        raise PermissionDeniedError(f"You do not have permission to {action} this course")


# ======================
# CATALOGUE
# ======================

def list_catalogue(storage: MemStorage, subject: Optional[str] = None) -> List[Dict[str, Any]]:
    """Published courses with tutor name, review count and a rounded rating."""
    items = []
    for course in storage.list_courses(subject=subject, published=True):
        tutor = storage.get_user(course.tutor_id)
        reviews = storage.list_reviews(course_id=course.id)
        items.append({
            **course.model_dump(),
            "average_rating": round(course.average_rating, 1),
            "tutor_name": tutor.name if tutor else "Unknown Tutor",
            "review_count": len(reviews),
        })
    return items


def get_course_detail(storage: MemStorage, course_id: int) -> Dict[str, Any]:
    course = storage.get_course(course_id)
    if not course:
        raise NotFoundError("Course not found")

    tutor = storage.get_user(course.tutor_id)
    return {
        **course.model_dump(),
        "tutor": {"id": tutor.id, "name": tutor.name, "email": tutor.email} if tutor else None,
        "reviews": get_course_reviews(storage, course_id),
    }


def list_courses_with_tutors(storage: MemStorage) -> List[Dict[str, Any]]:
    """Every course, published or not, for the admin listing."""
    items = []
    for course in storage.list_courses():
        tutor = storage.get_user(course.tutor_id)
        items.append({
            **course.model_dump(),
            "tutor_name": tutor.name if tutor else "Unknown Tutor",
            "review_count": len(storage.list_reviews(course_id=course.id)),
        })
    return items


# ======================
# TUTOR OPERATIONS
# ======================

def create_course(storage: MemStorage, *, tutor: User, data: Payload) -> Course:
    """
    Create a course owned by ``tutor`` and tell the admin about it.

    Raises:
        PermissionDeniedError: tutor account not approved yet
        ValidationError: missing or malformed course fields
    """
    if not tutor.is_approved:
        raise PermissionDeniedError("Your tutor account is pending approval")

    fields = data.model_dump() if hasattr(data, "model_dump") else dict(data)
    course = storage.create_course(**{**fields, "tutor_id": tutor.id})

    fan_out(
        storage,
        MutationKind.COURSE_CREATED,
        related_id=course.id,
        course_title=course.title,
        tutor_name=tutor.name,
    )
    return course


def update_course(storage: MemStorage, *, user: User, course_id: int, patch: Payload) -> Course:
    course = storage.get_course(course_id)
    if not course:
        raise NotFoundError("Course not found")
    _ensure_can_manage(course, user, "update")
    return storage.update_course(course_id, patch)


def delete_course(storage: MemStorage, *, user: User, course_id: int) -> bool:
    """Cascade-delete a course owned by ``user`` (or any course for admins)."""
    course = storage.get_course(course_id)
    if not course:
        raise NotFoundError("Course not found")
    _ensure_can_manage(course, user, "delete")
    return storage.delete_course(course_id)
