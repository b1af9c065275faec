# educonnect/services/review_service.py
"""
Review Service Layer
Business logic for review submission and course rating management
"""

import logging
from typing import Any, Dict, List, Optional

from educonnect.errors import NotFoundError, PermissionDeniedError
from educonnect.models import User, UserRole
from educonnect.services.notification_service import MutationKind, fan_out
from educonnect.storage import MemStorage

logger = logging.getLogger(__name__)


# ======================
# REVIEW SUBMISSION
# ======================

def submit_review(
    storage: MemStorage,
    *,
    student: User,
    course_id: int,
    rating: int,
    review_text: Optional[str] = None
) -> Dict[str, Any]:
    """
    Submit a review for a course the student has a confirmed booking for.

    Creates the review, which recomputes the course rating, and notifies
    the course's tutor.

    Args:
        storage: Entity storage
        student: Reviewing student
        course_id: Course identifier
        rating: Rating value (1-5)
        review_text: Optional text

    Returns:
        Review fields plus the course's new average rating

    Raises:
        NotFoundError: course does not exist
        NotEnrolledError: no booking for this course
        BookingNotConfirmedError: booking is not confirmed yet
        DuplicateReviewError: course already reviewed by this student
    """
    course = storage.get_course(course_id)
    if not course:
        raise NotFoundError("Course not found")

    review = storage.create_review_if_eligible(
        student_id=student.id,
        course_id=course_id,
        rating=rating,
        review_text=review_text,
    )
    course = storage.get_course(course_id)

    fan_out(
        storage,
        MutationKind.REVIEW_CREATED,
        related_id=review.id,
        recipients={"tutor": course.tutor_id},
        rating=review.rating,
        course_title=course.title,
    )

    return {
        **review.model_dump(),
        "average_rating": course.average_rating,
    }


def delete_review(
    storage: MemStorage,
    *,
    review_id: int,
    user: User,
) -> Dict[str, Any]:
    """
    Delete a review and recompute its course rating.

    Args:
        storage: Entity storage
        review_id: Review identifier
        user: User attempting deletion (author or admin)

    Raises:
        NotFoundError: review does not exist
        PermissionDeniedError: user is neither the author nor an admin
    """
    review = storage.get_review(review_id)
    if not review:
        raise NotFoundError("Review not found")

    if user.role != UserRole.ADMIN and review.student_id != user.id:
        raise PermissionDeniedError("You can only delete your own reviews")

    storage.delete_review(review_id)
    course = storage.get_course(review.course_id)

    return {
        "review_id": review_id,
        "course_id": review.course_id,
        "average_rating": course.average_rating if course else 0.0,
        "message": "Review deleted successfully",
    }


# ======================
# REVIEW RETRIEVAL
# ======================

def get_course_reviews(storage: MemStorage, course_id: int) -> List[Dict[str, Any]]:
    """Reviews of a course with reviewer names."""
    reviews = []
    for review in storage.list_reviews(course_id=course_id):
        student = storage.get_user(review.student_id)
        reviews.append({
            **review.model_dump(),
            "student_name": student.name if student else "Unknown Student",
        })
    return reviews


# ======================
# ADMIN OPERATIONS
# ======================

def recalculate_all_ratings(storage: MemStorage) -> Dict[str, Any]:
    """Recompute every course's average rating (admin maintenance)."""
    courses = storage.list_courses()
    for course in courses:
        storage.recompute_course_rating(course.id)
    logger.info("Recalculated ratings for %d courses", len(courses))

    return {
        "total_courses": len(courses),
        "updated_count": len(courses),
        "message": "Rating recalculation complete",
    }
