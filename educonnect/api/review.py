# educonnect/api/review.py
"""
Review & Rating API Router

Endpoints:
- POST /reviews/ - Submit a review
- GET /reviews/course/{course_id} - Reviews of a course
- GET /reviews/my - Reviews written by the current student
- DELETE /reviews/{review_id} - Delete a review
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from educonnect.database import get_storage
from educonnect.errors import AppError
from educonnect.models import User, UserRole
from educonnect.schemas import (
    ReviewCreateRequest,
    ReviewDeleteResponse,
    ReviewResponse,
    ReviewSubmitResponse,
    ReviewWithStudent,
)
from educonnect.services import review_service
from educonnect.storage import MemStorage
from educonnect.utils.security import get_current_user, require_role

router = APIRouter(prefix="/reviews", tags=["reviews"])
logger = logging.getLogger(__name__)


# ======================
# SUBMIT REVIEW
# ======================
@router.post("/", response_model=ReviewSubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_review(
    review: ReviewCreateRequest,
    current_user: User = Depends(require_role(UserRole.STUDENT)),
    storage: MemStorage = Depends(get_storage)
):
    """
    Submit a review for a booked course.

    Requirements:
    - The student's booking for the course must be confirmed
    - Only one review per student and course
    - Rating must be 1-5
    - Text max 1000 characters

    Returns:
        Review details with the course's updated average rating
    """
    try:
        return review_service.submit_review(
            storage,
            student=current_user,
            course_id=review.course_id,
            rating=review.rating,
            review_text=review.review_text,
        )
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        logger.exception("Review submission failed for course %s", review.course_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit review"
        )


# ======================
# GET COURSE REVIEWS
# ======================
@router.get("/course/{course_id}", response_model=List[ReviewWithStudent])
async def get_course_reviews(course_id: int, storage: MemStorage = Depends(get_storage)):
    """Public list of a course's reviews with reviewer names."""
    if not storage.get_course(course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    return review_service.get_course_reviews(storage, course_id)


# ======================
# GET STUDENT'S REVIEWS
# ======================
@router.get("/my", response_model=List[ReviewResponse])
async def get_my_reviews(
    current_user: User = Depends(require_role(UserRole.STUDENT)),
    storage: MemStorage = Depends(get_storage)
):
    return storage.list_reviews(student_id=current_user.id)


# ======================
# DELETE REVIEW
# ======================
@router.delete("/{review_id}", response_model=ReviewDeleteResponse)
async def delete_review(
    review_id: int,
    current_user: User = Depends(get_current_user),
    storage: MemStorage = Depends(get_storage)
):
    """
    Delete a review and recompute the course rating.

    Requirements:
    - User must be the review author or admin
    """
    try:
        return review_service.delete_review(storage, review_id=review_id, user=current_user)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        logger.exception("Review deletion failed for review %s", review_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete review"
        )
