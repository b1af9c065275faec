import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from educonnect.database import get_storage
from educonnect.errors import AppError
from educonnect.models import User, UserRole
from educonnect.schemas import (
    BookingDetail,
    CourseListItem,
    PlatformStatistics,
    RatingRecalculationResponse,
    TutorApprovalRequest,
    UserPublic,
)
from educonnect.services import booking_service, course_service, review_service, user_service
from educonnect.storage import MemStorage
from educonnect.utils.security import require_role

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)

require_admin = require_role(UserRole.ADMIN)


@router.get("/statistics", response_model=PlatformStatistics)
async def get_statistics(
    current_user: User = Depends(require_admin),
    storage: MemStorage = Depends(get_storage)
):
    return storage.platform_statistics()


# ======================
# USERS
# ======================
@router.get("/users", response_model=List[UserPublic])
async def list_users(
    role: Optional[UserRole] = Query(None),
    current_user: User = Depends(require_admin),
    storage: MemStorage = Depends(get_storage)
):
    return storage.list_users(role)


@router.patch("/users/{user_id}/approve", response_model=UserPublic)
async def approve_tutor(
    user_id: int,
    approval: TutorApprovalRequest,
    current_user: User = Depends(require_admin),
    storage: MemStorage = Depends(get_storage)
):
    """Approve or reject a tutor account; the tutor is notified either way."""
    try:
        return user_service.set_tutor_approval(
            storage,
            user_id=user_id,
            is_approved=approval.is_approved,
        )
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        logger.exception("Approval update failed for user %s", user_id)
        raise HTTPException(status_code=500, detail="Failed to update tutor approval")


# ======================
# COURSES & BOOKINGS
# ======================
@router.get("/courses", response_model=List[CourseListItem])
async def list_all_courses(
    current_user: User = Depends(require_admin),
    storage: MemStorage = Depends(get_storage)
):
    return course_service.list_courses_with_tutors(storage)


@router.get("/bookings", response_model=List[BookingDetail])
async def list_all_bookings(
    current_user: User = Depends(require_admin),
    storage: MemStorage = Depends(get_storage)
):
    return booking_service.get_all_bookings(storage)


# ======================
# RATINGS MAINTENANCE
# ======================
@router.post("/ratings/recalculate", response_model=RatingRecalculationResponse)
async def recalculate_ratings(
    current_user: User = Depends(require_admin),
    storage: MemStorage = Depends(get_storage)
):
    """Recompute every course's average rating from its reviews."""
    try:
        return review_service.recalculate_all_ratings(storage)
    except Exception:
        logger.exception("Rating recalculation failed")
        raise HTTPException(status_code=500, detail="Failed to recalculate ratings")
