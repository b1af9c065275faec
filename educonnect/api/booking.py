import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from educonnect.database import get_storage
from educonnect.errors import AppError
from educonnect.models import User, UserRole
from educonnect.schemas import BookingCreateRequest, BookingDetail, BookingResponse, BookingStatusUpdate
from educonnect.services import booking_service
from educonnect.storage import MemStorage
from educonnect.utils.security import require_role

router = APIRouter(prefix="/bookings", tags=["Bookings"])
logger = logging.getLogger(__name__)


# ======================
# STUDENT: BOOK A COURSE
# ======================
@router.post("/", response_model=BookingDetail, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking: BookingCreateRequest,
    current_user: User = Depends(require_role(UserRole.STUDENT)),
    storage: MemStorage = Depends(get_storage)
):
    try:
        created = booking_service.request_booking(
            storage,
            student=current_user,
            course_id=booking.course_id,
            session_date=booking.session_date,
        )
        return booking_service.describe_booking(storage, created)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        logger.exception("Booking failed for student %s", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create booking"
        )


@router.get("/my", response_model=List[BookingDetail])
async def get_my_bookings(
    current_user: User = Depends(require_role(UserRole.STUDENT)),
    storage: MemStorage = Depends(get_storage)
):
    return booking_service.get_student_bookings(storage, current_user.id)


# ======================
# TUTOR: DECIDE ON A BOOKING
# ======================
@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: int,
    update: BookingStatusUpdate,
    current_user: User = Depends(require_role(UserRole.TUTOR)),
    storage: MemStorage = Depends(get_storage)
):
    """Confirm or reject a booking for one of the tutor's courses."""
    try:
        return booking_service.update_booking_status(
            storage,
            tutor=current_user,
            booking_id=booking_id,
            status=update.status,
            session_date=update.session_date,
        )
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        logger.exception("Status update failed for booking %s", booking_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update booking"
        )
