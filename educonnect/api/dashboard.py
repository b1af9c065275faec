from typing import List

from fastapi import APIRouter, Depends

from educonnect.database import get_storage
from educonnect.models import User, UserRole
from educonnect.schemas import StudentCourse, StudentDashboard, TutorDashboard
from educonnect.services import dashboard_service
from educonnect.storage import MemStorage
from educonnect.utils.security import require_role

router = APIRouter(tags=["Dashboards"])


# ======================
# STUDENT
# ======================
@router.get("/student/dashboard", response_model=StudentDashboard)
async def student_dashboard(
    current_user: User = Depends(require_role(UserRole.STUDENT)),
    storage: MemStorage = Depends(get_storage)
):
    """Bookings and notifications for the current student."""
    return dashboard_service.student_dashboard(storage, current_user)


@router.get("/student/courses", response_model=List[StudentCourse])
async def student_courses(
    current_user: User = Depends(require_role(UserRole.STUDENT)),
    storage: MemStorage = Depends(get_storage)
):
    """Confirmed courses, each with the student's review if one exists."""
    return dashboard_service.student_courses(storage, current_user)


# ======================
# TUTOR
# ======================
@router.get("/tutor/dashboard", response_model=TutorDashboard)
async def tutor_dashboard(
    current_user: User = Depends(require_role(UserRole.TUTOR)),
    storage: MemStorage = Depends(get_storage)
):
    return dashboard_service.tutor_dashboard(storage, current_user)
