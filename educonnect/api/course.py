# educonnect/api/course.py
"""
Course API Router

Endpoints:
- GET /courses/ - Published catalogue
- GET /courses/subjects - Subject list
- GET /courses/subject/{subject} - Published courses in a subject
- GET /courses/{course_id} - Course detail with tutor and reviews
- POST /courses/ - Create a course (approved tutors)
- PATCH /courses/{course_id} - Update a course (owner or admin)
- DELETE /courses/{course_id} - Delete a course and its bookings and reviews
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from educonnect.database import get_storage
from educonnect.errors import AppError
from educonnect.models import User, UserRole
from educonnect.schemas import (
    CourseCreateRequest,
    CourseDetail,
    CourseListItem,
    CourseResponse,
    CourseUpdateRequest,
)
from educonnect.services import course_service
from educonnect.storage import MemStorage
from educonnect.utils.security import require_role

router = APIRouter(prefix="/courses", tags=["Courses"])
logger = logging.getLogger(__name__)


# ======================
# CATALOGUE
# ======================
@router.get("/", response_model=List[CourseListItem])
async def list_courses(
    subject: Optional[str] = Query(None),
    storage: MemStorage = Depends(get_storage)
):
    return course_service.list_catalogue(storage, subject=subject)


@router.get("/subjects", response_model=List[str])
async def list_subjects(storage: MemStorage = Depends(get_storage)):
    return storage.list_subjects()


@router.get("/subject/{subject}", response_model=List[CourseListItem])
async def list_courses_by_subject(subject: str, storage: MemStorage = Depends(get_storage)):
    return course_service.list_catalogue(storage, subject=subject)


@router.get("/{course_id}", response_model=CourseDetail)
async def get_course(course_id: int, storage: MemStorage = Depends(get_storage)):
    try:
        return course_service.get_course_detail(storage, course_id)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


# ======================
# TUTOR OPERATIONS
# ======================
@router.post("/", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
async def create_course(
    course: CourseCreateRequest,
    current_user: User = Depends(require_role(UserRole.TUTOR)),
    storage: MemStorage = Depends(get_storage)
):
    """
    Create a course owned by the current tutor.

    The tutor account must be approved. The admin is notified.
    """
    try:
        return course_service.create_course(storage, tutor=current_user, data=course)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        logger.exception("Course creation failed for tutor %s", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create course"
        )


@router.patch("/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: int,
    course_update: CourseUpdateRequest,
    current_user: User = Depends(require_role(UserRole.TUTOR, UserRole.ADMIN)),
    storage: MemStorage = Depends(get_storage)
):
    try:
        return course_service.update_course(
            storage,
            user=current_user,
            course_id=course_id,
            patch=course_update,
        )
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        logger.exception("Course update failed for course %s", course_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update course"
        )


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: int,
    current_user: User = Depends(require_role(UserRole.TUTOR, UserRole.ADMIN)),
    storage: MemStorage = Depends(get_storage)
):
    """Delete a course together with its bookings and reviews."""
    try:
        course_service.delete_course(storage, user=current_user, course_id=course_id)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception:
        logger.exception("Course deletion failed for course %s", course_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete course"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
