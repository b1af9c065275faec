from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictBool

from educonnect.models import UserRole


# ======================
# USER DISPLAY (credential fields never leave the server)
# ======================

class UserPublic(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    is_approved: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    """Compact user reference embedded in course and booking views."""
    id: int
    name: str
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    message: str
    user: UserPublic


# ======================
# ADMIN
# ======================

class TutorApprovalRequest(BaseModel):
    is_approved: StrictBool


class PlatformStatistics(BaseModel):
    total_students: int
    total_tutors: int
    total_courses: int
    total_bookings: int
    confirmed_bookings: int
    total_reviews: int
